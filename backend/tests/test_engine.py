from decimal import Decimal
from typing import Annotated, Optional

import pytest

from envali import (
    ConstraintDeclaration,
    ConfigurationError,
    ConstraintTag,
    EntityTypeError,
    FieldTypeMismatchError,
    InvalidRangeError,
    NestedEntityCycleError,
    NestingTooDeepError,
    Severity,
    UnknownConstraintError,
    ValidatableEntity,
    ValidationEngine,
    InMemoryContentSource,
    constraints as c,
    validate,
)

from tests.entities import Account, Address, Customer, Left, Measurements, Node, Plain, Right, invalid_account


def test_entity_without_constraints_yields_empty_report(engine) -> None:
    report = engine.validate(Plain(name="", count=-1))

    assert report.is_empty()
    assert not report.has_error()


def test_valid_entity_yields_empty_report(engine) -> None:
    assert engine.validate(Account()).is_empty()


def test_every_failing_constraint_is_reported(engine) -> None:
    report = engine.validate(invalid_account())

    violations = report.get_errors(Account)
    assert [v.field for v in violations] == ["user_id", "age", "email"]
    assert [v.constraint for v in violations] == [
        ConstraintTag.NON_BLANK,
        ConstraintTag.RANGE_FROM_TO,
        ConstraintTag.MATCH,
    ]


def test_constraints_on_one_field_are_evaluated_independently(engine) -> None:
    report = engine.validate(Account(user_id=None))

    violations = report.get_errors(Account)
    assert [v.constraint for v in violations] == [ConstraintTag.NON_NULL, ConstraintTag.NON_BLANK]


@pytest.mark.parametrize("age, fails", [(-1, True), (0, False), (75, False), (150, False), (151, True)])
def test_range_from_to_is_inclusive(engine, age, fails) -> None:
    report = engine.validate(Account(age=age))

    assert report.has_error() is fails


def test_validation_is_deterministic(engine) -> None:
    customer = Customer(name="", address=Address(city=" "), previous=[Address(post_code="9")])

    first = engine.validate(customer)
    second = engine.validate(customer)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_module_level_validate_uses_default_engine() -> None:
    report = validate(invalid_account())

    assert len(report.get_errors(Account)) == 3


def test_default_severity_applies_when_none_is_configured() -> None:
    engine = ValidationEngine(content_source=InMemoryContentSource(), default_severity="unrecoverable")

    report = engine.validate(Account(age=-5))

    assert report.get_errors(Account)[0].severity == Severity.UNRECOVERABLE


def test_runtime_severity_is_reported_not_raised(engine) -> None:
    class Job(ValidatableEntity):
        retries: Annotated[int, c.positive(severity="runtime")] = 1

    report = engine.validate(Job(retries=0))

    violation = report.get_errors(Job)[0]
    assert violation.severity == Severity.RUNTIME
    assert report.summary == {"recoverable": 0, "unrecoverable": 0, "runtime": 1}


def test_numeric_kinds_keep_their_precision(engine) -> None:
    class Big(ValidatableEntity):
        counter: Annotated[int, c.range_to(2**63)] = 0

    assert engine.validate(Big(counter=2**63)).is_empty()
    assert engine.validate(Big(counter=2**63 + 1)).has_error()

    assert engine.validate(Measurements(price=Decimal("0.10"))).is_empty()
    assert engine.validate(Measurements(price=Decimal("0.30"))).is_empty()
    assert engine.validate(Measurements(price=Decimal("0.3000001"))).has_error()
    assert engine.validate(Measurements(ratio=1.0, whole=-10)).is_empty()
    assert engine.validate(Measurements(whole=11)).has_error()


# ── Nested entities ──


def test_nested_violation_mirrors_entity_graph(engine) -> None:
    report = engine.validate(Customer(address=Address(city="")))

    parent = report.get_errors(Customer)
    assert len(parent) == 1
    assert parent[0].field == "address"
    assert parent[0].severity == Severity.NESTED
    assert parent[0].element is None

    nested = parent[0].nested
    assert nested is not None
    assert len(nested.get_errors(Address)) == 1
    assert nested.get_errors(Address)[0].message == "city is required"


def test_nested_errors_are_reachable_from_root_report(engine) -> None:
    report = engine.validate(Customer(address=Address(city="")))

    assert [v.field for v in report.get_errors(Address)] == ["city"]


def test_valid_nested_entity_adds_no_violation(engine) -> None:
    assert engine.validate(Customer(address=Address())).is_empty()


def test_nested_collections_wrap_each_invalid_member(engine) -> None:
    customer = Customer(
        previous=[Address(), Address(post_code="200-0001"), Address(city="")],
        by_label={"home": Address(), "work": Address(city=" ")},
    )

    violations = engine.validate(customer).get_errors(Customer)

    assert [(v.field, v.element) for v in violations] == [
        ("previous", "1"),
        ("previous", "2"),
        ("by_label", "work"),
    ]
    assert all(v.nested.has_error() for v in violations)


def test_nested_report_depth_follows_graph(engine) -> None:
    root = Node(child=Node(child=Node(label="")))

    report = engine.validate(root)

    depths = [depth for _, _, depth in report.walk()]
    assert depths == [0, 1, 2]


def test_shared_nested_entity_is_not_a_cycle(engine) -> None:
    shared = Address(city="")
    customer = Customer(address=shared, previous=[shared])

    violations = engine.validate(customer).get_errors(Customer)

    assert len(violations) == 2


def test_self_cycle_raises_configuration_error(engine) -> None:
    node = Node()
    node.child = node

    with pytest.raises(NestedEntityCycleError):
        engine.validate(node)


def test_two_entity_cycle_raises_configuration_error(engine) -> None:
    left = Left()
    right = Right(left=left)
    left.right = right

    with pytest.raises(NestedEntityCycleError):
        engine.validate(left)


def test_nesting_deeper_than_limit_raises() -> None:
    engine = ValidationEngine(content_source=InMemoryContentSource(), max_depth=3)
    root = Node(child=Node(child=Node(child=Node())))

    with pytest.raises(NestingTooDeepError):
        engine.validate(root)


def test_nested_field_holding_non_entity_raises(engine) -> None:
    class Holder(ValidatableEntity):
        items: Annotated[list, c.nested()] = []

    with pytest.raises(FieldTypeMismatchError):
        engine.validate(Holder(items=[1, 2]))


# ── Configuration errors ──


def test_non_entity_input_raises(engine) -> None:
    with pytest.raises(EntityTypeError):
        engine.validate({"name": "not an entity"})


def test_type_mismatch_raises(engine) -> None:
    class Wrong(ValidatableEntity):
        name: Annotated[str, c.range_from(1)] = "x"

    with pytest.raises(FieldTypeMismatchError):
        engine.validate(Wrong())


def test_inverted_range_raises(engine) -> None:
    class Inverted(ValidatableEntity):
        size: Annotated[int, c.range_from_to(10, 1)] = 5

    with pytest.raises(InvalidRangeError):
        engine.validate(Inverted())


def test_unknown_constraint_tag_raises(engine) -> None:
    class Strange(ValidatableEntity):
        size: Annotated[int, ConstraintDeclaration(tag="is_prime")] = 5

    with pytest.raises(UnknownConstraintError):
        engine.validate(Strange())


def test_configuration_error_is_not_folded_into_report(engine) -> None:
    class Mixed(ValidatableEntity):
        name: Annotated[Optional[str], c.non_null()] = None
        size: Annotated[int, c.range_from_to(3, 2)] = 5

    with pytest.raises(InvalidRangeError):
        engine.validate(Mixed())


def test_nested_severity_is_rejected_on_declarations() -> None:
    with pytest.raises(ConfigurationError):
        c.positive(severity="nested")
    with pytest.raises(ConfigurationError):
        c.range_from(1).with_severity(Severity.NESTED)


def test_unknown_severity_is_rejected_on_declarations() -> None:
    with pytest.raises(ConfigurationError):
        c.non_null(severity="fatal")


@pytest.mark.parametrize("severity", ["nested", "fatal"])
def test_engine_rejects_unusable_default_severity(severity) -> None:
    with pytest.raises(ConfigurationError):
        ValidationEngine(content_source=InMemoryContentSource(), default_severity=severity)


@pytest.mark.parametrize("max_depth", [0, -1])
def test_engine_rejects_depth_limit_below_one(max_depth) -> None:
    with pytest.raises(ConfigurationError):
        ValidationEngine(content_source=InMemoryContentSource(), max_depth=max_depth)


def test_depth_limit_of_one_allows_only_the_root() -> None:
    engine = ValidationEngine(content_source=InMemoryContentSource(), max_depth=1)

    assert engine.validate(Node()).is_empty()
    with pytest.raises(NestingTooDeepError):
        engine.validate(Node(child=Node()))


# ── Report immutability ──


def test_returned_report_cannot_be_changed(engine) -> None:
    report = engine.validate(invalid_account())
    key = report.entity_types()[0]

    with pytest.raises(TypeError):
        report.errors[key] = ()
    with pytest.raises(TypeError):
        del report.errors[key]

    assert len(report.get_errors(Account)) == 3
