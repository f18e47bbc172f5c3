"""Validation models: constraint tags, severity levels, violations and report structure.

Violations are data, not failures: a constraint that is not satisfied produces
a Violation in the report. Reports are immutable once built.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union
from pydantic import BaseModel, Field, field_serializer, field_validator


class Severity(str, Enum):
    """How a caller should treat a violation."""

    RECOVERABLE = "recoverable"      # Bad input the caller can ask to be corrected
    UNRECOVERABLE = "unrecoverable"  # Bad input the caller cannot continue with
    RUNTIME = "runtime"              # Reported and logged as a warning
    NESTED = "nested"                # Wrapper around a nested entity's report


class ConstraintTag(str, Enum):
    """The kind of rule a constraint declaration applies to a field."""

    NON_NULL = "non_null"
    NON_EMPTY = "non_empty"
    NON_BLANK = "non_blank"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    RANGE_FROM = "range_from"
    RANGE_TO = "range_to"
    RANGE_FROM_TO = "range_from_to"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    MATCH = "match"
    NESTED_ENTITY = "nested_entity"


def type_key(entity_type: Union[type, str]) -> str:
    """Report bucket key for an entity class: ``module.QualName``."""
    if isinstance(entity_type, str):
        return entity_type
    return f"{entity_type.__module__}.{entity_type.__qualname__}"


class Violation(BaseModel):
    """A single constraint failure on one field."""

    field: str
    constraint: ConstraintTag
    message: str
    severity: Severity
    element: Optional[str] = None                  # Index or key inside a nested collection
    nested: Optional["ValidationReport"] = None    # Report of the nested entity

    model_config = {"frozen": True, "use_enum_values": True}

    @property
    def has_nested_error(self) -> bool:
        return self.nested is not None and self.nested.has_error()


class ValidationReport(BaseModel):
    """Result of one validate() call: entity type key → ordered violations."""

    errors: Mapping[str, tuple[Violation, ...]] = Field(default_factory=dict, validate_default=True)

    model_config = {"frozen": True}

    @field_validator("errors")
    @classmethod
    def freeze_errors(cls, v: Mapping[str, tuple[Violation, ...]]) -> Mapping[str, tuple[Violation, ...]]:
        return MappingProxyType(dict(v))

    @field_serializer("errors")
    def serialize_errors(self, errors: Mapping[str, tuple[Violation, ...]]) -> dict[str, tuple[Violation, ...]]:
        return dict(errors)

    @classmethod
    def none(cls) -> "ValidationReport":
        """An empty report: the entity graph is valid."""
        return cls()

    @classmethod
    def build(cls, entity_type: Union[type, str], violations: list[Violation]) -> "ValidationReport":
        """Build a report holding one entity's violations."""
        if not violations:
            return cls.none()
        return cls(errors={type_key(entity_type): tuple(violations)})

    def is_empty(self) -> bool:
        return not self.errors

    def has_error(self) -> bool:
        """True if any violation exists anywhere in the entity graph."""
        for violations in self.errors.values():
            for violation in violations:
                if violation.nested is None or violation.nested.has_error():
                    return True
        return False

    def get_errors(self, entity_type: Union[type, str]) -> list[Violation]:
        """Violations recorded for an entity type.

        When the type has no bucket at this level, nested reports are
        searched depth-first and their matches returned in order.
        """
        key = type_key(entity_type)
        if key in self.errors:
            return list(self.errors[key])

        found: list[Violation] = []
        for violations in self.errors.values():
            for violation in violations:
                if violation.nested is not None:
                    found.extend(violation.nested.get_errors(key))
        return found

    def entity_types(self) -> list[str]:
        return list(self.errors.keys())

    def walk(self, depth: int = 0) -> Iterator[tuple[str, Violation, int]]:
        """Depth-first iteration over (entity type key, violation, depth)."""
        for key, violations in self.errors.items():
            for violation in violations:
                yield key, violation, depth
                if violation.nested is not None:
                    yield from violation.nested.walk(depth + 1)

    @property
    def summary(self) -> dict[str, int]:
        """Count of leaf violations by severity across the whole graph."""
        summary = {
            Severity.RECOVERABLE.value: 0,
            Severity.UNRECOVERABLE.value: 0,
            Severity.RUNTIME.value: 0,
        }
        for _, violation, _ in self.walk():
            if violation.nested is None:
                key = Severity(violation.severity).value
                summary[key] = summary.get(key, 0) + 1
        return summary


Violation.model_rebuild()
