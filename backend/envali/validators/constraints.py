"""Constraint declarations: the in-memory form of one rule attached to one field.

Declarations are attached to entity fields as ``typing.Annotated`` metadata:

    class Account(ValidatableEntity):
        name: Annotated[Optional[str], non_null(), non_blank()] = None
        age: Annotated[int, range_from_to(0, 150, severity="unrecoverable")] = 0

Parameters left out inline (or ``external=True``) are completed from the
external content source at validation time.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional, Union

from envali.exceptions import ConfigurationError
from envali.validators.models import ConstraintTag, Severity
from envali.validators.presets import RegexMethod, RegexModifier, RegexPreset

Bound = Union[int, float, Decimal, str]

# Parameters each tag cannot run without
REQUIRED_PARAMETERS: dict[ConstraintTag, tuple[str, ...]] = {
    ConstraintTag.RANGE_FROM: ("range_from",),
    ConstraintTag.RANGE_TO: ("range_to",),
    ConstraintTag.RANGE_FROM_TO: ("range_from", "range_to"),
    ConstraintTag.STARTS_WITH: ("start_with",),
    ConstraintTag.ENDS_WITH: ("end_with",),
}


@dataclass(frozen=True)
class ConstraintDeclaration:
    """One constraint on one field.

    A frozen dataclass rather than a pydantic model: pydantic would treat a
    model instance found in ``Annotated`` metadata as a schema for the field.
    """

    tag: ConstraintTag
    severity: Optional[Severity] = None
    message: str = ""
    range_from: Optional[Bound] = None
    range_to: Optional[Bound] = None
    start_with: Optional[str] = None
    end_with: Optional[str] = None
    expression: Optional[str] = None
    preset: Optional[RegexPreset] = None
    method: RegexMethod = RegexMethod.MATCHES
    modifiers: tuple[RegexModifier, ...] = field(default_factory=tuple)
    external: bool = False

    def __post_init__(self):
        if self.severity is not None and Severity(self.severity) == Severity.NESTED:
            raise ConfigurationError(
                f"'nested' severity is reserved for nested-entity reports, not {ConstraintTag(self.tag).value} constraints"
            )

    def missing_parameters(self) -> list[str]:
        """Names of parameters this declaration still needs before it can run."""
        if self.tag == ConstraintTag.MATCH:
            if self.expression is None and self.preset is None:
                return ["expression"]
            return []
        required = REQUIRED_PARAMETERS.get(self.tag, ())
        return [name for name in required if getattr(self, name) is None]

    def is_complete(self) -> bool:
        return not self.missing_parameters()

    def with_severity(self, severity: Severity) -> "ConstraintDeclaration":
        return replace(self, severity=severity)


def _severity(value: Union[Severity, str, None]) -> Optional[Severity]:
    if value is None:
        return None
    try:
        return Severity(value)
    except ValueError:
        raise ConfigurationError(f"Unknown severity: {value!r}") from None


# ── Declaration factories ──


def non_null(message: str = "", severity: Union[Severity, str, None] = None) -> ConstraintDeclaration:
    return ConstraintDeclaration(ConstraintTag.NON_NULL, severity=_severity(severity), message=message)


def non_empty(message: str = "", severity: Union[Severity, str, None] = None) -> ConstraintDeclaration:
    return ConstraintDeclaration(ConstraintTag.NON_EMPTY, severity=_severity(severity), message=message)


def non_blank(message: str = "", severity: Union[Severity, str, None] = None) -> ConstraintDeclaration:
    return ConstraintDeclaration(ConstraintTag.NON_BLANK, severity=_severity(severity), message=message)


def positive(message: str = "", severity: Union[Severity, str, None] = None) -> ConstraintDeclaration:
    return ConstraintDeclaration(ConstraintTag.POSITIVE, severity=_severity(severity), message=message)


def negative(message: str = "", severity: Union[Severity, str, None] = None) -> ConstraintDeclaration:
    return ConstraintDeclaration(ConstraintTag.NEGATIVE, severity=_severity(severity), message=message)


def range_from(
    value: Optional[Bound] = None,
    message: str = "",
    severity: Union[Severity, str, None] = None,
    external: bool = False,
) -> ConstraintDeclaration:
    return ConstraintDeclaration(
        ConstraintTag.RANGE_FROM,
        severity=_severity(severity),
        message=message,
        range_from=value,
        external=external,
    )


def range_to(
    value: Optional[Bound] = None,
    message: str = "",
    severity: Union[Severity, str, None] = None,
    external: bool = False,
) -> ConstraintDeclaration:
    return ConstraintDeclaration(
        ConstraintTag.RANGE_TO,
        severity=_severity(severity),
        message=message,
        range_to=value,
        external=external,
    )


def range_from_to(
    start: Optional[Bound] = None,
    end: Optional[Bound] = None,
    message: str = "",
    severity: Union[Severity, str, None] = None,
    external: bool = False,
) -> ConstraintDeclaration:
    """Inclusive range; both bounds may come from external content."""
    return ConstraintDeclaration(
        ConstraintTag.RANGE_FROM_TO,
        severity=_severity(severity),
        message=message,
        range_from=start,
        range_to=end,
        external=external,
    )


def starts_with(
    prefix: Optional[str] = None,
    message: str = "",
    severity: Union[Severity, str, None] = None,
    external: bool = False,
) -> ConstraintDeclaration:
    return ConstraintDeclaration(
        ConstraintTag.STARTS_WITH,
        severity=_severity(severity),
        message=message,
        start_with=prefix,
        external=external,
    )


def ends_with(
    suffix: Optional[str] = None,
    message: str = "",
    severity: Union[Severity, str, None] = None,
    external: bool = False,
) -> ConstraintDeclaration:
    return ConstraintDeclaration(
        ConstraintTag.ENDS_WITH,
        severity=_severity(severity),
        message=message,
        end_with=suffix,
        external=external,
    )


def match(
    expression: Optional[str] = None,
    preset: Union[RegexPreset, str, None] = None,
    method: Union[RegexMethod, str] = RegexMethod.MATCHES,
    modifiers: tuple[Union[RegexModifier, str], ...] = (),
    message: str = "",
    severity: Union[Severity, str, None] = None,
    external: bool = False,
) -> ConstraintDeclaration:
    """Regular-expression constraint using a literal expression or a named preset."""
    return ConstraintDeclaration(
        ConstraintTag.MATCH,
        severity=_severity(severity),
        message=message,
        expression=expression,
        preset=RegexPreset(preset) if preset is not None else None,
        method=RegexMethod(method),
        modifiers=tuple(RegexModifier(m) for m in modifiers),
        external=external,
    )


def nested(message: str = "") -> ConstraintDeclaration:
    """Validate the entity (or collection of entities) held by the field."""
    return ConstraintDeclaration(ConstraintTag.NESTED_ENTITY, message=message)
