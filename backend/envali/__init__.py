"""Envali: declarative field validation for entity graphs.

Usage:
    from typing import Annotated, Optional
    from envali import ValidatableEntity, constraints as c, validate

    class Account(ValidatableEntity):
        name: Annotated[Optional[str], c.non_null(), c.non_blank()] = None
        age: Annotated[int, c.range_from_to(0, 150)] = 0

    report = validate(Account(name=" ", age=200))
    report.has_error()  # True
"""

from envali.exceptions import (
    ConfigurationError,
    ContentFormatError,
    ContentNotFoundError,
    EntityTypeError,
    EnvaliError,
    FieldTypeMismatchError,
    InvalidRangeError,
    NestedEntityCycleError,
    NestingTooDeepError,
    UnknownConstraintError,
)
from envali.validators import constraints
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.content import ExternalCondition, InMemoryContentSource, JsonContentSource
from envali.validators.engine import ValidationEngine, validate, validation_engine
from envali.validators.entity import ValidatableEntity
from envali.validators.models import ConstraintTag, Severity, ValidationReport, Violation
from envali.validators.presets import RegexMethod, RegexModifier, RegexPreset

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "ConstraintDeclaration",
    "ConstraintTag",
    "ContentFormatError",
    "ContentNotFoundError",
    "EntityTypeError",
    "EnvaliError",
    "ExternalCondition",
    "FieldTypeMismatchError",
    "InMemoryContentSource",
    "InvalidRangeError",
    "JsonContentSource",
    "NestedEntityCycleError",
    "NestingTooDeepError",
    "RegexMethod",
    "RegexModifier",
    "RegexPreset",
    "Severity",
    "UnknownConstraintError",
    "ValidatableEntity",
    "ValidationEngine",
    "ValidationReport",
    "Violation",
    "constraints",
    "validate",
    "validation_engine",
]
