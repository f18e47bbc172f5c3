"""Entity validation: declarative field constraints checked by a strategy engine.

Usage:
    from envali.validators import validation_engine

    report = validation_engine.validate(entity)
    if report.has_error():
        # Inspect report.get_errors(type(entity))
"""

from envali.validators.engine import ValidationEngine, validate, validation_engine
from envali.validators.entity import ValidatableEntity
from envali.validators.models import ConstraintTag, Severity, ValidationReport, Violation

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "validate",
    "ValidatableEntity",
    "ValidationReport",
    "Violation",
    "Severity",
    "ConstraintTag",
]
