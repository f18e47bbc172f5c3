"""Exceptions raised for configuration and usage defects.

Constraint failures are never raised: they are returned as violations in the
ValidationReport. Everything here aborts the current validate() call.
"""


class EnvaliError(Exception):
    """Base exception for all envali errors."""
    pass


class ConfigurationError(EnvaliError):
    """Raised when a constraint, entity or content definition is unusable."""
    pass


class UnknownConstraintError(ConfigurationError):
    """Raised when no strategy is registered for a constraint tag."""
    pass


class FieldTypeMismatchError(ConfigurationError):
    """Raised when a field is read through an accessor that does not match its kind."""

    def __init__(self, entity: str, field: str, kind: str, expected: str):
        self.entity = entity
        self.field = field
        self.kind = kind
        self.expected = expected
        super().__init__(
            f"Field '{entity}.{field}' is of kind '{kind}' but '{expected}' was required"
        )


class ContentNotFoundError(ConfigurationError):
    """Raised when a constraint needs external parameters and none are registered."""

    def __init__(self, entity: str, field: str, constraint: str, reason: str = ""):
        self.entity = entity
        self.field = field
        self.constraint = constraint
        message = f"No external condition for ({entity}, {field}, {constraint})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ContentFormatError(ConfigurationError):
    """Raised when an external content file cannot be parsed."""
    pass


class InvalidRangeError(ConfigurationError):
    """Raised when a range constraint is configured with from > to."""
    pass


class EntityTypeError(ConfigurationError):
    """Raised when something that is not a ValidatableEntity is validated."""
    pass


class NestedEntityCycleError(ConfigurationError):
    """Raised when nested-entity recursion reaches an entity already on the path."""
    pass


class NestingTooDeepError(ConfigurationError):
    """Raised when nested-entity recursion exceeds the configured depth."""
    pass
