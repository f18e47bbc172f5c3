"""Base strategy: abstract class implementing the Strategy Pattern.

Each strategy implements one constraint tag and is a standalone, independently
testable unit. New strategies are registered in the dispatch table without
modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from envali.exceptions import ConfigurationError
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Severity, Violation

DEFAULT_MESSAGES: dict[ConstraintTag, str] = {
    ConstraintTag.NON_NULL: "'{field}' must not be null",
    ConstraintTag.NON_EMPTY: "'{field}' must not be empty",
    ConstraintTag.NON_BLANK: "'{field}' must not be blank",
    ConstraintTag.POSITIVE: "'{field}' must be positive, got {value}",
    ConstraintTag.NEGATIVE: "'{field}' must be negative, got {value}",
    ConstraintTag.RANGE_FROM: "'{field}' must be at least {range_from}, got {value}",
    ConstraintTag.RANGE_TO: "'{field}' must be at most {range_to}, got {value}",
    ConstraintTag.RANGE_FROM_TO: "'{field}' must be between {range_from} and {range_to}, got {value}",
    ConstraintTag.STARTS_WITH: "'{field}' must start with '{start_with}'",
    ConstraintTag.ENDS_WITH: "'{field}' must end with '{end_with}'",
    ConstraintTag.MATCH: "'{field}' does not match '{expression}'",
    ConstraintTag.NESTED_ENTITY: "'{field}' holds an invalid nested entity",
}


class BaseStrategy(ABC):
    """Abstract base for all constraint strategies.

    Contract:
        - validate() is deterministic and stateless: same input → same output
        - validate() returns None when the constraint holds, a Violation otherwise
        - Misuse (wrong field kind, bad parameters) raises a ConfigurationError
    """

    # Strategies that hand nested entities back to the engine instead of
    # producing leaf violations
    recurses: bool = False

    @property
    @abstractmethod
    def tag(self) -> ConstraintTag:
        """Constraint tag served by this strategy."""
        ...

    @abstractmethod
    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        """Check one declaration against one field.

        Args:
            field: Accessor for the field under validation
            declaration: Complete declaration with a resolved severity

        Returns:
            None if the constraint holds, otherwise the Violation
        """
        ...

    # ── Helper Methods ──

    def _violation(
        self,
        field: FieldAccessor,
        declaration: ConstraintDeclaration,
        severity: Optional[Severity] = None,
        **context: Any,
    ) -> Violation:
        """Convenience method to create a Violation with a rendered message."""
        return Violation(
            field=field.name,
            constraint=self.tag,
            message=render_message(field, declaration, **context),
            severity=severity or declaration.severity or Severity.RECOVERABLE,
        )


def render_message(field: FieldAccessor, declaration: ConstraintDeclaration, **context: Any) -> str:
    """Fill the declaration's message template (or the tag default)."""
    tag = ConstraintTag(declaration.tag)
    template = declaration.message or DEFAULT_MESSAGES[tag]
    values = {
        "field": field.name,
        "entity": field.entity_name,
        "constraint": tag.value,
        "value": context.pop("value", field.value),
        "range_from": declaration.range_from,
        "range_to": declaration.range_to,
        "start_with": declaration.start_with,
        "end_with": declaration.end_with,
        "expression": declaration.expression,
    }
    values.update(context)
    try:
        return template.format(**values)
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigurationError(
            f"Message template {template!r} on '{field.entity_name}.{field.name}' is invalid: {e}"
        ) from e
