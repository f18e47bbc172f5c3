"""Nested entity strategy: hands nested entities back to the engine for recursion."""

from typing import Optional

from envali.validators.base import BaseStrategy, render_message
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.entity import ValidatableEntity
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Severity, ValidationReport, Violation


class NestedEntityStrategy(BaseStrategy):
    """Produces no leaf violation of its own.

    The engine asks for the nested entities, validates each one and wraps
    every non-empty sub-report with wrap().
    """

    recurses = True

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.NESTED_ENTITY

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        return None

    def nested_entities(self, field: FieldAccessor) -> list[tuple[Optional[str], ValidatableEntity]]:
        return field.get_entities()

    def wrap(
        self,
        field: FieldAccessor,
        declaration: ConstraintDeclaration,
        report: ValidationReport,
        element: Optional[str] = None,
    ) -> Violation:
        """One parent-level violation carrying the nested entity's report."""
        return Violation(
            field=field.name,
            constraint=self.tag,
            message=render_message(field, declaration, element=element),
            severity=Severity.NESTED,
            element=element,
            nested=report,
        )
