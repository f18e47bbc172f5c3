"""Affix strategies: case-sensitive prefix and suffix checks on strings."""

from typing import Optional

from envali.validators.base import BaseStrategy
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Violation


class RequireStartWithStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.STARTS_WITH

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_string()
        if value is None:
            return None
        # An empty prefix always matches
        if not value.startswith(declaration.start_with):
            return self._violation(field, declaration)
        return None


class RequireEndWithStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.ENDS_WITH

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_string()
        if value is None:
            return None
        if not value.endswith(declaration.end_with):
            return self._violation(field, declaration)
        return None
