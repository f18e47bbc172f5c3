"""Presence strategies: non-null, non-empty and non-blank checks."""

from typing import Optional

from envali.validators.base import BaseStrategy
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Violation


class RequireNonNullStrategy(BaseStrategy):
    """Fails when the field holds None. Applies to every field kind."""

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.NON_NULL

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        if field.is_none():
            return self._violation(field, declaration)
        return None


class RequireNonEmptyStrategy(BaseStrategy):
    """Fails when a string, bytes or collection field is empty or None."""

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.NON_EMPTY

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_sized()
        if value is None or len(value) == 0:
            return self._violation(field, declaration)
        return None


class RequireNonBlankStrategy(BaseStrategy):
    """Fails when a string field has no non-whitespace character."""

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.NON_BLANK

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_string()
        if value is None or not value.strip():
            return self._violation(field, declaration)
        return None
