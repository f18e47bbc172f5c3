"""Sign strategies: positive and negative numbers. Zero fails both."""

from typing import Optional

from envali.validators.base import BaseStrategy
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Violation


class RequirePositiveStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.POSITIVE

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_number()
        if value is None:
            return None
        if not value > 0:
            return self._violation(field, declaration, value=value)
        return None


class RequireNegativeStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.NEGATIVE

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_number()
        if value is None:
            return None
        if not value < 0:
            return self._violation(field, declaration, value=value)
        return None
