"""Range strategies: inclusive lower, upper and two-sided bounds.

Bounds are converted into the field's own numeric representation before
comparing, so integer fields compare against integers and Decimal fields
against Decimals.
"""

from typing import Optional

from envali.exceptions import InvalidRangeError
from envali.validators.base import BaseStrategy
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Violation


class RequireRangeFromStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.RANGE_FROM

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_number()
        lower = field.coerce_bound(declaration.range_from)
        if value is not None and value < lower:
            return self._violation(field, declaration, value=value, range_from=lower)
        return None


class RequireRangeToStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.RANGE_TO

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_number()
        upper = field.coerce_bound(declaration.range_to)
        if value is not None and value > upper:
            return self._violation(field, declaration, value=value, range_to=upper)
        return None


class RequireRangeFromToStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.RANGE_FROM_TO

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_number()
        lower = field.coerce_bound(declaration.range_from)
        upper = field.coerce_bound(declaration.range_to)
        if lower > upper:
            raise InvalidRangeError(
                f"Range on '{field.entity_name}.{field.name}' has from ({lower}) greater than to ({upper})"
            )
        if value is not None and not lower <= value <= upper:
            return self._violation(field, declaration, value=value, range_from=lower, range_to=upper)
        return None
