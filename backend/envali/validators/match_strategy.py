"""Match strategy: regular expressions, literal or from the preset catalogue."""

import re
from functools import lru_cache
from typing import Optional

from envali.exceptions import ConfigurationError
from envali.validators.base import BaseStrategy
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.fields import FieldAccessor
from envali.validators.models import ConstraintTag, Violation
from envali.validators.presets import MODIFIER_FLAGS, PRESET_PATTERNS, RegexMethod, RegexPreset


@lru_cache(maxsize=256)
def _compile(expression: str, flags: int) -> re.Pattern:
    return re.compile(expression, flags)


class RequireMatchStrategy(BaseStrategy):

    @property
    def tag(self) -> ConstraintTag:
        return ConstraintTag.MATCH

    def validate(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> Optional[Violation]:
        value = field.get_string()
        pattern = self._pattern(field, declaration)
        if value is None:
            return None

        method = RegexMethod(declaration.method)
        if method == RegexMethod.FIND:
            matched = pattern.search(value)
        elif method == RegexMethod.LOOKING_AT:
            matched = pattern.match(value)
        else:
            matched = pattern.fullmatch(value)

        if matched is None:
            return self._violation(field, declaration, expression=pattern.pattern)
        return None

    def _pattern(self, field: FieldAccessor, declaration: ConstraintDeclaration) -> re.Pattern:
        """Compile the preset (which wins over a literal expression) with its modifiers."""
        if declaration.preset is not None:
            expression = PRESET_PATTERNS[RegexPreset(declaration.preset)]
        elif declaration.expression is not None:
            expression = declaration.expression
        else:
            raise ConfigurationError(
                f"Match constraint on '{field.entity_name}.{field.name}' has neither expression nor preset"
            )

        flags = 0
        for modifier in declaration.modifiers:
            flags |= MODIFIER_FLAGS[modifier]

        try:
            return _compile(expression, flags)
        except re.error as e:
            raise ConfigurationError(
                f"Invalid expression {expression!r} on '{field.entity_name}.{field.name}': {e}"
            ) from e
