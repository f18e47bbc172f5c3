"""Strategy dispatch table: maps each constraint tag to its strategy."""

from typing import Optional, Union

from envali.exceptions import UnknownConstraintError
from envali.validators.affix_strategy import RequireEndWithStrategy, RequireStartWithStrategy
from envali.validators.base import BaseStrategy
from envali.validators.match_strategy import RequireMatchStrategy
from envali.validators.models import ConstraintTag
from envali.validators.nested_strategy import NestedEntityStrategy
from envali.validators.presence_strategy import (
    RequireNonBlankStrategy,
    RequireNonEmptyStrategy,
    RequireNonNullStrategy,
)
from envali.validators.range_strategy import (
    RequireRangeFromStrategy,
    RequireRangeFromToStrategy,
    RequireRangeToStrategy,
)
from envali.validators.sign_strategy import RequireNegativeStrategy, RequirePositiveStrategy


class StrategyDispatchTable:
    """One stateless strategy per constraint tag."""

    def __init__(self, strategies: Optional[list[BaseStrategy]] = None):
        """Initialize with the default strategies or a custom list.

        Args:
            strategies: Optional list of strategies. If None, uses all defaults.
        """
        self._strategies: dict[ConstraintTag, BaseStrategy] = {}
        for strategy in strategies if strategies is not None else self._default_strategies():
            self.register(strategy)

    @staticmethod
    def _default_strategies() -> list[BaseStrategy]:
        return [
            RequireNonNullStrategy(),
            RequireNonEmptyStrategy(),
            RequireNonBlankStrategy(),
            RequirePositiveStrategy(),
            RequireNegativeStrategy(),
            RequireRangeFromStrategy(),
            RequireRangeToStrategy(),
            RequireRangeFromToStrategy(),
            RequireStartWithStrategy(),
            RequireEndWithStrategy(),
            RequireMatchStrategy(),
            NestedEntityStrategy(),
        ]

    def dispatch(self, tag: Union[ConstraintTag, str]) -> BaseStrategy:
        """Strategy for a tag. Unknown tags are a programming error."""
        try:
            tag = ConstraintTag(tag)
        except ValueError:
            raise UnknownConstraintError(f"Unknown constraint tag: {tag!r}") from None

        strategy = self._strategies.get(tag)
        if strategy is None:
            raise UnknownConstraintError(f"No strategy registered for constraint tag '{tag.value}'")
        return strategy

    def register(self, strategy: BaseStrategy) -> None:
        """Add or replace the strategy serving strategy.tag."""
        self._strategies[ConstraintTag(strategy.tag)] = strategy

    def unregister(self, tag: Union[ConstraintTag, str]) -> None:
        self._strategies.pop(ConstraintTag(tag), None)

    def tags(self) -> list[ConstraintTag]:
        return list(self._strategies.keys())
