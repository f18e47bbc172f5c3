"""External condition sources: the read-only lookup the resolver depends on."""

from typing import Iterable, Optional, Protocol, Union

from envali.exceptions import ContentFormatError
from envali.validators.content.conditions import ExternalCondition
from envali.validators.models import ConstraintTag


class ContentSource(Protocol):
    """Anything that can look up an external condition by its three-part key."""

    def lookup(
        self, entity_name: str, field_name: str, tag: Union[ConstraintTag, str]
    ) -> Optional[ExternalCondition]:
        ...


def index_conditions(
    conditions: Iterable[ExternalCondition],
) -> dict[tuple[str, str, ConstraintTag], ExternalCondition]:
    """Key conditions for O(1) lookup. Duplicate keys are a content error."""
    indexed: dict[tuple[str, str, ConstraintTag], ExternalCondition] = {}
    for condition in conditions:
        if condition.key in indexed:
            entity, field, tag = condition.key
            raise ContentFormatError(
                f"Duplicate external condition for ({entity}, {field}, {ConstraintTag(tag).value})"
            )
        indexed[condition.key] = condition
    return indexed


class InMemoryContentSource:
    """Content source built from conditions already in memory."""

    def __init__(self, conditions: Iterable[ExternalCondition] = ()):
        self._conditions = index_conditions(conditions)

    def lookup(
        self, entity_name: str, field_name: str, tag: Union[ConstraintTag, str]
    ) -> Optional[ExternalCondition]:
        return self._conditions.get((entity_name, field_name, ConstraintTag(tag)))

    def __len__(self) -> int:
        return len(self._conditions)
