"""Content resolver: completes constraint declarations from external conditions."""

from typing import Union

from envali.exceptions import ContentNotFoundError
from envali.validators.constraints import ConstraintDeclaration
from envali.validators.content.conditions import ExternalCondition
from envali.validators.content.sources import ContentSource
from envali.validators.entity import ValidatableEntity
from envali.validators.models import ConstraintTag


class ContentResolver:
    """Looks up external conditions on behalf of the engine."""

    def __init__(self, source: ContentSource):
        self.source = source

    def resolve(self, entity_name: str, field_name: str, tag: Union[ConstraintTag, str]) -> ExternalCondition:
        """External condition for the key, or ContentNotFoundError."""
        condition = self.source.lookup(entity_name, field_name, tag)
        if condition is None:
            raise ContentNotFoundError(entity_name, field_name, ConstraintTag(tag).value)
        return condition

    def complete(
        self,
        entity_type: type[ValidatableEntity],
        field_name: str,
        declaration: ConstraintDeclaration,
    ) -> ConstraintDeclaration:
        """Declaration ready to run.

        Complete inline declarations are returned unchanged. Declarations
        marked external, or missing required parameters, are filled from the
        entity's external condition; external values win over inline ones.
        """
        if not declaration.external and declaration.is_complete():
            return declaration

        tag = ConstraintTag(declaration.tag)
        entity_name = entity_type.content_name()
        if entity_name is None:
            raise ContentNotFoundError(
                entity_type.__name__,
                field_name,
                tag.value,
                f"parameters {declaration.missing_parameters() or ['(external)']} are not declared inline "
                "and the entity has no parameter mapping",
            )

        completed = self.resolve(entity_name, field_name, tag).apply_to(declaration)
        missing = completed.missing_parameters()
        if missing:
            raise ContentNotFoundError(
                entity_name, field_name, tag.value, f"missing {', '.join(missing)}"
            )
        return completed
