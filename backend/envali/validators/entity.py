"""Validatable entities: the data records the engine inspects."""

from typing import ClassVar, Optional

from pydantic import BaseModel


class ValidatableEntity(BaseModel):
    """Base class for entities that can be passed to the validation engine.

    Fields take part in validation when they carry constraint declarations
    as ``Annotated`` metadata. Setting ``parameter_mapping`` opts the entity
    into external parameter lookup under that entity name.
    """

    parameter_mapping: ClassVar[Optional[str]] = None

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def content_name(cls) -> Optional[str]:
        """Entity name used for external condition lookup, or None when not mapped."""
        return cls.parameter_mapping

    @classmethod
    def participates_in_mapping(cls) -> bool:
        return cls.parameter_mapping is not None
