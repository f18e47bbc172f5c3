"""External conditions: constraint parameters kept outside entity definitions."""

from dataclasses import replace
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from envali.validators.constraints import ConstraintDeclaration
from envali.validators.models import ConstraintTag, Severity

# Parameters an external condition may supply to a declaration
CONDITION_PARAMETERS = ("range_from", "range_to", "start_with", "end_with", "expression", "message", "severity")


class ExternalCondition(BaseModel):
    """Parameters for one (entity, field, constraint) triple."""

    entity: str
    field: str
    constraint: ConstraintTag
    range_from: Optional[Union[int, float, str]] = None
    range_to: Optional[Union[int, float, str]] = None
    start_with: Optional[str] = None
    end_with: Optional[str] = None
    expression: Optional[str] = None
    message: Optional[str] = None
    severity: Optional[Severity] = None

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("severity")
    @classmethod
    def severity_is_leaf(cls, v: Optional[Severity]) -> Optional[Severity]:
        if v == Severity.NESTED:
            raise ValueError("'nested' is reserved for nested-entity reports")
        return v

    @property
    def key(self) -> tuple[str, str, ConstraintTag]:
        return self.entity, self.field, self.constraint

    def apply_to(self, declaration: ConstraintDeclaration) -> ConstraintDeclaration:
        """Copy of the declaration with every parameter this condition sets."""
        overrides = {
            name: getattr(self, name)
            for name in CONDITION_PARAMETERS
            if getattr(self, name) is not None
        }
        return replace(declaration, **overrides)
