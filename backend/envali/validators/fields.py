"""Field descriptors and accessors.

A FieldDescriptor is computed once per entity class from its pydantic model
fields. A FieldAccessor is the read-only view of one (entity, field) pair that
strategies work against; its typed getters refuse kinds they do not serve.
"""

import types
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Optional, Union, get_args, get_origin

from envali.exceptions import ConfigurationError, FieldTypeMismatchError
from envali.validators.constraints import Bound, ConstraintDeclaration
from envali.validators.entity import ValidatableEntity


class FieldKind(str, Enum):
    """Type tag of a field, derived from its annotation."""

    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    LIST = "list"
    SET = "set"
    MAP = "map"
    ENTITY = "entity"
    BOOLEAN = "boolean"
    OTHER = "other"


NUMERIC_KINDS = frozenset({FieldKind.INTEGER, FieldKind.FLOAT, FieldKind.DECIMAL})
COLLECTION_KINDS = frozenset({FieldKind.ARRAY, FieldKind.LIST, FieldKind.SET, FieldKind.MAP})
SIZED_KINDS = COLLECTION_KINDS | {FieldKind.STRING, FieldKind.BYTES}

# Checked in order: bool before int, str/bytes before Sequence
_KIND_BY_TYPE: list[tuple[Any, FieldKind]] = [
    (bool, FieldKind.BOOLEAN),
    (ValidatableEntity, FieldKind.ENTITY),
    (int, FieldKind.INTEGER),
    (float, FieldKind.FLOAT),
    (Decimal, FieldKind.DECIMAL),
    (str, FieldKind.STRING),
    ((bytes, bytearray), FieldKind.BYTES),
    (tuple, FieldKind.ARRAY),
    (Set, FieldKind.SET),
    (Mapping, FieldKind.MAP),
    (Sequence, FieldKind.LIST),
]


def resolve_kind(annotation: Any) -> FieldKind:
    """Map a field annotation to its FieldKind. ``Optional[X]`` resolves to X."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return resolve_kind(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return resolve_kind(members[0])
        return FieldKind.OTHER

    target = origin if origin is not None else annotation
    if not isinstance(target, type):
        return FieldKind.OTHER
    for base, kind in _KIND_BY_TYPE:
        if issubclass(target, base):
            return kind
    return FieldKind.OTHER


@dataclass(frozen=True)
class FieldDescriptor:
    """Identity, kind and declared constraints of one entity field."""

    name: str
    kind: FieldKind
    owner: type
    constraints: tuple[ConstraintDeclaration, ...]


@lru_cache(maxsize=None)
def describe_fields(entity_type: type) -> tuple[FieldDescriptor, ...]:
    """Constrained fields of an entity class, in declaration order."""
    descriptors = []
    for name, info in entity_type.model_fields.items():
        constraints = tuple(m for m in info.metadata if isinstance(m, ConstraintDeclaration))
        if not constraints:
            continue
        descriptors.append(
            FieldDescriptor(
                name=name,
                kind=resolve_kind(info.annotation),
                owner=entity_type,
                constraints=constraints,
            )
        )
    return tuple(descriptors)


class FieldAccessor:
    """Read-only, kind-checked view of one field of one entity instance."""

    def __init__(self, entity: ValidatableEntity, descriptor: FieldDescriptor):
        self._entity = entity
        self._descriptor = descriptor

    # ── Identity ──

    @property
    def name(self) -> str:
        return self._descriptor.name

    @property
    def owner(self) -> type:
        return self._descriptor.owner

    @property
    def entity_name(self) -> str:
        return self._descriptor.owner.__name__

    @property
    def kind(self) -> FieldKind:
        return self._descriptor.kind

    @property
    def value(self) -> Any:
        return getattr(self._entity, self._descriptor.name)

    def is_none(self) -> bool:
        return self.value is None

    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    def is_string(self) -> bool:
        return self.kind == FieldKind.STRING

    def is_collection(self) -> bool:
        return self.kind in COLLECTION_KINDS

    def is_sized(self) -> bool:
        return self.kind in SIZED_KINDS

    def is_entity(self) -> bool:
        return self.kind == FieldKind.ENTITY

    # ── Typed access ──

    def _expect(self, allowed: frozenset, expected: str) -> None:
        if self.kind not in allowed:
            raise FieldTypeMismatchError(self.entity_name, self.name, self.kind.value, expected)

    def get_int(self) -> Optional[int]:
        self._expect(frozenset({FieldKind.INTEGER}), "integer")
        return self.value

    def get_float(self) -> Optional[float]:
        self._expect(frozenset({FieldKind.FLOAT}), "float")
        value = self.value
        return float(value) if value is not None else None

    def get_decimal(self) -> Optional[Decimal]:
        self._expect(frozenset({FieldKind.DECIMAL}), "decimal")
        return self.value

    def get_number(self) -> Union[int, float, Decimal, None]:
        """The value in its own numeric representation."""
        self._expect(NUMERIC_KINDS, "numeric")
        if self.kind == FieldKind.INTEGER:
            return self.get_int()
        if self.kind == FieldKind.FLOAT:
            return self.get_float()
        return self.get_decimal()

    def get_string(self) -> Optional[str]:
        self._expect(frozenset({FieldKind.STRING}), "string")
        return self.value

    def get_bytes(self) -> Optional[bytes]:
        self._expect(frozenset({FieldKind.BYTES}), "bytes")
        return self.value

    def get_sequence(self) -> Optional[Sequence]:
        self._expect(frozenset({FieldKind.ARRAY, FieldKind.LIST}), "array or list")
        return self.value

    def get_set(self) -> Optional[Set]:
        self._expect(frozenset({FieldKind.SET}), "set")
        return self.value

    def get_map(self) -> Optional[Mapping]:
        self._expect(frozenset({FieldKind.MAP}), "map")
        return self.value

    def get_sized(self) -> Any:
        self._expect(SIZED_KINDS, "string, bytes or collection")
        return self.value

    def get_entity(self) -> Optional[ValidatableEntity]:
        self._expect(frozenset({FieldKind.ENTITY}), "entity")
        return self.value

    def get_entities(self) -> list[tuple[Optional[str], ValidatableEntity]]:
        """Nested entities held by the field, paired with their index or key.

        Works from the runtime value so forward-referenced annotations are
        handled too. ``None`` holds nothing.
        """
        value = self.value
        if value is None:
            return []
        if isinstance(value, ValidatableEntity):
            return [(None, value)]

        if isinstance(value, Mapping):
            items = [(str(key), element) for key, element in value.items()]
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = [(str(index), element) for index, element in enumerate(value)]
        else:
            raise FieldTypeMismatchError(self.entity_name, self.name, self.kind.value, "entity")

        entities = []
        for key, element in items:
            if element is None:
                continue
            if not isinstance(element, ValidatableEntity):
                raise FieldTypeMismatchError(
                    self.entity_name, f"{self.name}[{key}]", type(element).__name__, "entity"
                )
            entities.append((key, element))
        return entities

    # ── Bound conversion ──

    def coerce_bound(self, bound: Bound) -> Union[int, float, Decimal]:
        """Convert a configured bound into this field's numeric representation.

        Raises ConfigurationError when that cannot be done exactly.
        """
        self._expect(NUMERIC_KINDS, "numeric")
        if isinstance(bound, bool):
            raise ConfigurationError(f"Boolean bound {bound!r} for '{self.entity_name}.{self.name}'")

        if self.kind == FieldKind.INTEGER:
            if isinstance(bound, int):
                return bound
            exact = _as_decimal(bound, self)
            if not exact.is_finite() or exact != exact.to_integral_value():
                raise ConfigurationError(
                    f"Bound {bound!r} is not an integer for integer field '{self.entity_name}.{self.name}'"
                )
            return int(exact)

        if self.kind == FieldKind.FLOAT:
            try:
                return float(bound)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Bound {bound!r} is not a number for '{self.entity_name}.{self.name}'"
                ) from e

        return _as_decimal(bound, self)


def _as_decimal(bound: Bound, field: FieldAccessor) -> Decimal:
    if isinstance(bound, Decimal):
        return bound
    try:
        return Decimal(str(bound).strip())
    except InvalidOperation as e:
        raise ConfigurationError(
            f"Bound {bound!r} is not a number for '{field.entity_name}.{field.name}'"
        ) from e
