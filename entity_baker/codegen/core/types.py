"""
Target-neutral type system for code generation.

Defines the semantic type tags an entity file may use and the base
mapper every target specializes with its own lookup table.
"""

from typing import Dict, FrozenSet

from .errors import UnsupportedType
from .naming import normalize_string


class TypeTag:
    """Semantic type tags accepted in entity descriptions."""

    DEFAULT = ""
    BIGINT = "bigint"
    DECIMAL = "decimal"
    FLOAT = "float"
    INT = "int"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INTEGER = "integer"
    JSON = "json"
    SMALLINT = "smallint"
    STR = "str"
    STRING = "string"


ALL_TYPE_TAGS: FrozenSet[str] = frozenset(
    value
    for name, value in vars(TypeTag).items()
    if not name.startswith("_") and isinstance(value, str)
)


def normalize_type_tag(type_tag) -> str:
    """Normalize a type tag (case and surrounding whitespace are ignored)."""
    return normalize_string(type_tag)


def resolve_type_tag(type_tag, is_id: bool = False) -> str:
    """
    Apply the default-type policy.

    An empty tag means 32-bit integer for id columns and string for
    everything else, on every target.
    """
    tag = normalize_type_tag(type_tag)
    if tag == TypeTag.DEFAULT:
        return TypeTag.INT32 if is_id else TypeTag.STRING
    return tag


class TypeMapper:
    """
    Maps semantic type tags to a target's native type names.

    Subclasses provide the lookup table and, for targets whose type system
    distinguishes nullable value types, the set of native types that take
    the nullable marker.
    """

    target_name: str = "unknown"
    type_map: Dict[str, str] = {}
    nullable_types: FrozenSet[str] = frozenset()
    nullable_marker: str = ""

    def is_supported(self, type_tag) -> bool:
        """Check whether a tag (after default resolution) is recognized."""
        return resolve_type_tag(type_tag) in self.type_map

    def map_type(self, type_tag, is_id: bool = False, nullable: bool = False) -> str:
        """
        Map a type tag to the native type name.

        Args:
            type_tag: Semantic type tag from the entity description
            is_id: Whether the column is a primary key
            nullable: Whether the column may hold null

        Returns:
            Native type name, with the nullable marker where applicable

        Raises:
            UnsupportedType: If the tag is unknown to this target
        """
        tag = resolve_type_tag(type_tag, is_id)
        native = self.type_map.get(tag)
        if native is None:
            raise UnsupportedType(tag, self.target_name)

        if nullable and native in self.nullable_types:
            native += self.nullable_marker
        return native

    def map_column(self, column) -> str:
        """Map an EntityColumn to its native type."""
        return self.map_type(column.type, is_id=column.id, nullable=column.nullable)

    def is_json(self, column) -> bool:
        """Check whether a column holds structured JSON data."""
        return normalize_type_tag(column.type) == TypeTag.JSON
