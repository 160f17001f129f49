"""
Entity Framework Core type mapping.
"""

from ...core.types import TypeMapper, TypeTag


class ClrTypeMapper(TypeMapper):
    """Type mapper for Entity Framework Core (CLR types)."""

    target_name = "Entity Framework Core"

    type_map = {
        TypeTag.BIGINT: "long",
        TypeTag.INT64: "long",
        TypeTag.DECIMAL: "decimal",
        TypeTag.FLOAT: "float",
        TypeTag.INT: "int",
        TypeTag.INT32: "int",
        TypeTag.INTEGER: "int",
        TypeTag.INT16: "short",
        TypeTag.SMALLINT: "short",
        TypeTag.JSON: "dynamic",
        TypeTag.STR: "string",
        TypeTag.STRING: "string",
    }

    nullable_types = frozenset({"decimal", "float", "int", "long", "short"})
    nullable_marker = "?"
