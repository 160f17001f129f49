"""
Entity Framework type mapping.
"""

from ...core.types import TypeMapper, TypeTag


class EntityFrameworkTypeMapper(TypeMapper):
    """Type mapper for Entity Framework (CLR types)."""

    target_name = "Entity Framework"

    type_map = {
        TypeTag.BIGINT: "long",
        TypeTag.INT64: "long",
        TypeTag.INT: "int",
        TypeTag.INT32: "int",
        TypeTag.INTEGER: "int",
        TypeTag.JSON: "dynamic",
        TypeTag.STR: "string",
        TypeTag.STRING: "string",
    }

    nullable_types = frozenset({"int", "long"})
    nullable_marker = "?"
