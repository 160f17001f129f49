"""
Doctrine type mapping.

Maps semantic type tags to Doctrine column types and to the PHP types
used in generated docblocks.
"""

from ...core.types import TypeMapper, TypeTag, normalize_type_tag


class DoctrineTypeMapper(TypeMapper):
    """Type mapper for Doctrine ORM column types."""

    target_name = "Doctrine"

    type_map = {
        TypeTag.BIGINT: "bigint",
        TypeTag.INT64: "bigint",
        TypeTag.DECIMAL: "decimal",
        TypeTag.FLOAT: "float",
        TypeTag.INT: "integer",
        TypeTag.INT32: "integer",
        TypeTag.INTEGER: "integer",
        TypeTag.INT16: "smallint",
        TypeTag.SMALLINT: "smallint",
        # Stored as text, encoded and decoded by the accessors
        TypeTag.JSON: "string",
        TypeTag.STR: "string",
        TypeTag.STRING: "string",
    }

    php_type_map = {
        TypeTag.DEFAULT: "string",
        TypeTag.STR: "string",
        TypeTag.STRING: "string",
        TypeTag.BIGINT: "integer",
        TypeTag.INT: "integer",
        TypeTag.INT32: "integer",
        TypeTag.INT64: "integer",
        TypeTag.INTEGER: "integer",
    }

    def php_doc_type(self, type_tag) -> str:
        """PHP type for docblocks; 'mixed' for anything not string or integer."""
        return self.php_type_map.get(normalize_type_tag(type_tag), "mixed")
