"""
Entity Framework Core code generator implementation.

Shares the class layout of the Entity Framework generator and replaces
its attributes with data annotations understood by EF Core.
"""

from typing import List

from ...core.schema import CompilationContext
from ..ef.generator import (
    NOTIFY_CHANGED,
    NOTIFY_CHANGING,
    EntityFrameworkGenerator,
    cs_literal,
)
from .types import ClrTypeMapper

DATA_ANNOTATIONS = "global::System.ComponentModel.DataAnnotations"


class EntityFrameworkCoreGenerator(EntityFrameworkGenerator):
    """Code generator for Entity Framework Core entities."""

    type_mapper_class = ClrTypeMapper

    @property
    def target_name(self) -> str:
        return "Entity Framework Core"

    def class_attributes(self, context: CompilationContext) -> List[str]:
        return [f"{DATA_ANNOTATIONS}.Schema.Table({cs_literal(context.table_name)})"]

    def base_types(self, context: CompilationContext) -> List[str]:
        return [NOTIFY_CHANGED, NOTIFY_CHANGING]

    def property_attributes(self, name: str, column) -> List[str]:
        attributes = []
        if column.id:
            attributes.append(f"{DATA_ANNOTATIONS}.Key")
        if column.auto:
            attributes.append(
                f"{DATA_ANNOTATIONS}.Schema.DatabaseGenerated"
                f"({DATA_ANNOTATIONS}.Schema.DatabaseGeneratedOption.Identity)"
            )
        attributes.append(f"{DATA_ANNOTATIONS}.Schema.Column({cs_literal(name)})")
        return attributes
