"""
Entity Framework code generator implementation.

Generates a partial C# entity class and its extension file. The class
description (attributes, base types, properties) is assembled here; the
templates only lay it out, so Entity Framework Core reuses them with its
own attributes.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratedArtifact
from ...core.schema import CompilationContext
from .types import EntityFrameworkTypeMapper

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

NOTIFY_CHANGED = "global::System.ComponentModel.INotifyPropertyChanged"
NOTIFY_CHANGING = "global::System.ComponentModel.INotifyPropertyChanging"


class EntityFrameworkGenerator(CodeGenerator):
    """Code generator for Entity Framework entities."""

    type_mapper_class = EntityFrameworkTypeMapper

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)
        self.add_header = self.config.add_header
        self.add_comments = self.config.add_comments

    def get_template_directory(self) -> Optional[Sequence[Path]]:
        """Return the C# templates directory."""
        return [TEMPLATE_DIR] if TEMPLATE_DIR.exists() else None

    @property
    def target_name(self) -> str:
        return "Entity Framework"

    @property
    def language_name(self) -> str:
        return "csharp"

    @property
    def file_extension(self) -> str:
        return ".cs"

    def class_attributes(self, context: CompilationContext) -> List[str]:
        """Attributes of the entity class."""
        return [
            "global::System.Runtime.Serialization.DataContract",
            f"global::System.Data.Linq.Mapping.Table(Name = {cs_literal(context.table_name)})",
            "global::System.Serializable",
        ]

    def base_types(self, context: CompilationContext) -> List[str]:
        """Base class and interfaces of the entity class."""
        return ["global::System.MarshalByRefObject", NOTIFY_CHANGED, NOTIFY_CHANGING]

    def property_attributes(self, name: str, column) -> List[str]:
        """Attributes of the property of a column."""
        return [
            "global::System.Runtime.Serialization.DataMember"
            f"(EmitDefaultValue = true, Name = {cs_literal(name)})"
        ]

    def validate_context(self, context: CompilationContext) -> List[str]:
        warnings = super().validate_context(context)

        # C# members must not be named like their enclosing type
        for name in context.column_names:
            if context.methods[name] == context.name:
                warnings.append(
                    f"{context.name}: property of column '{name}' has the name of its class"
                )

        return warnings

    def emit(self, context: CompilationContext) -> List[GeneratedArtifact]:
        """Render the primary class and the extension file."""
        template_context = self._build_template_context(context)

        class_dir = context.class_out_dir

        return [
            GeneratedArtifact(
                path=class_dir / f"{context.name}{self.file_extension}",
                content=self.format_code(self.render_template("class.cs.j2", template_context)),
                kind="class",
            ),
            GeneratedArtifact(
                path=class_dir / f"{context.name}.Extensions{self.file_extension}",
                content=self.format_code(
                    self.render_template("extensions.cs.j2", template_context)
                ),
                overwrite=False,
                kind="extension",
            ),
        ]

    def _build_template_context(self, context: CompilationContext) -> Dict[str, Any]:
        columns = [self._generate_column_data(context, name) for name in context.column_names]

        return {
            "add_header": self.add_header,
            "add_comments": self.add_comments,
            "target_name": self.target_name,
            "class_name": context.name,
            "table_name": context.table_name,
            "cs_namespace": ".".join(context.namespace),
            "class_attributes": self.class_attributes(context),
            "base_types": self.base_types(context),
            "columns": columns,
        }

    def _generate_column_data(self, context: CompilationContext, name: str) -> Dict[str, Any]:
        column = context.columns[name]

        return {
            "name": name,
            "clr_type": self.type_mapper.map_column(column),
            "field": f"_{name}",
            "property": context.methods[name],
            "is_id": column.id,
            "is_auto": column.auto,
            "has_setter": not column.auto,
            "attributes": self.property_attributes(name, column),
        }


def cs_literal(value: str) -> str:
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'
