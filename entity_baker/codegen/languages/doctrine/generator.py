"""
Doctrine code generator implementation.

Generates a PHP entity class with annotations, its extension trait and
an XML mapping file per entity.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratedArtifact
from ...core.naming import normalize_string
from ...core.schema import CompilationContext
from .types import DoctrineTypeMapper

logger = get_logger(__name__)

DOCTRINE_MAPPING_XMLNS = "http://doctrine-project.org/schemas/orm/doctrine-mapping"
DOCTRINE_MAPPING_XSD = "http://doctrine-project.org/schemas/orm/doctrine-mapping.xsd"


class DoctrineGenerator(CodeGenerator):
    """Code generator for Doctrine entities."""

    type_mapper_class = DoctrineTypeMapper

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)
        self.add_header = self.config.add_header
        self.add_comments = self.config.add_comments

    def get_template_directory(self) -> Optional[Path]:
        """Return the Doctrine templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def target_name(self) -> str:
        return "Doctrine"

    @property
    def language_name(self) -> str:
        return "php"

    @property
    def file_extension(self) -> str:
        return ".php"

    def get_xml_out_dir(self, context: CompilationContext) -> Path:
        """Directory of the mapping files; relative paths start at the output directory."""
        xml_out_dir = (self.config.xml_out_dir or "").strip()
        if not xml_out_dir:
            return context.out_dir
        return context.out_dir / Path(xml_out_dir)

    def emit(self, context: CompilationContext) -> List[GeneratedArtifact]:
        """Render class, extension trait and mapping file."""
        # Map every column first, an unsupported type must fail before rendering
        template_context = self._build_template_context(context)

        class_dir = context.class_out_dir
        mapping_name = ".".join(context.namespace + (context.name,)) + ".dcm.xml"

        return [
            GeneratedArtifact(
                path=class_dir / f"{context.name}{self.file_extension}",
                content=self.format_code(self.render_template("class.php.j2", template_context)),
                kind="class",
            ),
            GeneratedArtifact(
                path=class_dir / "Extensions" / f"{context.name}{self.file_extension}",
                content=self.format_code(self.render_template("trait.php.j2", template_context)),
                overwrite=False,
                kind="extension",
            ),
            GeneratedArtifact(
                path=self.get_xml_out_dir(context) / mapping_name,
                content=self.format_code(
                    self.render_template("mapping.dcm.xml.j2", template_context)
                ),
                kind="mapping",
            ),
        ]

    def _build_template_context(self, context: CompilationContext) -> Dict[str, Any]:
        columns = [self._generate_column_data(context, name) for name in context.column_names]

        # Mapping files list id columns first
        mapping_columns = sorted(
            columns, key=lambda c: (0 if c["is_id"] else 1, normalize_string(c["name"]))
        )

        php_namespace = "\\".join(context.namespace)
        trait_namespace = "\\".join(context.namespace + ("Extensions",))

        return {
            "add_header": self.add_header,
            "add_comments": self.add_comments,
            "class_name": context.name,
            "table_name": context.table_name,
            "php_namespace": php_namespace,
            "trait_namespace": trait_namespace,
            "entity_name": context.qualified_name("\\"),
            "columns": columns,
            "mapping_columns": mapping_columns,
            "xmlns": DOCTRINE_MAPPING_XMLNS,
            "xsd": DOCTRINE_MAPPING_XSD,
        }

    def _generate_column_data(self, context: CompilationContext, name: str) -> Dict[str, Any]:
        column = context.columns[name]
        suffix = context.methods[name]

        return {
            "name": name,
            "doctrine_type": self.type_mapper.map_column(column),
            "php_type": self.type_mapper.php_doc_type(column.type),
            "is_id": column.id,
            "is_auto": column.auto,
            "nullable": column.nullable,
            "is_json": self.type_mapper.is_json(column),
            "getter": f"get{suffix}",
            "setter": None if column.auto else f"set{suffix}",
        }
