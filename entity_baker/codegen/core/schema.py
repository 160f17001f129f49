"""
Entity schema system for code generation.

Turns raw entity descriptions (as loaded from JSON, XML or YAML) into the
validated, normalized compilation context every target generator consumes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import DuplicateColumn
from .naming import (
    derive_method_suffix,
    normalize_string,
    to_bool,
    to_string_safe,
    validate_identifier,
)
from .types import normalize_type_tag

logger = get_logger(__name__)


@dataclass(frozen=True)
class EntityColumn:
    """Normalized description of a single column."""

    type: str = ""
    id: bool = False
    auto: bool = False
    nullable: bool = False

    @classmethod
    def from_entry(cls, entry: Any) -> "EntityColumn":
        """
        Create a column from a raw column entry.

        A string (or None) is shorthand for the type tag; a mapping may hold
        'type', 'id', 'auto' and 'null'.
        """
        if isinstance(entry, Mapping):
            nullable = entry.get("null", entry.get("nullable"))
            return cls(
                type=normalize_type_tag(entry.get("type")),
                id=to_bool(entry.get("id")),
                auto=to_bool(entry.get("auto")),
                nullable=to_bool(nullable),
            )
        return cls(type=normalize_type_tag(entry))


@dataclass
class EntityClass:
    """Raw entity: optional table name and its column entries."""

    table: Optional[str] = None
    columns: Dict[Any, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "EntityClass":
        """Build an entity from raw data; non-mappings have no columns."""
        if not isinstance(raw, Mapping):
            return cls()

        columns = raw.get("columns")
        table = raw.get("table")
        return cls(
            table=None if table is None else to_string_safe(table),
            columns=dict(columns) if isinstance(columns, Mapping) else {},
        )


def parse_namespace(raw: Any) -> Tuple[str, ...]:
    """Split a dotted namespace into trimmed, non-empty segments."""
    segments = (segment.strip() for segment in to_string_safe(raw).split("."))
    return tuple(segment for segment in segments if segment)


@dataclass
class EntityFile:
    """A whole entity description file."""

    namespace: Tuple[str, ...] = ()
    entities: Dict[Any, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "EntityFile":
        if not isinstance(raw, Mapping):
            return cls()

        entities = raw.get("entities")
        if entities is not None and not isinstance(entities, Mapping):
            logger.warning("'entities' is not an object, no entities to compile")

        return cls(
            namespace=parse_namespace(raw.get("namespace")),
            entities=dict(entities) if isinstance(entities, Mapping) else {},
        )


@dataclass(frozen=True)
class CompilationContext:
    """Everything a generator needs to emit one entity."""

    name: str
    namespace: Tuple[str, ...]
    table_name: str
    column_names: Tuple[str, ...]
    columns: Mapping[str, EntityColumn]
    methods: Mapping[str, str]
    out_dir: Path
    options: GeneratorConfig = field(default_factory=GeneratorConfig)

    @property
    def class_out_dir(self) -> Path:
        """Output directory of the entity, one level per namespace segment."""
        return self.out_dir.joinpath(*self.namespace)

    def qualified_name(self, separator: str = ".") -> str:
        return separator.join(self.namespace + (self.name,))


def normalize_entity(
    entity_key: Any,
    raw_entity: Any,
    namespace: Tuple[str, ...] = (),
    out_dir: Union[str, Path] = ".",
    options: Optional[GeneratorConfig] = None,
) -> CompilationContext:
    """
    Validate and normalize one entity description.

    Args:
        entity_key: Key of the entity in the file (the class name)
        raw_entity: Raw entity value or EntityClass
        namespace: Namespace segments of the file
        out_dir: Root output directory
        options: Generator configuration of the selected target

    Returns:
        Frozen compilation context

    Raises:
        InvalidIdentifier: If the class name or a column name is invalid
        DuplicateColumn: If two column keys are equal after trimming
    """
    class_name = validate_identifier(entity_key, "class")

    if isinstance(raw_entity, EntityClass):
        entity = raw_entity
    else:
        entity = EntityClass.from_dict(raw_entity)

    columns: Dict[str, EntityColumn] = {}
    for raw_key, entry in entity.columns.items():
        column_name = validate_identifier(raw_key, "column")
        if column_name in columns:
            raise DuplicateColumn(column_name, class_name)
        columns[column_name] = EntityColumn.from_entry(entry)

    column_names = tuple(sorted(columns, key=normalize_string))
    methods = {name: derive_method_suffix(name) for name in column_names}

    table_name = to_string_safe(entity.table).strip() or class_name

    return CompilationContext(
        name=class_name,
        namespace=tuple(namespace),
        table_name=table_name,
        column_names=column_names,
        columns=MappingProxyType(columns),
        methods=MappingProxyType(methods),
        out_dir=Path(out_dir).resolve(),
        options=options or GeneratorConfig(),
    )
