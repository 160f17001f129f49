"""
Core code generation components.

Provides base classes and utilities used by all target generators.
"""

from .errors import (
    GeneratorError,
    InvalidIdentifier,
    DuplicateColumn,
    DuplicateEntity,
    UnsupportedType,
    RegistryError,
    UnsupportedTarget,
    FilesystemError,
)
from .generator import CodeGenerator, GeneratedArtifact, GenerationResult, generate_code
from .schema import (
    EntityColumn,
    EntityClass,
    EntityFile,
    CompilationContext,
    normalize_entity,
    parse_namespace,
)
from .naming import (
    derive_method_suffix,
    is_valid_identifier,
    validate_identifier,
    normalize_string,
    to_bool,
)
from .types import TypeTag, TypeMapper, resolve_type_tag
from .config import (
    GeneratorConfig,
    ConfigManager,
    ConfigError,
    BakerSettings,
    load_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .writer import write_artifacts

__all__ = [
    # Errors
    "GeneratorError",
    "InvalidIdentifier",
    "DuplicateColumn",
    "DuplicateEntity",
    "UnsupportedType",
    "RegistryError",
    "UnsupportedTarget",
    "FilesystemError",
    # Base generator interface
    "CodeGenerator",
    "GeneratedArtifact",
    "GenerationResult",
    "generate_code",
    # Entity schema
    "EntityColumn",
    "EntityClass",
    "EntityFile",
    "CompilationContext",
    "normalize_entity",
    "parse_namespace",
    # Naming utilities
    "derive_method_suffix",
    "is_valid_identifier",
    "validate_identifier",
    "normalize_string",
    "to_bool",
    # Type system
    "TypeTag",
    "TypeMapper",
    "resolve_type_tag",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "BakerSettings",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Output
    "write_artifacts",
]
