"""
Entity Baker Code Generation Module

Generates ORM entity classes for Doctrine, Entity Framework and
Entity Framework Core from entity descriptions.
"""

from .registry import (
    GeneratorRegistry,
    get_generator,
    get_registry,
    list_supported_targets,
    map_type,
)
from .compiler import (
    CompilationResult,
    CompilerCallbacks,
    CompilerOptions,
    EntityCompiler,
    compile_entities,
)
from .core.generator import CodeGenerator, GeneratedArtifact, GenerationResult, generate_code
from .core.schema import (
    CompilationContext,
    EntityClass,
    EntityColumn,
    EntityFile,
    normalize_entity,
    parse_namespace,
)
from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.errors import (
    GeneratorError,
    InvalidIdentifier,
    DuplicateColumn,
    DuplicateEntity,
    UnsupportedType,
    UnsupportedTarget,
    FilesystemError,
)


def compile_file(entity_file, target="doctrine", out_dir=None, **options):
    """
    Compile an entity description for a target.

    Args:
        entity_file: EntityFile or raw mapping (namespace, entities)
        target: Target key or alias
        out_dir: Output directory (default: current directory)
        **options: Generator options (add_header, xml_out_dir, ...)

    Returns:
        CompilationResult
    """
    return compile_entities(
        CompilerOptions(target=target, file=entity_file, out_dir=out_dir, config=options)
    )


__all__ = [
    "GeneratorRegistry",
    "get_generator",
    "get_registry",
    "list_supported_targets",
    "map_type",
    "CompilationResult",
    "CompilerCallbacks",
    "CompilerOptions",
    "EntityCompiler",
    "compile_entities",
    "compile_file",
    "CodeGenerator",
    "GeneratedArtifact",
    "GenerationResult",
    "generate_code",
    "CompilationContext",
    "EntityClass",
    "EntityColumn",
    "EntityFile",
    "normalize_entity",
    "parse_namespace",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "GeneratorError",
    "InvalidIdentifier",
    "DuplicateColumn",
    "DuplicateEntity",
    "UnsupportedType",
    "UnsupportedTarget",
    "FilesystemError",
]
