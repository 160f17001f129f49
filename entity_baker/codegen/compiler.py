"""
Entity compiler.

Runs one entity file through a target generator: every entity is
normalized, rendered and written in file order, and failures are captured
per entity so that one broken entity never stops its siblings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Union

from ..logging_config import get_logger
from .core.config import GeneratorConfig
from .core.errors import DuplicateEntity, GeneratorError
from .core.generator import CodeGenerator, GenerationResult
from .core.schema import EntityFile, normalize_entity
from .core.writer import ensure_directory
from .registry import GeneratorRegistry, get_registry

logger = get_logger(__name__)

BeforeGenerateCallback = Callable[[str, str], None]
ClassGeneratedCallback = Callable[[Optional[BaseException], str, str], None]


@dataclass
class CompilerCallbacks:
    """Progress callbacks, invoked once per entity."""

    # (class_name, target)
    on_before_generate_class: Optional[BeforeGenerateCallback] = None
    # (error or None, class_name, target)
    on_class_generated: Optional[ClassGeneratedCallback] = None


@dataclass
class CompilerOptions:
    """Options of a single compile call."""

    target: str
    file: Union[EntityFile, Mapping[str, Any], None] = None
    out_dir: Optional[Union[str, Path]] = None
    cwd: Optional[Union[str, Path]] = None
    callbacks: Optional[CompilerCallbacks] = None
    config: Union[GeneratorConfig, Dict[str, Any], None] = None


class CompilationResult:
    """Results of all entities of one compile call, in file order."""

    def __init__(self, target: str, out_dir: Path, results: List[GenerationResult] = None):
        self.target = target
        self.out_dir = out_dir
        self.results = results or []

    @property
    def succeeded(self) -> List[GenerationResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[GenerationResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        return not self.failed

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)


class EntityCompiler:
    """Compiles the entities of one file for one target."""

    def __init__(self, options: CompilerOptions, registry: Optional[GeneratorRegistry] = None):
        self.options = options
        self.registry = registry

    def resolve_cwd(self) -> Path:
        """Working directory; relative paths are joined to the process cwd."""
        cwd = self.options.cwd
        if cwd is None or not str(cwd).strip():
            return Path(os.getcwd())
        return Path(os.getcwd()) / Path(str(cwd).strip())

    def resolve_out_dir(self, cwd: Path) -> Path:
        """Output directory; relative paths are joined to the working directory."""
        out_dir = self.options.out_dir
        if out_dir is None or not str(out_dir).strip():
            return cwd
        return (cwd / Path(str(out_dir).strip())).resolve()

    def compile(self) -> CompilationResult:
        """
        Compile all entities of the file.

        Returns:
            CompilationResult with one GenerationResult per entity

        Raises:
            UnsupportedTarget: If no generator exists for the target
            FilesystemError: If the output directory cannot be created
        """
        cwd = self.resolve_cwd()
        out_dir = self.resolve_out_dir(cwd)

        registry = self.registry or get_registry()
        generator = registry.create_generator(self.options.target, self.options.config)

        ensure_directory(out_dir)

        entity_file = self.options.file
        if not isinstance(entity_file, EntityFile):
            entity_file = EntityFile.from_dict(entity_file)

        result = CompilationResult(generator.target_name, out_dir)
        logger.debug(
            f"Compiling {len(entity_file.entities)} entities for "
            f"{generator.target_name} into {out_dir}"
        )

        seen: Set[str] = set()
        for entity_key, raw_entity in entity_file.entities.items():
            result.results.append(
                self._compile_entity(generator, entity_file, entity_key, raw_entity, out_dir, seen)
            )

        return result

    def _compile_entity(
        self,
        generator: CodeGenerator,
        entity_file: EntityFile,
        entity_key: Any,
        raw_entity: Any,
        out_dir: Path,
        seen: Set[str],
    ) -> GenerationResult:
        callbacks = self.options.callbacks or CompilerCallbacks()
        class_name = str(entity_key).strip()
        target = generator.target_name

        if callbacks.on_before_generate_class:
            callbacks.on_before_generate_class(class_name, target)

        error: Optional[BaseException] = None
        try:
            # Keys equal after trimming would write the same files
            if class_name in seen:
                raise DuplicateEntity(class_name)
            seen.add(class_name)

            context = normalize_entity(
                entity_key, raw_entity, entity_file.namespace, out_dir, generator.config
            )
            result = generator.generate(context)
            logger.info(f"Generated {target} class '{class_name}'")
        except GeneratorError as e:
            error = e
            result = GenerationResult.error(class_name, target, str(e), exception=e)
            logger.error(f"{target} class '{class_name}' failed: {e}")
        except Exception as e:
            error = e
            result = GenerationResult.error(class_name, target, str(e), exception=e)
            logger.exception(f"Unexpected error while generating {target} class '{class_name}'")

        if callbacks.on_class_generated:
            callbacks.on_class_generated(error, class_name, target)

        return result


def compile_entities(
    options: CompilerOptions, registry: Optional[GeneratorRegistry] = None
) -> CompilationResult:
    """Compile an entity file with the given options."""
    return EntityCompiler(options, registry).compile()
