"""
Generator registry system for managing available code generators.

Maps target keys and their aliases to generator classes.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path
from .core.errors import RegistryError, UnsupportedTarget
from .core.generator import CodeGenerator
from .core.config import GeneratorConfig, load_config


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            target: Primary target key (e.g., 'doctrine', 'ef')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        target_key = target.strip().lower()

        if target_key in self._generators and not replace:
            # Already registered, skip silently
            return

        self._generators[target_key] = generator_class

        if aliases:
            for alias in aliases:
                alias_key = alias.strip().lower()

                if alias_key == target_key:
                    continue

                if not replace:
                    if alias_key in self._generators:
                        raise RegistryError(
                            f"Alias '{alias}' conflicts with existing primary target"
                        )
                    if (
                        alias_key in self._aliases
                        and self._aliases[alias_key] != target_key
                    ):
                        raise RegistryError(
                            f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                        )

                self._aliases[alias_key] = target_key

    def unregister(self, target: str):
        """Unregister a generator and its aliases."""
        target_key = target.strip().lower()

        self._generators.pop(target_key, None)

        aliases_to_remove = [
            alias for alias, primary in self._aliases.items() if primary == target_key
        ]
        for alias in aliases_to_remove:
            del self._aliases[alias]

    def resolve_target(self, target: str) -> str:
        """
        Resolve a target name or alias to its primary key.

        Raises:
            UnsupportedTarget: If the target is unknown
        """
        target_key = str(target).strip().lower()

        if target_key in self._generators:
            return target_key
        if target_key in self._aliases:
            return self._aliases[target_key]

        raise UnsupportedTarget(target, self.list_targets())

    def get_generator_class(self, target: str) -> Type[CodeGenerator]:
        """
        Get generator class for a target.

        Args:
            target: Target key or alias

        Returns:
            Generator class

        Raises:
            UnsupportedTarget: If target not found
        """
        return self._generators[self.resolve_target(target)]

    def create_generator(
        self,
        target: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for a target.

        Args:
            target: Target key or alias
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured generator instance

        Raises:
            UnsupportedTarget: If target not found
            RegistryError: If the configuration is of an invalid type
        """
        target_key = self.resolve_target(target)
        generator_class = self._generators[target_key]

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(target_key, config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(target_key, custom_config=config)
        elif config is None:
            final_config = load_config(target_key)
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config)

    def list_targets(self) -> List[str]:
        """Get list of registered primary target keys."""
        return sorted(self._generators.keys())

    def get_aliases_for_target(self, target: str) -> List[str]:
        """Get all aliases for a specific target."""
        target_key = target.strip().lower()
        return sorted(
            [alias for alias, primary in self._aliases.items() if primary == target_key]
        )

    def is_supported(self, target: str) -> bool:
        """Check if a target (or alias) is supported."""
        target_key = str(target).strip().lower()
        return target_key in self._generators or target_key in self._aliases

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """
        Get information about a registered target.

        Raises:
            UnsupportedTarget: If target not found
        """
        target_key = self.resolve_target(target)
        generator = self.create_generator(target_key)

        return {
            "key": target_key,
            "name": generator.target_name,
            "language": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_target(target_key),
            "module": type(generator).__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators()
    return _global_registry


def _auto_register_generators():
    """
    Auto-register known generators with their aliases.

    This is the single source of truth for generator registration.
    """
    from .languages.doctrine import DoctrineGenerator
    from .languages.ef import EntityFrameworkGenerator
    from .languages.efcore import EntityFrameworkCoreGenerator

    _global_registry.register("doctrine", DoctrineGenerator, aliases=["d", "php"])
    _global_registry.register(
        "ef",
        EntityFrameworkGenerator,
        aliases=["entity-framework", "entityframework"],
    )
    _global_registry.register(
        "ef-core",
        EntityFrameworkCoreGenerator,
        aliases=["efc", "efcore", "entity-framework-core", "entityframeworkcore"],
    )


# Public API functions using the global registry


def get_generator(
    target: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> CodeGenerator:
    """Get generator instance from global registry."""
    return get_registry().create_generator(target, config)


def list_supported_targets() -> List[str]:
    """List all supported targets from global registry."""
    return get_registry().list_targets()


def is_target_supported(target: str) -> bool:
    """Check if target is supported by global registry."""
    return get_registry().is_supported(target)


def get_target_info(target: str) -> Dict[str, Any]:
    """Get information about a supported target."""
    return get_registry().get_target_info(target)


def map_type(target: str, type_tag, is_id: bool = False, nullable: bool = False) -> str:
    """
    Map a semantic type tag to the native type of a target.

    Args:
        target: Target key or alias
        type_tag: Semantic type tag ('' for the default type)
        is_id: Whether the column is a primary key
        nullable: Whether the column may hold null

    Returns:
        Native type name

    Raises:
        UnsupportedTarget: If the target is unknown
        UnsupportedType: If the tag is unknown to the target
    """
    generator_class = get_registry().get_generator_class(target)
    return generator_class.type_mapper_class().map_type(type_tag, is_id, nullable)
