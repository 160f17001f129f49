"""
Configuration management for entity compilation.

Handles per-target generator options (defaults, config files, overrides)
and the run settings that drive the command line loop.
"""

from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field

from ...logging_config import get_logger
from ...utils import EntityFileError, load_document
from .naming import to_bool

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class GeneratorConfig:
    """Per-target configuration for code generators."""

    # Auto-generated banner at the top of primary files
    add_header: bool = True

    # Doc comments on generated members
    add_comments: bool = True

    # Code style settings
    line_ending: str = "\n"

    # Doctrine mapping directory, relative to the output directory
    xml_out_dir: Optional[str] = None

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


# camelCase keys as they appear in config files
_CONFIG_ALIASES = {
    "addHeader": "add_header",
    "addComments": "add_comments",
    "lineEnding": "line_ending",
    "xmlOutDir": "xml_out_dir",
    "doctrineXmlOutDir": "xml_out_dir",
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["doctrine"] = {
            "add_header": True,
            "add_comments": True,
            "xml_out_dir": None,
        }

        self._configs["ef"] = {
            "add_header": True,
            "add_comments": True,
        }

        self._configs["ef-core"] = {
            "add_header": True,
            "add_comments": True,
        }

    def get_config(self, target: str, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            target: Target key (doctrine, ef, ef-core)
            custom_config: Custom configuration overrides
            config_file: Path to a JSON, XML or YAML configuration file

        Returns:
            Merged configuration for the target
        """
        base_config = dict(self._configs.get(target, {}))

        if config_file:
            file_config = self._load_config_file(config_file)
            # A file may hold sections per target or flat options
            section = file_config.get(target)
            if isinstance(section, dict):
                file_config = section
            base_config.update(self._normalize_keys(file_config))

        if custom_config:
            base_config.update(self._normalize_keys(custom_config))

        return self._dict_to_config(base_config)

    def _normalize_keys(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        return {_CONFIG_ALIASES.get(key, key): value for key, value in config_dict.items()}

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from a JSON, XML or YAML file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            config = load_document(path)
        except EntityFileError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain an object: {path}")

        logger.debug(f"Loaded configuration from {path}")
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in GeneratorConfig.__dataclass_fields__.values()}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in ("add_header", "add_comments"):
                # XML config files deliver flags as text
                config_args[key] = to_bool(value, default=True)
            elif key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(target: str, custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        target: Target key
        custom_config: Custom configuration overrides
        config_file: Path to configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(target, custom_config, config_file)


DEFAULT_INPUT_FILE = "entities.json"
DEFAULT_OUT_DIR = "./out"


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and str(v).strip()]
    value = str(value)
    return [value] if value.strip() else []


@dataclass
class BakerSettings:
    """Settings of one command line run."""

    doctrine: bool = False
    entity_framework: bool = False
    entity_framework_core: bool = False
    input_files: List[str] = field(default_factory=list)
    out_dirs: List[str] = field(default_factory=list)
    doctrine_xml_out_dir: Optional[str] = None

    def apply(self, values: Dict[str, Any]):
        """
        Merge the content of a config file.

        Recognized keys: doctrine, entityFramework, entityFrameworkCore
        (flags), inputFiles (string or list), outDir (string or list) and
        doctrineXmlOutDir.
        """
        if "doctrine" in values:
            self.doctrine = to_bool(values["doctrine"])
        if "entityFramework" in values:
            self.entity_framework = to_bool(values["entityFramework"])
        if "entityFrameworkCore" in values:
            self.entity_framework_core = to_bool(values["entityFrameworkCore"])

        self.input_files.extend(_as_list(values.get("inputFiles")))
        self.out_dirs.extend(_as_list(values.get("outDir")))

        xml_out_dir = values.get("doctrineXmlOutDir")
        if xml_out_dir is not None and str(xml_out_dir).strip():
            self.doctrine_xml_out_dir = str(xml_out_dir).strip()

    def apply_file(self, config_path: Union[str, Path]):
        """Merge a JSON, XML or YAML config file."""
        self.apply(get_config_manager()._load_config_file(config_path))

    @property
    def targets(self) -> List[str]:
        """Selected target keys in processing order."""
        selected = []
        if self.doctrine:
            selected.append("doctrine")
        if self.entity_framework:
            selected.append("ef")
        if self.entity_framework_core:
            selected.append("ef-core")
        return selected

    def effective_input_files(self) -> List[str]:
        return list(self.input_files) or [DEFAULT_INPUT_FILE]

    def effective_out_dirs(self) -> List[str]:
        return list(self.out_dirs) or [DEFAULT_OUT_DIR]

    def generator_config(self, target: str) -> GeneratorConfig:
        """Generator options for a target derived from these settings."""
        overrides = {}
        if target == "doctrine" and self.doctrine_xml_out_dir:
            overrides["xml_out_dir"] = self.doctrine_xml_out_dir
        return load_config(target, overrides)
