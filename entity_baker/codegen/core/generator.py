"""
Base generator interface for all code generation targets.

Defines the contract that all target generators must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Type, Union

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import GeneratorError
from .naming import find_suffix_collisions
from .schema import CompilationContext
from .templates import TemplateEngine, create_template_engine
from .types import TypeMapper
from .writer import write_artifacts

logger = get_logger(__name__)


@dataclass
class GeneratedArtifact:
    """A rendered file that has not been written yet."""

    path: Path
    content: str
    overwrite: bool = True
    kind: str = "class"


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    type_mapper_class: Type[TypeMapper] = TypeMapper

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.type_mapper = self.type_mapper_class()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the display name of the target (e.g., 'Doctrine')."""
        pass

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the output language (e.g., 'php', 'csharp')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.php', '.cs')."""
        pass

    def get_template_directory(self) -> Union[Path, Sequence[Path], None]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory,
        or an ordered list of directories to search.

        Returns:
            Path(s) to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def emit(self, context: CompilationContext) -> List[GeneratedArtifact]:
        """
        Render all files of one entity without touching the filesystem.

        Args:
            context: Normalized entity

        Returns:
            Rendered artifacts

        Raises:
            UnsupportedType: If a column type is unknown to the target
        """
        pass

    def validate_context(self, context: CompilationContext) -> List[str]:
        """
        Validate an entity for issues that do not prevent generation.

        Generators should override this to add target-specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not context.column_names:
            warnings.append(f"Entity '{context.name}' has no columns")

        for name in context.column_names:
            if not context.methods[name]:
                warnings.append(f"{context.name}: column '{name}' derives an empty accessor name")

        for warning in find_suffix_collisions(context.methods):
            warnings.append(f"{context.name}: {warning}")

        return warnings

    def generate(self, context: CompilationContext) -> "GenerationResult":
        """
        Validate, render and write one entity.

        All artifacts are rendered before the first one is written, so a
        failing entity leaves no files behind.
        """
        warnings = self.validate_context(context)
        for warning in warnings:
            logger.warning(warning)

        artifacts = self.emit(context)
        written, skipped = write_artifacts(artifacts)

        metadata = {
            "language": self.language_name,
            "file_extension": self.file_extension,
            "column_count": len(context.column_names),
            "namespace": ".".join(context.namespace),
        }

        return GenerationResult(
            entity=context.name,
            target=self.target_name,
            written=written,
            skipped=skipped,
            warnings=warnings,
            metadata=metadata,
        )

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        # Exactly one trailing newline
        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        return self.config.line_ending.join(formatted_lines) + self.config.line_ending

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Outcome of generating one entity for one target."""

    def __init__(
        self,
        entity: str,
        target: str,
        written: List[Path] = None,
        skipped: List[Path] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            entity: Entity (class) name
            target: Target display name
            written: Files written by this run
            skipped: Extension files kept because they already existed
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.entity = entity
        self.target = target
        self.written = written or []
        self.skipped = skipped or []
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[BaseException] = None

    @classmethod
    def error(
        cls, entity: str, target: str, message: str, exception: Exception = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(entity=entity, target=target)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    def __repr__(self) -> str:
        state = "ok" if self.success else f"error={self.error_message!r}"
        return f"GenerationResult({self.target}:{self.entity}, {state})"


def generate_code(generator: CodeGenerator, context: CompilationContext) -> GenerationResult:
    """
    Generate one entity with error handling.

    Entity-scoped errors are captured in the returned result instead of
    being raised.
    """
    try:
        return generator.generate(context)
    except GeneratorError as e:
        return GenerationResult.error(
            context.name, generator.target_name, str(e), exception=e
        )
