"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError
from markupsafe import escape

from .errors import GeneratorError

TemplateDirs = Union[Path, Sequence[Path], None]


class TemplateError(GeneratorError):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: TemplateDirs = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory (or ordered directories) containing
                template files; earlier directories win
        """
        if template_dir is None:
            self.template_dirs: List[Path] = []
        elif isinstance(template_dir, (str, Path)):
            self.template_dirs = [Path(template_dir)]
        else:
            self.template_dirs = [Path(d) for d in template_dir]

        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        existing = [str(d) for d in self.template_dirs if d.exists()]

        # Output is source code, escaping is done explicitly through filters
        self._env = Environment(
            loader=FileSystemLoader(existing),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters["indent"] = self._indent_filter
        self._env.filters["xml_attr"] = self._xml_attr_filter
        self._env.filters["cs_str"] = self._cs_str_filter
        self._env.filters["annotation_str"] = self._annotation_str_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}") from e

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent all lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _xml_attr_filter(self, value: Any) -> str:
        """Escape a value for use inside a double-quoted XML attribute."""
        return str(escape(str(value)))

    def _cs_str_filter(self, value: Any) -> str:
        """Render a value as a C# string literal."""
        text = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{text}"'

    def _annotation_str_filter(self, value: Any) -> str:
        """Render a value as a double-quoted Doctrine annotation string."""
        text = str(value).replace('"', '""')
        return f'"{text}"'


def create_template_engine(template_dir: TemplateDirs = None) -> TemplateEngine:
    """Create a template engine for the given directory or directories."""
    return TemplateEngine(template_dir)
