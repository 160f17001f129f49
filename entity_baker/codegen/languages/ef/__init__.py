"""
Entity Framework code generator module.

Generates partial C# entity classes with change notification and
extension files for Entity Framework.
"""

from ...core.config import load_config
from .generator import EntityFrameworkGenerator
from .types import EntityFrameworkTypeMapper

__all__ = [
    "EntityFrameworkGenerator",
    "EntityFrameworkTypeMapper",
    "create_ef_generator",
]


def create_ef_generator(**kwargs) -> EntityFrameworkGenerator:
    """Create an Entity Framework generator with the given options."""
    return EntityFrameworkGenerator(load_config("ef", kwargs))
