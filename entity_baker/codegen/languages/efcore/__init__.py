"""
Entity Framework Core code generator module.
"""

from ...core.config import load_config
from .generator import EntityFrameworkCoreGenerator
from .types import ClrTypeMapper

__all__ = [
    "EntityFrameworkCoreGenerator",
    "ClrTypeMapper",
    "create_efcore_generator",
]


def create_efcore_generator(**kwargs) -> EntityFrameworkCoreGenerator:
    """Create an Entity Framework Core generator with the given options."""
    return EntityFrameworkCoreGenerator(load_config("ef-core", kwargs))
