"""
Target-specific code generators.

This module contains generators for the supported ORM ecosystems.
"""

from .doctrine import DoctrineGenerator, create_doctrine_generator
from .ef import EntityFrameworkGenerator, create_ef_generator
from .efcore import EntityFrameworkCoreGenerator, create_efcore_generator

__all__ = [
    "DoctrineGenerator",
    "create_doctrine_generator",
    "EntityFrameworkGenerator",
    "create_ef_generator",
    "EntityFrameworkCoreGenerator",
    "create_efcore_generator",
]
