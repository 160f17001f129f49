"""
entity-baker: ORM entity class generator.

Compiles entity descriptions (JSON, XML or YAML) into entity classes for
Doctrine, Entity Framework and Entity Framework Core.
"""

__version__ = "0.1.0"
