"""
Doctrine code generator module.

Generates PHP entity classes, extension traits and XML mapping files
for the Doctrine ORM.
"""

from ...core.config import load_config
from .generator import DoctrineGenerator
from .types import DoctrineTypeMapper

__all__ = [
    "DoctrineGenerator",
    "DoctrineTypeMapper",
    "create_doctrine_generator",
]


def create_doctrine_generator(xml_out_dir: str = None, **kwargs) -> DoctrineGenerator:
    """
    Create a Doctrine generator.

    Args:
        xml_out_dir: Directory of the mapping files, relative to the output directory
        **kwargs: Additional generator options (add_header, add_comments, ...)

    Returns:
        Configured DoctrineGenerator instance
    """
    overrides = dict(kwargs)
    if xml_out_dir is not None:
        overrides["xml_out_dir"] = xml_out_dir
    return DoctrineGenerator(load_config("doctrine", overrides))
