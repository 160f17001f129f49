"""
Exception hierarchy for entity compilation.

Entity-scoped errors (invalid names, duplicate columns, unsupported types)
abort a single entity; target and output-directory errors abort a whole
compile call.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class InvalidIdentifier(GeneratorError):
    """Raised when a class or column name is not a valid identifier."""

    def __init__(self, value: str, kind: str = "name"):
        self.value = value
        self.kind = kind
        super().__init__(f"The {kind} name '{value}' is invalid!")


class DuplicateColumn(GeneratorError):
    """Raised when the same column key appears twice in one entity."""

    def __init__(self, column: str, entity: Optional[str] = None):
        self.column = column
        self.entity = entity
        super().__init__(f"The column '{column}' has already been defined!")


class DuplicateEntity(GeneratorError):
    """Raised when two entity keys of one file name the same class."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"The entity '{entity}' has already been defined!")


class UnsupportedType(GeneratorError):
    """Raised when a type tag is not recognized by a target."""

    def __init__(self, type_tag: str, target: str):
        self.type_tag = type_tag
        self.target = target
        super().__init__(
            f"The data type '{type_tag}' is not supported by {target}!"
        )


class RegistryError(GeneratorError):
    """Exception raised for registry-related errors."""

    pass


class UnsupportedTarget(RegistryError):
    """Raised when no generator is registered for a target."""

    def __init__(self, target: str, available: Optional[list] = None):
        self.target = target
        self.available = available or []
        message = f"Target {target} is not supported!"
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class FilesystemError(GeneratorError):
    """Raised when an existence check, directory creation or write fails."""

    def __init__(self, message: str, path=None):
        self.path = path
        super().__init__(message)
