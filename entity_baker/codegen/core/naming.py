"""
Naming utilities for safe code generation.

Validates class and column names and derives the method/property
name fragments used by every target.
"""

import re
from typing import Any, List, Optional

from .errors import InvalidIdentifier

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

# Characters that separate words inside a column key
WORD_SEPARATORS = re.compile(r"[_\-\t]")


def to_string_safe(value: Any, default: str = "") -> str:
    """Convert a value to a string, mapping None to the default."""
    if isinstance(value, str):
        return value
    if value is None:
        return default
    return str(value)


def normalize_string(value: Any) -> str:
    """Normalize a value for comparison (lower-cased and trimmed)."""
    return to_string_safe(value).lower().strip()


def to_bool(value: Any, default: bool = False) -> bool:
    """
    Convert a flag value to a boolean.

    Text encodings (XML in particular) deliver flags as strings, so
    '1/0', 'true/false', 'yes/no' and 'y/n' are understood. Blank values
    give the default.
    """
    if isinstance(value, bool):
        return value
    if to_string_safe(value).strip() == "":
        return bool(default)

    normalized = normalize_string(value)
    if normalized in ("0", "false", "n", "no"):
        return False
    if normalized in ("1", "true", "y", "yes"):
        return True
    return bool(value)


def is_valid_identifier(raw: Any) -> bool:
    """Check whether a value is usable as a class or column name."""
    name = to_string_safe(raw).strip()
    return bool(IDENTIFIER_PATTERN.match(name)) and not name[0].isdigit()


def validate_identifier(raw: Any, kind: str = "name") -> str:
    """
    Validate a class or column name.

    Args:
        raw: Raw name as found in the entity description
        kind: What the name is for ('class' or 'column'), used in errors

    Returns:
        The trimmed name

    Raises:
        InvalidIdentifier: If the trimmed name contains characters other than
            letters, digits and underscores, or starts with a digit
    """
    if not is_valid_identifier(raw):
        raise InvalidIdentifier(to_string_safe(raw), kind)
    return to_string_safe(raw).strip()


def split_words(column_key: str) -> List[str]:
    """Split a column key into its non-empty, trimmed words."""
    words = WORD_SEPARATORS.split(to_string_safe(column_key))
    return [w.strip() for w in words if w.strip()]


def derive_method_suffix(column_key: str) -> str:
    """
    Derive the getter/setter suffix for a column.

    user_email -> UserEmail, first-name -> FirstName. Only the first
    character of each word is changed.
    """
    return "".join(word[0].upper() + word[1:] for word in split_words(column_key))


def find_suffix_collisions(methods: dict) -> List[str]:
    """Return warnings for columns that derive the same method suffix."""
    seen: dict = {}
    warnings = []
    for column, suffix in methods.items():
        other: Optional[str] = seen.get(suffix)
        if other is not None:
            warnings.append(
                f"Columns '{other}' and '{column}' both map to accessor name '{suffix}'"
            )
        else:
            seen[suffix] = column
    return warnings
