"""Tests for identifier validation and accessor name derivation."""
import pytest

from entity_baker.codegen.core.errors import InvalidIdentifier
from entity_baker.codegen.core.naming import (
    derive_method_suffix,
    find_suffix_collisions,
    is_valid_identifier,
    normalize_string,
    to_bool,
    validate_identifier,
)


@pytest.mark.parametrize("raw", ["User", "user_email", "_private", "Column1", "  padded  "])
def test_valid_identifiers_validate_to_trimmed_name(raw):
    assert validate_identifier(raw) == raw.strip()
    assert is_valid_identifier(raw)


@pytest.mark.parametrize("raw", ["", "   ", "1st", "first-name", "user email", "naïve", None])
def test_invalid_identifiers_raise(raw):
    assert not is_valid_identifier(raw)
    with pytest.raises(InvalidIdentifier):
        validate_identifier(raw, "column")


def test_invalid_identifier_message_names_kind():
    with pytest.raises(InvalidIdentifier) as exc_info:
        validate_identifier("bad name", "class")

    assert exc_info.value.kind == "class"
    assert exc_info.value.value == "bad name"
    assert "class name 'bad name' is invalid" in str(exc_info.value)


@pytest.mark.parametrize(
    "column, suffix",
    [
        ("user_email", "UserEmail"),
        ("first-name", "FirstName"),
        ("  id  ", "Id"),
        ("a\tb", "AB"),
        ("__double__under", "DoubleUnder"),
        ("camelCase", "CamelCase"),
        ("x", "X"),
    ],
)
def test_derive_method_suffix(column, suffix):
    assert derive_method_suffix(column) == suffix


def test_derive_method_suffix_without_words_is_empty():
    assert derive_method_suffix("__") == ""


def test_find_suffix_collisions():
    warnings = find_suffix_collisions({"Id": "Id", "id": "Id", "name": "Name"})

    assert len(warnings) == 1
    assert "'Id'" in warnings[0] and "'id'" in warnings[0]


def test_normalize_string():
    assert normalize_string("  MiXeD ") == "mixed"
    assert normalize_string(None) == ""


@pytest.mark.parametrize("value", [True, 1, "1", "true", "TRUE", " yes ", "y"])
def test_to_bool_true(value):
    assert to_bool(value) is True


@pytest.mark.parametrize("value", [False, 0, "0", "false", "No", "n", "", None])
def test_to_bool_false(value):
    assert to_bool(value) is False
