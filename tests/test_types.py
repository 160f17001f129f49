"""Tests for the per-target type mapping."""
import pytest

from entity_baker.codegen.core.errors import UnsupportedTarget, UnsupportedType
from entity_baker.codegen.core.types import TypeTag, resolve_type_tag
from entity_baker.codegen.languages.doctrine.types import DoctrineTypeMapper
from entity_baker.codegen.registry import map_type

TARGETS = ["doctrine", "ef", "ef-core"]


def test_default_tag_resolution():
    assert resolve_type_tag("", is_id=True) == TypeTag.INT32
    assert resolve_type_tag(None) == TypeTag.STRING
    assert resolve_type_tag(" BigInt ") == TypeTag.BIGINT


@pytest.mark.parametrize(
    "target, id_type, plain_type",
    [("doctrine", "integer", "string"), ("ef", "int", "string"), ("ef-core", "int", "string")],
)
def test_empty_tag_defaults(target, id_type, plain_type):
    assert map_type(target, "", is_id=True) == id_type
    assert map_type(target, "") == plain_type


@pytest.mark.parametrize("target", TARGETS)
def test_unknown_tag_is_unsupported_everywhere(target):
    with pytest.raises(UnsupportedType) as exc_info:
        map_type(target, "unobtainium")

    assert exc_info.value.type_tag == "unobtainium"
    assert "is not supported by" in str(exc_info.value)


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("str", "string"),
        ("string", "string"),
        ("int", "integer"),
        ("int32", "integer"),
        ("integer", "integer"),
        ("bigint", "bigint"),
        ("int64", "bigint"),
        ("int16", "smallint"),
        ("smallint", "smallint"),
        ("decimal", "decimal"),
        ("float", "float"),
        ("json", "string"),
    ],
)
def test_doctrine_types(tag, expected):
    assert map_type("doctrine", tag) == expected


def test_doctrine_has_no_nullable_marker():
    assert map_type("doctrine", "int", nullable=True) == "integer"


def test_doctrine_error_message():
    with pytest.raises(UnsupportedType, match="not supported by Doctrine!"):
        map_type("doctrine", "uuid")


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("str", "string"),
        ("string", "string"),
        ("int", "int"),
        ("int32", "int"),
        ("integer", "int"),
        ("bigint", "long"),
        ("int64", "long"),
        ("json", "dynamic"),
    ],
)
def test_ef_types(tag, expected):
    assert map_type("ef", tag) == expected


@pytest.mark.parametrize("tag", ["decimal", "float", "int16", "smallint"])
def test_ef_rejects_types_it_cannot_store(tag):
    with pytest.raises(UnsupportedType):
        map_type("ef", tag)


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("string", "string"),
        ("int", "int"),
        ("bigint", "long"),
        ("int16", "short"),
        ("smallint", "short"),
        ("decimal", "decimal"),
        ("float", "float"),
        ("json", "dynamic"),
    ],
)
def test_ef_core_types(tag, expected):
    assert map_type("ef-core", tag) == expected


@pytest.mark.parametrize(
    "target, tag, expected",
    [
        ("ef", "int", "int?"),
        ("ef", "int64", "long?"),
        ("ef", "string", "string"),
        ("ef", "json", "dynamic"),
        ("ef-core", "smallint", "short?"),
        ("ef-core", "decimal", "decimal?"),
        ("ef-core", "float", "float?"),
        ("ef-core", "str", "string"),
        ("ef-core", "json", "dynamic"),
    ],
)
def test_dotnet_nullable_marker(target, tag, expected):
    assert map_type(target, tag, nullable=True) == expected


def test_tags_are_normalized():
    assert map_type("ef-core", "  INT64 ") == "long"


def test_map_type_accepts_aliases():
    assert map_type("efc", "int16") == "short"
    assert map_type("d", "int") == "integer"


def test_map_type_unknown_target():
    with pytest.raises(UnsupportedTarget):
        map_type("hibernate", "int")


@pytest.mark.parametrize(
    "tag, expected",
    [("", "string"), ("str", "string"), ("int64", "integer"), ("integer", "integer"),
     ("json", "mixed"), ("float", "mixed")],
)
def test_doctrine_php_doc_types(tag, expected):
    assert DoctrineTypeMapper().php_doc_type(tag) == expected
