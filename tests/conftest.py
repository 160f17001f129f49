"""Shared fixtures for entity-baker tests."""
import pytest


@pytest.fixture
def user_entities():
    """The App.Db/User entity file used across the tests."""
    return {
        "namespace": "App.Db",
        "entities": {
            "User": {
                "table": "users",
                "columns": {
                    "id": {"type": "int32", "id": True, "auto": True},
                    "name": "string",
                },
            }
        },
    }


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "out"
