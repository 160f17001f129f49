"""Tests for generator configuration and run settings."""
import json

import pytest

from entity_baker.codegen.core.config import (
    DEFAULT_INPUT_FILE,
    DEFAULT_OUT_DIR,
    BakerSettings,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


def test_defaults():
    config = load_config("doctrine")

    assert config == GeneratorConfig()
    assert config.add_header is True
    assert config.xml_out_dir is None


def test_camel_case_overrides_and_custom_keys():
    config = load_config("ef", {"addHeader": False, "indentSize": 2})

    assert config.add_header is False
    assert config.custom == {"indentSize": 2}


def test_text_flags():
    config = load_config("ef", {"add_comments": "false", "addHeader": "1"})

    assert config.add_comments is False
    assert config.add_header is True


def test_config_file_sections(tmp_path):
    path = tmp_path / "generators.json"
    path.write_text(
        json.dumps({"doctrine": {"xmlOutDir": "xml"}, "ef": {"addComments": False}}),
        encoding="utf-8",
    )
    manager = ConfigManager()

    assert manager.get_config("doctrine", config_file=path).xml_out_dir == "xml"
    assert manager.get_config("ef", config_file=path).add_comments is False
    assert manager.get_config("ef-core", config_file=path).add_comments is True


def test_overrides_win_over_file(tmp_path):
    path = tmp_path / "generators.yaml"
    path.write_text("addHeader: false\n", encoding="utf-8")

    config = load_config("ef", {"add_header": True}, config_file=path)

    assert config.add_header is True


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config("ef", config_file=tmp_path / "missing.json")


def test_invalid_config_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigError, match="must contain an object"):
        load_config("ef", config_file=path)


def test_settings_defaults():
    settings = BakerSettings()

    assert settings.targets == []
    assert settings.effective_input_files() == [DEFAULT_INPUT_FILE]
    assert settings.effective_out_dirs() == [DEFAULT_OUT_DIR]


def test_settings_apply():
    settings = BakerSettings(input_files=["first.json"])

    settings.apply(
        {
            "entityFrameworkCore": "yes",
            "doctrine": True,
            "inputFiles": ["a.json", "", None],
            "outDir": "gen",
            "doctrineXmlOutDir": " xml ",
        }
    )

    assert settings.targets == ["doctrine", "ef-core"]
    assert settings.input_files == ["first.json", "a.json"]
    assert settings.out_dirs == ["gen"]
    assert settings.doctrine_xml_out_dir == "xml"
    assert settings.generator_config("doctrine").xml_out_dir == "xml"
    assert settings.generator_config("ef").xml_out_dir is None


def test_settings_apply_xml_file(tmp_path):
    path = tmp_path / "entity-baker.xml"
    path.write_text(
        "<entity_baker><entityFramework>true</entityFramework>"
        "<inputFiles>a.json</inputFiles><inputFiles>b.json</inputFiles></entity_baker>",
        encoding="utf-8",
    )
    settings = BakerSettings()

    settings.apply_file(path)

    assert settings.targets == ["ef"]
    assert settings.input_files == ["a.json", "b.json"]


def test_settings_apply_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        BakerSettings().apply_file(tmp_path / "missing.yaml")
