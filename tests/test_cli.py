"""Tests for the command line interface."""
import io
import json

import pytest
from rich.console import Console

from entity_baker.cli import EXIT_FAILED, EXIT_NO_TARGET, EXIT_OK, create_parser, main


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def workspace(tmp_path, monkeypatch, user_entities):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "entities.json").write_text(json.dumps(user_entities), encoding="utf-8")
    return tmp_path


def output(console):
    return console.file.getvalue()


def test_parser_aliases():
    parser = create_parser()

    args = parser.parse_args(["--d", "--entity-framework", "--efc", "--dxo", "xml", "a.json"])

    assert args.doctrine and args.entity_framework and args.entity_framework_core
    assert args.doctrine_xml_out == "xml"
    assert args.files == ["a.json"]


def test_no_target(workspace, console):
    assert main([], console) == EXIT_NO_TARGET
    assert "Select at least one target" in output(console)
    assert not (workspace / "out").exists()


def test_default_input_and_out_dir(workspace, console):
    assert main(["--doctrine"], console) == EXIT_OK

    out = workspace / "out"
    assert (out / "App" / "Db" / "User.php").is_file()
    assert (out / "App.Db.User.dcm.xml").is_file()
    assert "'User'" in output(console)


def test_multiple_targets_use_subdirectories(workspace, console):
    assert main(["-d", "--ef", "--efc", "-o", "gen"], console) == EXIT_OK

    gen = workspace / "gen"
    assert (gen / "doctrine" / "App" / "Db" / "User.php").is_file()
    assert (gen / "ef" / "App" / "Db" / "User.cs").is_file()
    assert (gen / "ef-core" / "App" / "Db" / "User.cs").is_file()


def test_multiple_out_dirs(workspace, console):
    assert main(["--ef", "-o", "a", "-o", "b"], console) == EXIT_OK

    assert (workspace / "a" / "App" / "Db" / "User.cs").is_file()
    assert (workspace / "b" / "App" / "Db" / "User.cs").is_file()


def test_doctrine_xml_out(workspace, console):
    assert main(["-d", "--dxo", "mapping"], console) == EXIT_OK

    assert (workspace / "out" / "mapping" / "App.Db.User.dcm.xml").is_file()


def test_config_file(workspace, console):
    (workspace / "entity-baker.yaml").write_text(
        "entityFrameworkCore: true\ninputFiles: entities.json\noutDir: cfg\n",
        encoding="utf-8",
    )

    assert main(["-c", "entity-baker.yaml"], console) == EXIT_OK

    assert (workspace / "cfg" / "App" / "Db" / "User.cs").is_file()


def test_missing_config_file(workspace, console):
    assert main(["-c", "missing.json", "--ef"], console) == EXIT_FAILED
    assert "not found" in output(console)


def test_no_input_files(tmp_path, monkeypatch, console):
    monkeypatch.chdir(tmp_path)

    assert main(["--ef"], console) == EXIT_FAILED
    assert "No input files found" in output(console)


def test_failing_entity_sets_exit_code(workspace, console):
    (workspace / "broken.json").write_text(
        json.dumps({"entities": {"Bad": {"columns": {"x": "uuid"}}, "Good": {}}}),
        encoding="utf-8",
    )

    assert main(["--ef", "broken.json"], console) == EXIT_FAILED

    assert "not supported" in output(console)
    assert (workspace / "out" / "Good.cs").is_file()


def test_invalid_entity_file(workspace, console):
    (workspace / "broken.json").write_text("{", encoding="utf-8")

    assert main(["--ef", "broken.json", "entities.json"], console) == EXIT_FAILED

    assert "Invalid JSON" in output(console)
    assert (workspace / "out" / "App" / "Db" / "User.cs").is_file()


def test_verbose_lists_files(workspace, console):
    assert main(["--ef", "-v"], console) == EXIT_OK
    main(["--ef", "-v"], console)

    assert "User.Extensions.cs (kept)" in output(console)


def test_list_targets(console):
    assert main(["--list-targets"], console) == EXIT_OK

    text = output(console)
    for target in ("doctrine", "ef", "ef-core"):
        assert target in text
    assert "EntityFrameworkCoreGenerator" in text


def test_invalid_log_level_env(workspace, console, monkeypatch):
    monkeypatch.setenv("ENTITY_BAKER_LOG_LEVEL", "chatty")

    assert main(["--ef"], console) == EXIT_FAILED
    assert "Unknown log level" in output(console)
    assert not (workspace / "out").exists()
