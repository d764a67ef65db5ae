"""Tests for CLI commands."""

import json
from pathlib import Path

from click.testing import CliRunner

from shower_map import __version__
from shower_map.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
SHOWER = str(FIXTURES / "shower.yaml")


def _invoke(*args):
    return CliRunner().invoke(main, list(args))


def test_version():
    result = _invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_show_text():
    result = _invoke("show", SHOWER, "--format", "text", "--precision", "1")
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0].startswith("id: 1 = (e-, 0.1)")


def test_show_json():
    result = _invoke("show", SHOWER, "--format", "json")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["nodes"]["1"]["particle"] == "e-"


def test_show_ascii_default():
    result = _invoke("show", SHOWER)
    assert result.exit_code == 0, result.output
    assert "9 p 0.9000" in result.output


def test_value():
    result = _invoke("value", SHOWER, "3")
    assert result.exit_code == 0
    assert result.output.strip() == "0.3000"


def test_value_not_matching_exits_1():
    result = _invoke("value", SHOWER, "4", "--type", "e-")
    assert result.exit_code == 1
    assert result.output.strip() == "0.0000"


def test_unknown_id():
    result = _invoke("value", SHOWER, "42")
    assert result.exit_code == 1
    assert "Unknown node id: 42" in result.output


def test_sum_scopes():
    expected = {
        "siblings": "2.1000",
        "children": "1.3000",
        "branch": "1.7000",
        "ancestors": "0.3000",
    }
    for scope, value in expected.items():
        result = _invoke("sum", SHOWER, "4", "--scope", scope)
        assert result.exit_code == 0, (scope, result.output)
        assert result.output.strip() == value


def test_sum_branch_default_with_type():
    result = _invoke("sum", SHOWER, "1", "--type", "e-")
    assert result.exit_code == 0
    assert result.output.strip() == "1.0000"


def test_sum_children_no_match_exits_1():
    result = _invoke("sum", SHOWER, "4", "--scope", "children", "--type", "e+")
    assert result.exit_code == 1


def test_ancestor():
    result = _invoke("ancestor", SHOWER, "8", "--type", "e-")
    assert result.exit_code == 0
    assert result.output.strip() == "2"


def test_ancestor_missing():
    result = _invoke("ancestor", SHOWER, "8", "--type", "e+")
    assert result.exit_code == 1
    assert "No matching ancestor" in result.output


def test_children():
    result = _invoke("children", SHOWER, "2", "--type", "p")
    assert result.exit_code == 0
    assert result.output.strip() == "4 5 9"


def test_heads():
    result = _invoke("heads", SHOWER, "--type", "p")
    assert result.exit_code == 0
    assert result.output.strip() == "4 5 9"

    result = _invoke("heads", SHOWER)
    assert result.output.strip() == "1"


def test_heads_multiple_types():
    result = _invoke("heads", SHOWER, "--type", "p", "--type", "e+")
    assert result.exit_code == 0
    assert result.output.strip() == "3 4 5 9"


def test_heads_with_min_value():
    result = _invoke("heads", SHOWER, "--type", "p", "--min-value", "0.5")
    assert result.output.strip() == "5 6 9"


def test_children_exclude_type():
    result = _invoke("children", SHOWER, "2", "--exclude-type", "p")
    assert result.exit_code == 0
    assert result.output.strip() == "3"


def test_heads_exclude_type():
    result = _invoke("heads", SHOWER, "--exclude-type", "e-")
    assert result.exit_code == 0
    assert result.output.strip() == "3 4 5 9"


def test_exclude_type_overrides_type():
    result = _invoke("value", SHOWER, "4", "-t", "p", "-x", "p")
    assert result.exit_code == 1
    assert result.output.strip() == "0.0000"


def test_bad_event_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- {id: 1}\n")
    result = _invoke("show", str(path))
    assert result.exit_code == 1
    assert "missing type" in result.output


def test_log_level_case_insensitive():
    result = _invoke("--log-level", "debug", "heads", SHOWER)
    assert result.exit_code == 0, result.output


def test_config_init_and_show():
    result = _invoke("config", "init")
    assert result.exit_code == 0, result.output
    assert Path(".shower_map.json").exists()

    result = _invoke("config", "init")
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = _invoke("config", "init", "--force")
    assert result.exit_code == 0

    result = _invoke("config", "show")
    assert result.exit_code == 0
    assert json.loads(result.output)["render"]["precision"] == 4


def test_config_init_global():
    result = _invoke("config", "init", "--global")
    assert result.exit_code == 0, result.output
    assert (Path.home() / ".shower_map_config.json").exists()


def test_config_file_option(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"render": {"precision": 2}}))
    result = _invoke("--config", str(path), "value", SHOWER, "3")
    assert result.output.strip() == "0.30"


def test_env_precision(monkeypatch):
    monkeypatch.setenv("SHOWER_MAP_PRECISION", "1")
    result = _invoke("value", SHOWER, "3")
    assert result.output.strip() == "0.3"


def test_invalid_config_reported(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    result = _invoke("--config", str(path), "heads", SHOWER)
    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_config_with_string_precision_reported(tmp_path):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps({"render": {"precision": "4"}}))
    result = _invoke("--config", str(path), "value", SHOWER, "3")
    assert result.exit_code == 1
    assert "precision must be an integer" in result.output


def test_config_with_null_render_reported(tmp_path):
    path = tmp_path / "null.json"
    path.write_text(json.dumps({"render": None}))
    result = _invoke("--config", str(path), "heads", SHOWER)
    assert result.exit_code == 1
    assert "render section must be an object" in result.output
