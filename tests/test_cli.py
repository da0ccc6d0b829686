"""Tests for the dectable command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from dectable.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(env={"DECTABLE_LOG_LEVEL": "ERROR"})


class TestCheckCommand:
    """Tests for `dectable check`."""

    def test_sound_table_exits_zero(self, runner, sound_document):
        result = runner.invoke(cli, ["check", str(sound_document)])
        assert result.exit_code == 0
        assert "passes all checks" in result.output

    def test_json_output(self, runner, sound_document):
        result = runner.invoke(cli, ["check", str(sound_document), "--format", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload == {"table": "Traffic light", "sound": True, "diagnostics": []}

    def test_fatal_problems_exit_one(self, runner, incomplete_document):
        result = runner.invoke(cli, ["check", str(incomplete_document), "-f", "json"])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["sound"] is False
        assert payload["diagnostics"][0]["severity"] == "fatal"
        assert payload["diagnostics"][0]["kind"] == "incomplete_rule"

    def test_advisory_problems_exit_zero_unless_strict(self, runner, tmp_path):
        path = tmp_path / "gaps.yaml"
        path.write_text(
            "vars: {A: boolean}\n"
            "rules:\n"
            "  - condition: {A: T}\n"
            "    action: X\n"
        )
        assert runner.invoke(cli, ["check", str(path)]).exit_code == 0
        assert runner.invoke(cli, ["check", str(path), "--strict"]).exit_code == 1

    def test_missing_document_exits_two(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 2
        assert "E102" in result.output

    def test_state_space_limit(self, sound_document):
        runner = CliRunner(env={"DECTABLE_LOG_LEVEL": "ERROR", "DECTABLE_MAX_STATE_SPACE": "5"})
        result = runner.invoke(cli, ["check", str(sound_document)])
        assert result.exit_code == 2
        assert "E402" in result.output
        assert "6 conditions" in result.output

    def test_config_file(self, runner, sound_document, tmp_path):
        config = tmp_path / "dectable.yaml"
        config.write_text("max_state_space: 3\n")
        result = runner.invoke(cli, ["--config", str(config), "check", str(sound_document)])
        assert result.exit_code == 2

    def test_invalid_config_exits_two(self, runner, sound_document, tmp_path):
        config = tmp_path / "dectable.yaml"
        config.write_text("- not\n- a mapping\n")
        result = runner.invoke(cli, ["--config", str(config), "check", str(sound_document)])
        assert result.exit_code == 2
        assert "E401" in result.output

    def test_mistyped_config_value_exits_two(self, runner, sound_document, tmp_path):
        config = tmp_path / "dectable.yaml"
        config.write_text("max_state_space: lots\n")
        result = runner.invoke(cli, ["--config", str(config), "check", str(sound_document)])
        assert result.exit_code == 2
        assert "E401" in result.output
        assert "max_state_space" in result.output

    def test_malformed_config_yaml_exits_two(self, runner, sound_document, tmp_path):
        config = tmp_path / "dectable.yaml"
        config.write_text("max_state_space: [unclosed\n")
        result = runner.invoke(cli, ["--config", str(config), "check", str(sound_document)])
        assert result.exit_code == 2
        assert "E401" in result.output

    def test_bad_environment_value_exits_two(self, sound_document):
        runner = CliRunner(env={"DECTABLE_LOG_LEVEL": "ERROR", "DECTABLE_MAX_STATE_SPACE": "lots"})
        result = runner.invoke(cli, ["check", str(sound_document)])
        assert result.exit_code == 2
        assert "E401" in result.output
        assert "DECTABLE_MAX_STATE_SPACE" in result.output


class TestDocumentCommand:
    """Tests for `dectable document`."""

    def test_writes_beside_table(self, runner, sound_document):
        result = runner.invoke(cli, ["document", str(sound_document)])
        assert result.exit_code == 0
        written = sound_document.parent / "traffic-light.md"
        assert "Decision table summary available at" in result.output
        assert written.read_text(encoding="utf-8").startswith("# Traffic light")

    def test_output_directory(self, runner, sound_document, tmp_path):
        out = tmp_path / "docs"
        result = runner.invoke(cli, ["document", str(sound_document), "-o", str(out)])
        assert result.exit_code == 0
        assert (out / "traffic-light.md").exists()

    def test_report_dir_from_environment(self, sound_document, tmp_path):
        out = tmp_path / "reports"
        runner = CliRunner(env={"DECTABLE_LOG_LEVEL": "ERROR", "DECTABLE_REPORT_DIR": str(out)})
        result = runner.invoke(cli, ["document", str(sound_document)])
        assert result.exit_code == 0
        assert (out / "traffic-light.md").exists()

    def test_problems_reported(self, runner, incomplete_document):
        result = runner.invoke(cli, ["document", str(incomplete_document)])
        assert result.exit_code == 0
        assert "Found 1 problems with table, please see" in result.output
        written = incomplete_document.parent / "broken.md"
        assert written.read_text(encoding="utf-8").startswith("❌ Rule 0")


class TestCasesCommand:
    """Tests for `dectable cases`."""

    def test_json_cases(self, runner, sound_document):
        result = runner.invoke(cli, ["cases", str(sound_document), "--format", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert len(payload) == 6
        assert payload[0] == {
            "rule_index": 0,
            "condition": {"signal": "red", "canStop": "T"},
            "action": "brake",
        }

    def test_text_cases(self, runner, sound_document):
        result = runner.invoke(cli, ["cases", str(sound_document)])
        assert result.exit_code == 0
        assert "6 test case(s)" in result.output
