import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from servicemock.__main__ import cli


@pytest.mark.smoke
def test_render_json_definition(tmp_path: Path):
    path = tmp_path / "created.json"
    path.write_text(
        json.dumps(
            {
                "status": 201,
                "delay": 50,
                "percentile": 20,
                "headers": {"Content-Type": "application/json"},
                "body": {"id": 1},
            }
        )
    )

    result = CliRunner().invoke(cli, ["render", str(path)])

    assert result.exit_code == 0, result.output
    assert "Status: 201" in result.output
    assert "Delay: 50ms" in result.output
    assert "Percentile: 20" in result.output
    assert "Content-Type: application/json" in result.output
    assert json.dumps({"id": 1}, indent=2) in result.output


@pytest.mark.sanity
def test_render_yaml_with_reference_and_defaults(tmp_path: Path):
    fixtures = tmp_path / "fixtures"
    fixtures.mkdir()
    (fixtures / "missing.txt").write_text("nothing here")
    path = tmp_path / "missing.yaml"
    path.write_text("body: missing.txt\n")

    result = CliRunner().invoke(
        cli,
        [
            "render",
            str(path),
            "--default-status",
            "404",
            "--default-delay",
            "250",
            "--root",
            str(fixtures),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Status: 404" in result.output
    assert "Delay: 250ms" in result.output
    assert "nothing here" in result.output


@pytest.mark.sanity
def test_render_unresolvable_reference(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("body: does-not-exist.txt\n")

    result = CliRunner().invoke(cli, ["render", str(path), "--root", str(tmp_path)])

    assert result.exit_code != 0
    assert "Failed to parse endpoint response" in result.output


@pytest.mark.sanity
def test_render_missing_file(tmp_path: Path):
    result = CliRunner().invoke(cli, ["render", str(tmp_path / "nope.json")])
    assert result.exit_code != 0


@pytest.mark.smoke
def test_config_command():
    result = CliRunner().invoke(cli, ["config"])

    assert result.exit_code == 0
    assert "SERVICEMOCK__RESPONSES__DEFAULT_STATUS" in result.output
