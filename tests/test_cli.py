"""Tests for the command-line interface."""

import logging
from pathlib import Path
from unittest.mock import Mock, patch

import graphviz
import pytest
from click.testing import CliRunner

from c4viz.cli import cli, display_mode, setup_logging
from c4viz.core.models import DisplayMode, OutputFormat, Theme


@pytest.fixture
def runner():
    return CliRunner()


def test_display_mode():
    assert display_mode((), False) == DisplayMode.ALL
    assert display_mode(("s",), False) == DisplayMode.SELECTIVE
    assert display_mode(("s",), True) == DisplayMode.ALL


def test_dot_prints_all_clusters(runner, model_file):
    result = runner.invoke(cli, ["dot", str(model_file)])

    assert result.exit_code == 0, result.output
    assert result.output.startswith('digraph "model" {')
    assert 'subgraph "cluster__s"' in result.output
    assert 'subgraph "cluster__other"' in result.output


def test_dot_selective(runner, model_file):
    result = runner.invoke(cli, ["dot", str(model_file), "-s", "s", "--direction", "top-to-bottom"])

    assert result.exit_code == 0, result.output
    assert 'subgraph "cluster__other"' not in result.output
    assert '"other" -> "web"' in result.output
    assert 'rankdir="TB";' in result.output


def test_dot_to_file(runner, model_file, tmp_path):
    output = tmp_path / "model.dot"

    result = runner.invoke(cli, ["dot", str(model_file), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8").startswith('digraph "model" {')


def test_invalid_model_exits_with_error(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"internalSystems": [{"id": "s"}]}', encoding="utf-8")

    result = runner.invoke(cli, ["dot", str(path)])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_list_systems(runner, model_file):
    result = runner.invoke(cli, ["list-systems", str(model_file)])

    assert result.exit_code == 0, result.output
    assert "Internal Systems" in result.output
    assert "other-api" in result.output


def test_themes(runner):
    result = runner.invoke(cli, ["themes"])

    assert result.exit_code == 0, result.output
    assert "light" in result.output
    assert "pdf" in result.output


@patch("c4viz.cli.C4Viz")
def test_export(c4viz_cls, runner, model_file):
    c4viz_cls.return_value.export_diagram.return_value = Path("c4-containers.svg")

    result = runner.invoke(
        cli,
        ["export", str(model_file), "-s", "s", "-f", "svg", "-t", "dark", "--save-dot"],
    )

    assert result.exit_code == 0, result.output
    assert "c4-containers.svg" in result.output
    kwargs = c4viz_cls.return_value.export_diagram.call_args.kwargs
    assert kwargs["output_file"] == "c4-containers.svg"
    assert kwargs["internal_systems"] == ("s",)
    assert kwargs["mode"] == DisplayMode.SELECTIVE
    assert kwargs["theme"] == Theme.DARK
    assert kwargs["output_format"] == OutputFormat.SVG
    assert kwargs["save_dot"] is True


def test_export_mismatched_extension(runner, model_file):
    with patch("c4viz.core.c4viz.GraphRenderer"):
        result = runner.invoke(cli, ["export", str(model_file), "-o", "diagram.svg"])

    assert result.exit_code == 1
    assert "does not match format" in result.output


def test_debug_shows_traceback(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"internalSystems": [{"id": "s"}]}', encoding="utf-8")

    result = runner.invoke(cli, ["--debug", "dot", str(path)])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Traceback" in result.output


def test_no_traceback_without_debug(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"internalSystems": [{"id": "s"}]}', encoding="utf-8")

    result = runner.invoke(cli, ["dot", str(path)])

    assert result.exit_code == 1
    assert "Traceback" not in result.output


def test_setup_logging_levels():
    setup_logging(debug=True)
    assert logging.getLogger().level == logging.DEBUG

    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.INFO

    setup_logging()
    assert logging.getLogger().level == logging.WARNING


def test_validate(runner, model_file):
    source = Mock()
    source.pipe.return_value = b"<svg/>"

    with patch(
        "c4viz.visualization.renderer.shutil.which",
        side_effect=lambda name: "/usr/bin/" + name if name in ("dot", "neato") else None,
    ), patch("c4viz.visualization.renderer.graphviz.Source", return_value=source):
        result = runner.invoke(cli, ["validate", str(model_file)])

    assert result.exit_code == 0, result.output
    assert "Prerequisites Validation" in result.output
    assert "Dot Syntax" in result.output
    assert "FAILED" not in result.output
    assert "Layout engines: dot, neato" in result.output
    assert "validated successfully" in result.output


def test_validate_without_graphviz(runner):
    with patch("c4viz.visualization.renderer.shutil.which", return_value=None):
        result = runner.invoke(cli, ["validate"])

    assert result.exit_code == 1
    assert "FAILED" in result.output
    assert "Install Graphviz" in result.output
    assert "Layout engines" not in result.output


def test_validate_rejected_dot(runner, model_file):
    source = Mock()
    source.pipe.side_effect = graphviz.CalledProcessError(1, ["dot"])

    with patch("c4viz.visualization.renderer.shutil.which", return_value="/usr/bin/dot"), patch(
        "c4viz.visualization.renderer.graphviz.Source",
        return_value=source,
    ):
        result = runner.invoke(cli, ["validate", str(model_file)])

    assert result.exit_code == 1
    assert "FAILED" in result.output
