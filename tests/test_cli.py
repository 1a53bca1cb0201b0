"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder
from webpulse.cli import _build_parser, main


def _react_app(project_builder: ProjectBuilder) -> str:
    project_builder.write(
        {
            "index.html": '<html><body><script src="app.js"></script></body></html>\n',
            "app.js": "function start() { return 1; }\n",
            "package.json": '{"name": "app", "dependencies": {"react": "^18.2.0"}}',
        }
    )
    return str(project_builder.path())


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze"])
    assert args.verbose is True
    assert args.command == "analyze"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["issues", "src", "--verbose"])
    assert args.verbose is True
    assert args.command == "issues"
    assert args.path == "src"


def test_cli_estimate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["estimate", "--value", "js_heap_size", "--format", "KB"])
    assert args.value == "js_heap_size"
    assert args.value_format == "KB"


def test_cli_rejects_unknown_estimate_value() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["estimate", "--value", "cpu"])


def test_cli_serve_defaults() -> None:
    args = _build_parser().parse_args(["serve"])
    assert (args.host, args.port) == ("0.0.0.0", 8000)


def test_analyze_prints_report(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["analyze", _react_app(project_builder)])

    out = capsys.readouterr().out
    assert "Primary Framework: React" in out
    assert "Estimated Resource Usage:" in out
    assert "Potential Issues:" in out


def test_analyze_json_output(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["analyze", _react_app(project_builder), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["project"]["framework"] == "React"
    assert payload["project"]["html_file_count"] == 1
    assert payload["estimation"]["js_heap_size"] > 0
    assert payload["performance_impact"] > 0


def test_issues_command(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["issues", _react_app(project_builder)])

    assert capsys.readouterr().out == "\nPotential Issues:\nNo potential issues found.\n"


def test_estimate_single_value(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    path = _react_app(project_builder)

    main(["estimate", path, "--value", "dom_content_loaded"])
    line = capsys.readouterr().out
    assert line.startswith("DOMContentLoaded: ")
    assert line.endswith(" ms\n")

    main(["estimate", path, "--value", "transferred_data", "--format", "raw"])
    assert capsys.readouterr().out.startswith("Transferred Data: ")


def test_estimate_table(project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    main(["estimate", _react_app(project_builder)])
    assert capsys.readouterr().out.startswith("Estimated Resource Usage:\n")


def test_missing_path_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "could not analyse" in capsys.readouterr().err


def test_invalid_config_exits_with_error(project_builder: ProjectBuilder) -> None:
    project_builder.write({".webpulse.yml": "- not\n- a mapping\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["issues", str(project_builder.path())])

    assert excinfo.value.code == 1
