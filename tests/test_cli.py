"""Tests for the Typer-based CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
import responses
from typer.testing import CliRunner

from gscontext.cli import app
from gscontext.common.exit_codes import ExitCode

URL = "https://maps.example.com/wfs"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def xml_file(tmp_path: Path) -> Path:
    path = tmp_path / "doc.xml"
    path.write_text("<root><a>1</a></root>", encoding="utf-8")
    return path


def test_indent_file(runner: CliRunner, xml_file: Path) -> None:
    result = runner.invoke(app, ["indent", str(xml_file)])

    assert result.exit_code == ExitCode.OK
    assert result.stdout_bytes.decode("utf-8") == '<?xml version="1.0" encoding="UTF-8"?>\r\n<root>\n  <a>1</a>\n</root>\n'


def test_indent_stdin(runner: CliRunner) -> None:
    result = runner.invoke(app, ["indent", "-"], input="<r><b/></r>")

    assert result.exit_code == ExitCode.OK
    assert "<r>\n  <b/>\n</r>" in result.stdout


def test_indent_respects_overrides(runner: CliRunner, xml_file: Path) -> None:
    result = runner.invoke(app, ["--set", "xml.indent=4", "indent", str(xml_file)])

    assert result.exit_code == ExitCode.OK
    assert "\n    <a>1</a>\n" in result.stdout


@pytest.mark.parametrize("content", ["", "<root><a></root>"])
def test_indent_invalid_input(runner: CliRunner, tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.xml"
    path.write_text(content, encoding="utf-8")

    result = runner.invoke(app, ["indent", str(path)])

    assert result.exit_code == ExitCode.INPUT_ERROR


def test_unreadable_input(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["indent", str(tmp_path / "absent.xml")])

    assert result.exit_code == ExitCode.IO_ERROR


def test_invalid_config_file(runner: CliRunner, tmp_path: Path, xml_file: Path) -> None:
    config = tmp_path / "gscontext.yaml"
    config.write_text("xml:\n  indent: 99\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "indent", str(xml_file)])

    assert result.exit_code == ExitCode.CONFIG_ERROR


def test_malformed_override(runner: CliRunner, xml_file: Path) -> None:
    result = runner.invoke(app, ["--set", "xml.indent", "indent", str(xml_file)])

    assert result.exit_code == ExitCode.CONFIG_ERROR


def test_filter_capabilities(runner: CliRunner, xml_fixtures_dir: Path) -> None:
    result = runner.invoke(app, ["filter-capabilities", str(xml_fixtures_dir / "wfs_capabilities.xml")])

    assert result.exit_code == ExitCode.OK
    assert "Filter_Capabilities" in result.stdout
    assert "FeatureTypeList" not in result.stdout


def test_query_lists_matching_nodes(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "items.xml"
    path.write_text('<r xmlns:x="urn:x"><x:a>one</x:a><x:a>two</x:a><b/></r>', encoding="utf-8")

    result = runner.invoke(app, ["query", str(path), "//x:a", "--ns", "x=urn:x"])

    assert result.exit_code == ExitCode.OK
    assert "2 node(s)" in result.stdout
    assert "x:a" in result.stdout
    assert "one" in result.stdout and "two" in result.stdout


def test_query_with_unbound_prefix(runner: CliRunner, xml_file: Path) -> None:
    result = runner.invoke(app, ["query", str(xml_file), "//nope:a"])

    assert result.exit_code == ExitCode.INPUT_ERROR


def test_query_rejects_malformed_namespace(runner: CliRunner, xml_file: Path) -> None:
    result = runner.invoke(app, ["query", str(xml_file), "//a", "--ns", "missing-uri"])

    assert result.exit_code != ExitCode.OK


@responses.activate
def test_fetch_prints_body(runner: CliRunner) -> None:
    responses.add(responses.GET, URL, body="<wfs:WFS_Capabilities/>")

    result = runner.invoke(app, ["fetch", URL])

    assert result.exit_code == ExitCode.OK
    assert "<wfs:WFS_Capabilities/>" in result.stdout


@responses.activate
def test_fetch_async_posts_body(runner: CliRunner) -> None:
    responses.add(responses.POST, URL, body="<wfs:FeatureCollection/>")

    result = runner.invoke(app, ["fetch", URL, "--data", "<wfs:GetFeature/>", "--content-type", "text/xml", "--async"])

    assert result.exit_code == ExitCode.OK
    assert "<wfs:FeatureCollection/>" in result.stdout
    assert responses.calls[0].request.headers["Content-Type"] == "text/xml"


@responses.activate
def test_fetch_failure(runner: CliRunner) -> None:
    responses.add(responses.GET, URL, status=503)

    assert runner.invoke(app, ["fetch", URL]).exit_code == ExitCode.HTTP_ERROR
    assert runner.invoke(app, ["fetch", URL, "--async"]).exit_code == ExitCode.HTTP_ERROR


def test_resource(runner: CliRunner, resources_dir: Path) -> None:
    result = runner.invoke(app, ["--set", f"resources.search_paths={resources_dir}", "resource", "gs/config/app.json"])

    assert result.exit_code == ExitCode.OK
    assert "géoportail" in result.stdout


def test_bundled_resource(runner: CliRunner) -> None:
    result = runner.invoke(app, ["resource", "gs/xml/filter-capabilities.xml"])

    assert result.exit_code == ExitCode.OK
    assert "Filter_Capabilities" in result.stdout


def test_resource_errors(runner: CliRunner) -> None:
    assert runner.invoke(app, ["resource", "gs/absent.txt"]).exit_code == ExitCode.IO_ERROR
    assert runner.invoke(app, ["resource", "gs/xml/filter-capabilities.xml", "--charset", "bogus"]).exit_code == ExitCode.CONFIG_ERROR
