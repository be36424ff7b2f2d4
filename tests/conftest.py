"""Shared pytest fixtures for gscontext tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog

from gscontext import logging_setup
from gscontext.config import Settings
from gscontext.context import DefaultContext
from gscontext.resource_reader import ResourceReader

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def xml_fixtures_dir() -> Path:
    return FIXTURES_DIR / "xml"


@pytest.fixture()
def csw_record_xml(xml_fixtures_dir: Path) -> str:
    """CSW record with dc/xlink namespaces, whitespace text and a comment."""
    return (xml_fixtures_dir / "csw_record.xml").read_text(encoding="utf-8")


@pytest.fixture()
def wfs_capabilities_xml(xml_fixtures_dir: Path) -> str:
    """WFS GetCapabilities response holding an ogc:Filter_Capabilities section."""
    return (xml_fixtures_dir / "wfs_capabilities.xml").read_text(encoding="utf-8")


@pytest.fixture()
def record_namespaces() -> dict[str, str]:
    return {
        "csw": "http://www.opengis.net/cat/csw/2.0.2",
        "dc": "http://purl.org/dc/elements/1.1/",
        "xlink": "http://www.w3.org/1999/xlink",
    }


@pytest.fixture()
def resources_dir(tmp_path: Path) -> Path:
    root = tmp_path / "resources"
    (root / "gs" / "config").mkdir(parents=True)
    (root / "gs" / "config" / "app.json").write_text('{"name": "géoportail"}', encoding="utf-8")
    return root


@pytest.fixture()
def context(resources_dir: Path) -> DefaultContext:
    return DefaultContext(Settings(), resources=ResourceReader([resources_dir]))


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by the CLI or by configure_logging."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler).__module__.startswith("_pytest"):
            continue
        handler.close()
        root.removeHandler(handler)
    structlog.reset_defaults()
    logging_setup._LOGGING_CONFIGURED = False
