"""Shared pytest fixtures for jsonlogprint tests."""
from __future__ import annotations

import json

import pytest

from jsonlogprint.classify.fields import FieldClassifier
from jsonlogprint.parsers.json_parser import RecordParser
from jsonlogprint.render.renderer import Renderer
from jsonlogprint.render.segments import plain_text
from jsonlogprint.render.styles import StylePolicy
from jsonlogprint.render.timestamps import TimestampFormat


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment from switching color or config on."""
    for name in ("CI", "NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(name, raising=False)
    for name in (
        "JSONLOGPRINT_COLOR",
        "JSONLOGPRINT_TIMESTAMP_FORMAT",
        "JSONLOGPRINT_TIMESTAMP_KEYS",
        "JSONLOGPRINT_LEVEL_KEYS",
        "JSONLOGPRINT_MESSAGE_KEYS",
        "JSONLOGPRINT_INDENT",
        "JSONLOGPRINT_LOG_LEVEL",
        "JSONLOGPRINT_STYLES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def parser() -> RecordParser:
    return RecordParser()


@pytest.fixture()
def renderer() -> Renderer:
    return Renderer(classifier=FieldClassifier(), policy=StylePolicy.plain(), timestamp_format=TimestampFormat.AUTO)


@pytest.fixture()
def render_plain(parser: RecordParser, renderer: Renderer):
    """Return a function rendering one raw line to uncolored text."""

    def _render(line: str) -> str:
        return plain_text(renderer.render(parser.parse_line(line)))

    return _render


@pytest.fixture()
def json_log_lines() -> list[str]:
    return [
        json.dumps({"timestamp": 1627494000, "level": "info", "msg": "Test message 1"}),
        json.dumps({"timestamp": 1627494001, "level": "error", "msg": "Test message 2"}),
        json.dumps({"timestamp": 1627494002, "level": "debug", "msg": "Test message 3"}),
    ]
