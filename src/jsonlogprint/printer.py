"""The line pipeline: parse, classify, render, write.

Each line is handled to completion, including the flush, before the next
one is read. Nothing is carried from one line to the next.
"""
from __future__ import annotations

import logging
from typing import Iterable, TextIO

from .classify.fields import FieldClassifier
from .config import Settings, role_overrides
from .parsers.json_parser import RecordParser
from .render.renderer import Renderer
from .render.styles import StylePolicy
from .render.writer import OutputWriter

logger = logging.getLogger(__name__)


class LogPrinter:
    """Format NDJSON log lines for a terminal.

    Usage::

        printer = LogPrinter.from_settings(settings, stream=sys.stdout)
        printer.run(sys.stdin, sys.stdout)
    """

    def __init__(self, renderer: Renderer | None = None, parser: RecordParser | None = None) -> None:
        self.parser = parser or RecordParser()
        self.renderer = renderer or Renderer()

    @classmethod
    def from_settings(cls, settings: Settings, stream: TextIO | None = None) -> LogPrinter:
        """Build a printer; ``stream`` is the output used for color auto-detection."""
        policy = StylePolicy.from_color_mode(
            settings.color, stream=stream, overrides=role_overrides(settings.styles)
        )
        classifier = FieldClassifier(
            timestamp_keys=settings.timestamp_keys,
            level_keys=settings.level_keys,
            message_keys=settings.message_keys,
        )
        renderer = Renderer(
            classifier=classifier,
            policy=policy,
            timestamp_format=settings.timestamp_format,
            indent=settings.indent,
        )
        logger.debug("Color output %s", "enabled" if policy.enabled else "disabled")
        return cls(renderer=renderer)

    def format_line(self, line: str) -> str:
        """Render one raw input line, without the trailing newline."""
        return self.renderer.render_text(self.parser.parse_line(line))

    def run(self, lines: Iterable[str], out: TextIO) -> int:
        """Process every line from ``lines`` and return how many were written.

        Write errors propagate; there is nobody left to write to.
        """
        writer = OutputWriter(out)
        count = 0
        for line in lines:
            writer.write(self.format_line(line))
            count += 1
        return count
