"""Output writer, one rendered block per input line."""
from __future__ import annotations

from typing import TextIO

import click


class OutputWriter:
    """Write rendered text to a stream, flushing after every line.

    Escape codes are passed through untouched: the style policy has already
    decided whether there are any.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        click.echo(text, file=self._stream, color=True)
