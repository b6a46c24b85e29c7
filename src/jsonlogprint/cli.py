"""jsonlogprint CLI — entry point.

Reads newline-delimited JSON logs on stdin and writes a readable, colored
rendering to stdout::

    kubectl logs my-pod | jsonlogprint
    ./server 2>&1 | jsonlogprint --color always --tsfmt millis | less -R
"""
from __future__ import annotations

import io
import logging
import os
import sys
from typing import TextIO

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import ConfigError, Settings, load_settings
from .printer import LogPrinter

logger = logging.getLogger("jsonlogprint")

err_console = Console(stderr=True)

# Exit status for a terminating Ctrl-C, as the shell reports it.
_EXIT_INTERRUPTED = 130


# ── Helpers ─────────────────────────────────────────────────────────────────


def _configure_logging(settings: Settings) -> None:
    """Send diagnostics to stderr; stdout carries only rendered log lines."""
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(settings.log_level_number)
    logger.propagate = False


def _tolerant(stream: TextIO, errors: str = "replace") -> TextIO:
    """Replace characters the stream cannot decode or encode instead of failing mid-stream."""
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors=errors)
    return stream


def _silence_stdout() -> None:
    # The reader went away; keep the interpreter's final flush from failing too.
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version="1.0.0", prog_name="jsonlogprint")
@click.option(
    "--color", "color", default=None,
    type=click.Choice(["always", "auto", "never", "on", "off"], case_sensitive=False),
    help="Color output (default: auto, colored only on a terminal).",
)
@click.option(
    "--timestamp-format", "--tsfmt", "timestamp_format", default=None,
    type=click.Choice(["auto", "seconds", "millis", "raw"], case_sensitive=False),
    help="How numeric timestamps are shown. auto, seconds and millis convert to ISO-8601 UTC; raw prints the number.",
)
@click.option("--timestamp-keys", default=None, help="Comma-separated timestamp keys, highest priority first.")
@click.option("--level-keys", default=None, help="Comma-separated level keys, highest priority first.")
@click.option("--message-keys", default=None, help="Comma-separated message keys, highest priority first.")
@click.option("--indent", default=None, type=int, help="Spaces per nesting level for nested values.")
@click.option(
    "--log-level", default=None,
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    help="Diagnostic log level (stderr).",
)
def main(
    color: str | None,
    timestamp_format: str | None,
    timestamp_keys: str | None,
    level_keys: str | None,
    message_keys: str | None,
    indent: int | None,
    log_level: str | None,
) -> None:
    """Pretty-print JSON log lines from stdin.

    Recognized fields (timestamp, level, message) lead each line, the other
    fields follow as key=value pairs in their original order. Nested values
    and multi-line strings such as stack traces are printed as indented
    blocks. Lines that are not JSON objects pass through unchanged.

    Every option can also be set with a JSONLOGPRINT_<OPTION> environment
    variable, e.g. JSONLOGPRINT_COLOR=never.

    \b
    Examples:
      ./app | jsonlogprint
      ./app | jsonlogprint --message-keys msg,event --tsfmt raw
      jsonlogprint-generate 20 | jsonlogprint --color always
    """
    try:
        settings = load_settings(
            color=color,
            timestamp_format=timestamp_format,
            timestamp_keys=timestamp_keys,
            level_keys=level_keys,
            message_keys=message_keys,
            indent=indent,
            log_level=log_level,
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    _configure_logging(settings)
    logger.debug("Starting up with %r", settings)

    stdin = _tolerant(sys.stdin)
    # Lone surrogates from JSON escapes cannot be encoded as UTF-8.
    stdout = _tolerant(sys.stdout, errors="backslashreplace")
    printer = LogPrinter.from_settings(settings, stream=stdout)

    try:
        count = printer.run(stdin, stdout)
    except BrokenPipeError:
        _silence_stdout()
        sys.exit(1)
    except OSError as exc:
        logger.error("Output failed: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(_EXIT_INTERRUPTED)

    logger.debug("Processed %d lines", count)


if __name__ == "__main__":
    main()
