"""Sample log generator for trying out and benchmarking jsonlogprint.

Writes a mix of NDJSON records and the occasional plain-text line, the way
a real service's stdout tends to look::

    jsonlogprint-generate 1000 | jsonlogprint
"""
from __future__ import annotations

import json
import random
import time
from typing import Any

import click

MESSAGES = (
    "Application started",
    "Processing request",
    "Database query executed",
    "Cache miss",
    "Cache hit",
    "Request completed",
    "Connection established",
    "Authentication successful",
    "File processed",
    "Task completed",
)

LEVELS = ("INFO", "WARN", "ERROR", "DEBUG")

_STACKTRACE = (
    "Traceback (most recent call last):\n"
    '  File "app/handlers.py", line 42, in handle\n'
    "    result = service.process(payload)\n"
    "ValueError: payload rejected"
)


def make_record(rng: random.Random, now_ms: int) -> dict[str, Any]:
    level = rng.choice(LEVELS)
    record: dict[str, Any] = {
        "timestamp": now_ms,
        "level": level,
        "message": rng.choice(MESSAGES),
        "request_id": f"req-{rng.randrange(1000, 9999)}",
    }
    if rng.random() < 1 / 2:
        record["duration_ms"] = rng.randrange(1, 1000)
    if rng.random() < 1 / 3:
        record["user_id"] = f"user-{rng.randrange(1, 100)}"
    if rng.random() < 1 / 10:
        record["http"] = {
            "method": rng.choice(("GET", "POST", "PUT")),
            "status": rng.choice((200, 201, 404, 500)),
            "headers": {"user-agent": "curl/8.5.0", "accept": "*/*"},
        }
    if level == "ERROR" and rng.random() < 1 / 2:
        record["stacktrace"] = _STACKTRACE
    return record


def generate_lines(count: int, seed: int | None = None, now_ms: int | None = None) -> list[str]:
    """Return ``count`` sample log lines; about one in twenty is plain text."""
    rng = random.Random(seed)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    lines = []
    for i in range(count):
        if rng.random() < 1 / 20:
            lines.append(f"Plain text log message: {rng.choice(MESSAGES)}")
            continue
        lines.append(json.dumps(make_record(rng, now_ms + i)))
    return lines


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("count", default=1000, type=click.IntRange(min=0))
@click.option("--seed", default=None, type=int, help="Random seed for reproducible output.")
def main(count: int, seed: int | None) -> None:
    """Write COUNT sample log lines to stdout (default: 1000)."""
    for line in generate_lines(count, seed=seed):
        click.echo(line)


if __name__ == "__main__":
    main()
