"""Style policy mapping segment roles to rich styles.

The policy is built once at start-up and never changed afterwards. With
color disabled every role resolves to ``Style.null()``, which renders text
without escape codes, so plain output goes through the same code path as
colored output.
"""
from __future__ import annotations

import enum
import os
from typing import Iterable, Mapping, TextIO

from rich.color import ColorSystem
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style

from .segments import Role, Segment


class ColorMode(str, enum.Enum):
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


DEFAULT_STYLES: dict[Role, str] = {
    Role.TIMESTAMP: "dim",
    Role.LEVEL_TRACE: "dim",
    Role.LEVEL_DEBUG: "dim blue",
    Role.LEVEL_INFO: "cyan",
    Role.LEVEL_WARN: "yellow",
    Role.LEVEL_ERROR: "red",
    Role.LEVEL_FATAL: "bold red",
    Role.LEVEL_UNKNOWN: "none",
    Role.MESSAGE: "none",
    Role.KEY: "blue",
    Role.BRACKET: "blue",
    Role.PUNCTUATION: "none",
    Role.STRING: "none",
    Role.NUMBER: "magenta",
    Role.BOOL: "yellow",
    Role.NULL: "dim italic",
    Role.LONG_TEXT: "none",
    Role.UNRECOGNIZED: "none",
    Role.PLAIN: "none",
}

# Keys and brackets cycle through these by nesting depth.
DEPTH_PALETTE: tuple[str, ...] = (
    "blue",
    "cyan",
    "green",
    "dim blue",
    "dim cyan",
    "dim green",
)

_DEPTH_ROLES = frozenset({Role.KEY, Role.BRACKET})


def color_enabled(mode: ColorMode, stream: TextIO | None = None) -> bool:
    """Decide whether to emit escape codes for ``mode``.

    ``auto`` colors when the stream is a terminal and ``NO_COLOR`` is unset,
    or when running under CI.
    """
    if mode is ColorMode.ALWAYS:
        return True
    if mode is ColorMode.NEVER:
        return False
    console = Console(file=stream) if stream is not None else Console()
    if console.is_terminal and not console.no_color:
        return True
    return "CI" in os.environ


class StylePolicy:
    """Resolve ``(role, depth)`` to a concrete style.

    Args:
        enabled:   When False every role maps to the null style.
        overrides: Optional role -> rich style string replacements.
    """

    def __init__(
        self,
        enabled: bool = True,
        overrides: Mapping[Role, str] | None = None,
    ) -> None:
        self.enabled = enabled
        definitions = dict(DEFAULT_STYLES)
        if overrides:
            definitions.update(overrides)
        missing = [role.value for role in Role if role not in definitions]
        if missing:
            raise ValueError(f"no style defined for roles: {', '.join(missing)}")

        self._styles: dict[Role, Style] = {}
        for role, definition in definitions.items():
            try:
                self._styles[role] = Style.parse(definition) if enabled else Style.null()
            except StyleSyntaxError as exc:
                raise ValueError(f"invalid style for {role.value!r}: {exc}") from exc

        self._depth_styles: tuple[Style, ...] = tuple(
            Style.parse(s) if enabled else Style.null() for s in DEPTH_PALETTE
        )
        # Depth cycling only applies while the key style is the default one.
        self._cycle_depth = enabled and not (overrides and _DEPTH_ROLES & set(overrides))

    @classmethod
    def from_color_mode(
        cls,
        mode: ColorMode,
        stream: TextIO | None = None,
        overrides: Mapping[Role, str] | None = None,
    ) -> StylePolicy:
        return cls(enabled=color_enabled(mode, stream), overrides=overrides)

    @classmethod
    def plain(cls) -> StylePolicy:
        return cls(enabled=False)

    def style_for(self, role: Role, depth: int = 0) -> Style:
        if self._cycle_depth and role in _DEPTH_ROLES:
            return self._depth_styles[depth % len(self._depth_styles)]
        return self._styles[role]

    def render(self, segments: Iterable[Segment]) -> str:
        """Join segments into one string with ANSI escape codes applied."""
        parts = []
        for segment in segments:
            style = self.style_for(segment.role, segment.depth)
            if not segment.text or not style:
                parts.append(segment.text)
            else:
                parts.append(style.render(segment.text, color_system=ColorSystem.STANDARD))
        return "".join(parts)
