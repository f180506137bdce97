"""Named terminal colors and the wrapper that applies them to cell text."""

from __future__ import annotations

import os
from collections.abc import Mapping

RESET = "\x1b[0m"

DEFAULT_COLOR_MAP: dict[str, str] = {
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "white_bold": "\x1b[01m",
    "crimson": "\x1b[38m",
    "gray": "\x1b[90m",
    "reset": RESET,
}

DEFAULT_CELL_COLOR = "white"
DEFAULT_HEADER_COLOR = "white_bold"


def colors_disabled_by_env() -> bool:
    """Return ``True`` when the ``NO_COLOR`` convention asks for plain output."""
    return bool(os.environ.get("NO_COLOR"))


def build_color_map(custom: Mapping[str, str] | None = None) -> dict[str, str]:
    """Merge caller-defined color codes over the built-in ones."""
    color_map = dict(DEFAULT_COLOR_MAP)
    if custom:
        color_map.update(custom)
    return color_map


def colorize(
    text: str,
    color: str | None,
    color_map: Mapping[str, str],
    disabled: bool = False,
) -> str:
    """Wrap *text* in the code for *color* followed by a reset.

    The codes do not add to the displayed width of the text.
    """
    if disabled or not color:
        return text
    try:
        code = color_map[color]
    except KeyError:
        raise ValueError(f"Unknown color: {color!r}") from None
    return f"{code}{text}{RESET}"
