"""Rich rendering to plain strings.

Formatters build renderables and hand them to :func:`render`, which
prints them on a throwaway Console and returns the text. Rich drops
colour codes by itself when stdout is not a terminal.
"""

from __future__ import annotations

import zlib
from io import StringIO

from rich.console import Console, RenderableType
from rich.theme import Theme

EDGY_THEME = Theme(
    {
        "edgy.ok": "bold green",
        "edgy.error": "bold red",
        "edgy.warning": "bold yellow",
        "edgy.op": "bold cyan",
        "edgy.key": "dim",
        "edgy.id": "bold blue",
    }
)

# Colours handed out to node/edge type names.
_TYPE_PALETTE = ("green", "blue", "yellow", "cyan", "magenta", "bright_red")


def type_style(type_name: str) -> str:
    """Colour for *type_name*, stable across runs so a type always looks the same."""
    return _TYPE_PALETTE[zlib.crc32(type_name.encode("utf-8")) % len(_TYPE_PALETTE)]


def render(*renderables: RenderableType, no_color: bool = False, width: int = 120) -> str:
    """Print *renderables* in order and return the text without the final newline."""
    buffer = StringIO()
    console = Console(
        file=buffer,
        theme=EDGY_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )
    for renderable in renderables:
        console.print(renderable)
    return buffer.getvalue().rstrip("\n")
