"""Styled text for terminal output: semantic styles, colored or plain."""
import sys
from enum import Enum
from typing import TextIO

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style as RichStyle


class ColorChoice(Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class Style(Enum):
    NONE = ""
    LITERAL = "bold"
    GOOD = "green"
    WARNING = "yellow"
    ERROR = "bold red"
    HINT = "dim"


class RenderError(Exception):
    """Writing to the output stream failed."""


class StyledStr:
    """Ordered (style, text) pieces, rendered by Colorizer."""

    def __init__(self, text: str = ""):
        self.pieces: list[tuple[Style, str]] = []
        if text:
            self.none(text)

    def stylize(self, style: Style | None, text: str) -> "StyledStr":
        if text:
            self.pieces.append((style or Style.NONE, str(text)))
        return self

    def none(self, text: str) -> "StyledStr":
        return self.stylize(Style.NONE, text)

    def literal(self, text: str) -> "StyledStr":
        return self.stylize(Style.LITERAL, text)

    def good(self, text: str) -> "StyledStr":
        return self.stylize(Style.GOOD, text)

    def warning(self, text: str) -> "StyledStr":
        return self.stylize(Style.WARNING, text)

    def error(self, text: str) -> "StyledStr":
        return self.stylize(Style.ERROR, text)

    def hint(self, text: str) -> "StyledStr":
        return self.stylize(Style.HINT, text)

    def plain(self) -> str:
        return "".join(text for _, text in self.pieces)

    def __str__(self) -> str:
        return self.plain()


def use_color(mode: ColorChoice, out: TextIO | None = None) -> bool:
    """Resolve a color mode; AUTO asks rich whether `out` is a terminal (NO_COLOR turns it off)."""
    if mode is ColorChoice.ALWAYS:
        return True
    if mode is ColorChoice.NEVER:
        return False
    console = Console(file=out or sys.stdout)
    return console.is_terminal and not console.no_color


class Colorizer:
    """Write StyledStr to a stream, with SGR escapes only when `color` is set."""

    def __init__(self, out: TextIO | None = None, color: bool = False):
        self.out = out or sys.stdout
        self.color = color

    def render(self, msg: StyledStr) -> str:
        if not self.color:
            return msg.plain()
        parts = []
        for style, text in msg.pieces:
            if style is Style.NONE:
                parts.append(text)
            else:
                parts.append(RichStyle.parse(style.value).render(text, color_system=ColorSystem.STANDARD))
        return "".join(parts)

    def print(self, msg: StyledStr, what: str = "message") -> None:
        try:
            self.out.write(self.render(msg))
        except (OSError, UnicodeError) as e:
            raise RenderError(f"Failed to print {what}") from e

    def flush(self, what: str = "log") -> None:
        try:
            self.out.flush()
        except OSError as e:
            raise RenderError(f"Failed to print {what}") from e
