"""Splash screen content."""

from __future__ import annotations

_INDENT = "  "
_LETTER_GAP = "  "

# Block-letter glyphs, six rows each, every row of a glyph the same width.
_GLYPHS: dict[str, tuple[str, ...]] = {
    "N": (
        "███╗   ██╗",
        "████╗  ██║",
        "██╔██╗ ██║",
        "██║╚██╗██║",
        "██║ ╚████║",
        "╚═╝  ╚═══╝",
    ),
    "E": (
        "███████╗",
        "██╔════╝",
        "█████╗  ",
        "██╔══╝  ",
        "███████╗",
        "╚══════╝",
    ),
    "X": (
        "██╗  ██╗",
        "╚██╗██╔╝",
        " ╚███╔╝ ",
        " ██╔██╗ ",
        "██╔╝ ██╗",
        "╚═╝  ╚═╝",
    ),
    "U": (
        "██╗   ██╗",
        "██║   ██║",
        "██║   ██║",
        "██║   ██║",
        "╚██████╔╝",
        " ╚═════╝ ",
    ),
    "S": (
        "███████╗",
        "██╔════╝",
        "███████╗",
        "╚════██║",
        "███████║",
        "╚══════╝",
    ),
}


def _banner(word: str) -> list[str]:
    """Render a word in block letters, one string per row."""
    glyphs = [_GLYPHS[letter] for letter in word]
    return [
        (_INDENT + _LETTER_GAP.join(row_parts)).rstrip()
        for row_parts in zip(*glyphs)
    ]


LOGO_NAME = "\n" + "\n".join(_banner("NEXUS")) + "\n"


def splash_lines(version: str) -> list[str]:
    """The lines of the splash screen: the logo, a spacer and the version."""
    lines = LOGO_NAME.strip("\n").splitlines()
    lines.append(" ")
    lines.append(f"Version {version}")
    return lines