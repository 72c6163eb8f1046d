"""Style tokens for exchange rendering and escape-aware width handling.

Styles are declared as rich ``Style`` objects and rendered once to SGR
escape sequences for the standard 16-colour palette. Everything else in the
viewer works with the resulting strings, so this module is the only place
that knows what the escape sequences look like.
"""

from __future__ import annotations

import re
from enum import StrEnum

from rich.color import ColorSystem
from rich.style import Style

from .models import StatusCategory

RESET = "\x1b[0m"
ELLIPSIS = "..."

# SGR sequences only; the viewer never emits other CSI sequences into text.
ANSI_STYLE_RE = re.compile(r"\x1b\[[0-9;]*m")


class StyleToken(StrEnum):
    UNREACHABLE = "unreachable"
    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    DIM = "dim"
    BOLD = "bold"
    SELECTION = "selection"


_STYLES: dict[StyleToken, Style] = {
    StyleToken.UNREACHABLE: Style(color="magenta"),
    StyleToken.INFORMATIONAL: Style(color="bright_black"),
    StyleToken.SUCCESS: Style(color="green"),
    StyleToken.REDIRECT: Style(color="blue"),
    StyleToken.CLIENT_ERROR: Style(color="yellow"),
    StyleToken.SERVER_ERROR: Style(color="red"),
    StyleToken.DIM: Style(dim=True),
    StyleToken.BOLD: Style(bold=True),
    StyleToken.SELECTION: Style(reverse=True),
}

_CATEGORY_TOKENS: dict[StatusCategory, StyleToken] = {
    StatusCategory.UNREACHABLE: StyleToken.UNREACHABLE,
    StatusCategory.INFORMATIONAL: StyleToken.INFORMATIONAL,
    StatusCategory.SUCCESS: StyleToken.SUCCESS,
    StatusCategory.REDIRECT: StyleToken.REDIRECT,
    StatusCategory.CLIENT_ERROR: StyleToken.CLIENT_ERROR,
    StatusCategory.SERVER_ERROR: StyleToken.SERVER_ERROR,
}


def _start_sequence(style: Style) -> str:
    rendered = style.render("_", color_system=ColorSystem.STANDARD)
    return rendered[: rendered.index("_")]


_SEQUENCES: dict[StyleToken, str] = {
    token: _start_sequence(style) for token, style in _STYLES.items()
}


def style_for(category: StatusCategory) -> StyleToken:
    """Return the style token used for a status category."""
    return _CATEGORY_TOKENS[category]


def sequence_for(token: StyleToken) -> str:
    """Return the style-start escape sequence for a token."""
    return _SEQUENCES[token]


def wrap(text: str, token: StyleToken) -> str:
    return f"{_SEQUENCES[token]}{text}{RESET}"


def colorize(text: str, category: StatusCategory) -> str:
    return wrap(text, style_for(category))


def highlight_selected(text: str) -> str:
    """Apply selection styling while keeping any colours already in ``text``.

    Inner resets would otherwise switch reverse video off halfway through
    the line, so each one re-enables the selection style.
    """
    selection = _SEQUENCES[StyleToken.SELECTION]
    return selection + text.replace(RESET, RESET + selection) + RESET


def strip_styles(text: str) -> str:
    return ANSI_STYLE_RE.sub("", text)


def visible_length(text: str) -> int:
    """Number of characters that occupy a terminal column."""
    return len(strip_styles(text))


def truncate_to_width(text: str, max_width: int) -> str:
    """Cut ``text`` to ``max_width`` visible characters, ellipsis included.

    Escape sequences are zero-width: the ones met before the cut are copied
    through so colour transitions survive, and the result always ends with a
    reset so no style bleeds into whatever is written next.
    """
    if visible_length(text) <= max_width:
        return text

    budget = max(0, max_width - len(ELLIPSIS))
    parts: list[str] = []
    visible = 0
    idx = 0
    while idx < len(text) and visible < budget:
        if text[idx] == "\x1b":
            match = ANSI_STYLE_RE.match(text, idx)
            if match is not None:
                parts.append(match.group(0))
                idx = match.end()
                continue
        parts.append(text[idx])
        visible += 1
        idx += 1

    parts.append(ELLIPSIS)
    parts.append(RESET)
    return "".join(parts)
