"""Turn exchanges into display lines for a given detail level.

Formatting is independent of the terminal size; fitting lines on screen is
the layout's job.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from ..models import HttpExchange
from .color_scheme import StyleToken, colorize, wrap
from .models import DetailLevel, StatusCategory, categorize_status

BODY_PREVIEW_LENGTH = 512
DOT = "."
UNREACHABLE_STATUS = "---"

_LINE_BREAK_RE = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class FormattedExchange:
    lines: list[str]
    line_count: int
    category: StatusCategory


def format_exchange(
    exchange: HttpExchange,
    level: DetailLevel,
    *,
    body_preview_length: int = BODY_PREVIEW_LENGTH,
) -> FormattedExchange:
    """Render ``exchange`` at ``level``; status colour is shared by every level."""
    category = categorize_status(exchange.status_code)

    if level.value == 1:
        lines = [colorize(DOT, category)]
    elif level.value == 2:
        time_text = _format_time(exchange.timestamp)
        lines = [colorize(f"[{time_text}] {_status_text(exchange)}", category)]
    elif level.value == 3:
        lines = [colorize(_summary(exchange), category)]
    else:
        lines = _header_lines(exchange, category)
        if level.shows_full_body():
            lines.extend(_body_lines(exchange, category, full=True))
        elif level.shows_body():
            lines.extend(
                _body_lines(exchange, category, full=False, preview_length=body_preview_length)
            )
        lines.append("")

    return FormattedExchange(lines=lines, line_count=len(lines), category=category)


def calculate_total_lines(formatted: Iterable[FormattedExchange]) -> int:
    return sum(item.line_count for item in formatted)


def _format_time(ts: datetime) -> str:
    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return ts.strftime("%H:%M:%S")


def _status_text(exchange: HttpExchange) -> str:
    code = exchange.status_code
    return UNREACHABLE_STATUS if code is None else str(code)


def _summary(exchange: HttpExchange) -> str:
    request = exchange.request
    return (
        f"[{_format_time(exchange.timestamp)}] {_status_text(exchange)} "
        f"{request.method} {request.path}"
    )


def _header_lines(exchange: HttpExchange, category: StatusCategory) -> list[str]:
    """Summary line with duration, then request and response header dumps."""
    duration = f" ({exchange.duration_ms}ms)" if exchange.duration_ms is not None else ""
    lines = [colorize(_summary(exchange) + duration, category)]

    lines.append(colorize("  Request Headers:", category))
    for key, value in exchange.request.headers.items():
        lines.append(wrap(f"    {key}: {value}", StyleToken.DIM))

    if exchange.response is not None:
        lines.append(colorize("  Response Headers:", category))
        for key, value in exchange.response.headers.items():
            lines.append(wrap(f"    {key}: {value}", StyleToken.DIM))
    return lines


def _body_lines(
    exchange: HttpExchange,
    category: StatusCategory,
    *,
    full: bool,
    preview_length: int = BODY_PREVIEW_LENGTH,
) -> list[str]:
    response_body = exchange.response.body if exchange.response is not None else None
    sections = (
        ("  Request Body:", exchange.request.body),
        ("  Response Body:", response_body),
    )
    lines: list[str] = []
    for label, body in sections:
        if not body:
            continue
        lines.append(colorize(label, category))
        if full:
            lines.extend(wrap(f"    {part}", StyleToken.DIM) for part in _LINE_BREAK_RE.split(body))
        else:
            lines.append(wrap(f"    {_preview(body, preview_length)}", StyleToken.DIM))
    return lines


def _preview(body: str, max_length: int) -> str:
    """Collapse line breaks and cut to ``max_length`` characters, marker included."""
    single_line = _LINE_BREAK_RE.sub(" ", body).strip()
    if len(single_line) <= max_length:
        return single_line
    return single_line[: max_length - 3] + "..."
