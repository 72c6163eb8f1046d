"""Helpers for redacting sensitive values from log output."""

from __future__ import annotations

import re

REDACTED = "[REDACTED]"

_AUTH_TOKEN_INLINE_RE = re.compile(
    r"(?i)\b(bearer|basic)\s+[A-Za-z0-9\-._~+/]+=*",
)
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (
      authorization|
      proxy-authorization|
      cookie|
      set-cookie|
      token|
      secret|
      api[_-]?key|
      x-api-key
    )
    \s*[:=]\s*
    ([^\s,;]+)
    """
)


def sanitize_text(text: str) -> str:
    """Redact credentials embedded in plain text."""
    sanitized = _AUTH_TOKEN_INLINE_RE.sub(r"\1 " + REDACTED, text)
    sanitized = _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)
    return sanitized
