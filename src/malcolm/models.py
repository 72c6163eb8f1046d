"""Shared typed models for captured HTTP exchanges."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import AddressError

_DIGITS_RE = re.compile(r"^\d+$")


class HttpRequest(BaseModel):
    """Inbound request as received by the proxy."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(description="HTTP method, e.g. GET")
    path: str = Field(description="Request target including query string")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    body: str | None = Field(default=None, description="Decoded request body if any")


class HttpResponse(BaseModel):
    """Response returned by the target."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(description="HTTP status code from the target")
    headers: dict[str, str] = Field(default_factory=dict, description="Response headers")
    body: str | None = Field(default=None, description="Decoded response body if any")


class HttpExchange(BaseModel):
    """One captured request/response pair; ``response`` is None when unreachable."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque unique identifier")
    timestamp: datetime = Field(description="When the request was received")
    request: HttpRequest
    response: HttpResponse | None = Field(
        default=None, description="Target response, None if the target was unreachable"
    )
    duration_ms: int | None = Field(default=None, description="Round trip in milliseconds")

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


def create_exchange(
    request: HttpRequest,
    response: HttpResponse | None,
    duration_ms: int | None,
    *,
    timestamp: datetime | None = None,
) -> HttpExchange:
    """Build an exchange with a fresh id, stamped with local time by default."""
    return HttpExchange(
        id=uuid.uuid4().hex,
        timestamp=timestamp or datetime.now().astimezone(),
        request=request,
        response=response,
        duration_ms=duration_ms,
    )


@dataclass(frozen=True, slots=True)
class Address:
    """A ``host:port`` pair shown in the viewer header."""

    host: str
    port: int

    @classmethod
    def parse(cls, text: str) -> Address:
        """Parse ``"5009"``, ``"localhost:5009"`` or ``"192.168.1.5:80"``."""
        trimmed = text.strip()
        if not trimmed:
            raise AddressError("Address cannot be empty")

        if _DIGITS_RE.match(trimmed):
            return cls("localhost", cls._parse_port(trimmed))

        host, sep, port_text = trimmed.rpartition(":")
        if not sep:
            raise AddressError(
                f'Invalid address format: "{text}". Expected "port" or "host:port"'
            )
        if not host:
            raise AddressError(f'Invalid address format: "{text}". Host cannot be empty')
        return cls(host, cls._parse_port(port_text))

    @staticmethod
    def _parse_port(port_text: str) -> int:
        if not _DIGITS_RE.match(port_text):
            raise AddressError(f'Invalid port: "{port_text}". Port must be a number')
        port = int(port_text)
        # Port 0 asks the OS for any free port.
        if port > 65535:
            raise AddressError(f"Invalid port: {port}. Port must be between 0 and 65535")
        return port

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
