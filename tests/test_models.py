"""Tests for exchange models and address parsing."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from malcolm.exceptions import AddressError
from malcolm.models import Address, HttpRequest, HttpResponse, create_exchange


@pytest.mark.parametrize(
    ("text", "host", "port"),
    [
        ("5009", "localhost", 5009),
        ("localhost:5009", "localhost", 5009),
        ("192.168.1.5:80", "192.168.1.5", 80),
        (" example.com:0 ", "example.com", 0),
        ("::1:8080", "::1", 8080),
    ],
)
def test_address_parse(text: str, host: str, port: int) -> None:
    address = Address.parse(text)
    assert (address.host, address.port) == (host, port)
    assert str(address) == f"{host}:{port}"


@pytest.mark.parametrize("text", ["", "   ", "localhost", ":80", "host:http", "host:70000"])
def test_address_parse_rejects_invalid(text: str) -> None:
    with pytest.raises(AddressError):
        Address.parse(text)


def test_address_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Address.parse("nope")


def test_create_exchange_assigns_unique_ids() -> None:
    request = HttpRequest(method="GET", path="/")
    first = create_exchange(request, HttpResponse(status_code=200), 12)
    second = create_exchange(request, None, None)
    assert first.id != second.id
    assert first.status_code == 200
    assert second.status_code is None
    assert second.response is None


def test_create_exchange_keeps_given_timestamp() -> None:
    ts = datetime(2026, 1, 2, 3, 4, 5)
    exchange = create_exchange(HttpRequest(method="GET", path="/"), None, None, timestamp=ts)
    assert exchange.timestamp == ts


def test_exchanges_are_immutable() -> None:
    exchange = create_exchange(HttpRequest(method="GET", path="/"), None, None)
    with pytest.raises(ValidationError):
        exchange.duration_ms = 5  # type: ignore[misc]
