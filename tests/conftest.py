"""Shared fixtures for novaposhta-client tests."""

from __future__ import annotations

from typing import Any

import pytest

from novaposhta_client.client import NovaPoshta
from novaposhta_client.config import NovaPoshtaConfig
from novaposhta_client.raw import NovaPoshtaRaw

KHARKIV_REF = "db5c88e0-391c-11dd-90d9-001a92567626"
KYIV_REF = "8d5a980d-391c-11dd-90d9-001a92567626"
API_KEY = "test-api-key"


def ok(*data: Any, warnings: list | None = None) -> dict:
    return {
        "success": True,
        "data": list(data),
        "errors": [],
        "warnings": warnings or [],
    }


def fail(*errors: Any) -> dict:
    return {"success": False, "data": [], "errors": list(errors), "warnings": []}


class FakeTransport:
    """Records outbound envelopes and answers per (model, method)."""

    def __init__(self, responses: dict | None = None) -> None:
        self.responses: dict[tuple[str, str], Any] = dict(responses or {})
        self.calls: list[dict] = []
        self.binary = b"%PDF-1.4\n%fake\n"
        self.closed = False

    async def post_json(self, payload: dict) -> Any:
        self.calls.append(payload)
        key = (payload["modelName"], payload["calledMethod"])
        if key not in self.responses:
            raise AssertionError(f"Unexpected call {key}")
        response = self.responses[key]
        if callable(response):
            return response(payload)
        return response

    async def post_bytes(self, payload: dict) -> bytes:
        self.calls.append(payload)
        return self.binary

    async def aclose(self) -> None:
        self.closed = True

    def calls_to(self, model: str, method: str) -> list[dict]:
        return [
            call
            for call in self.calls
            if call["modelName"] == model and call["calledMethod"] == method
        ]

    def properties(self, model: str, method: str) -> dict:
        calls = self.calls_to(model, method)
        assert calls, f"{model}/{method} was not called"
        return calls[-1]["methodProperties"]


@pytest.fixture()
def config() -> NovaPoshtaConfig:
    return NovaPoshtaConfig(api_key=API_KEY)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def raw(config, transport) -> NovaPoshtaRaw:
    return NovaPoshtaRaw(config, transport=transport)


@pytest.fixture()
def client(config, transport) -> NovaPoshta:
    return NovaPoshta(config, transport=transport)
