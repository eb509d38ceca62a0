"""Shared test fixtures."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from oasst_client.client import OasstApiClient

API_URL = "http://backend.test"
API_KEY = "secret-key"


@dataclass
class FakeBackend:
    """Answers every request with one canned response and records what it got."""

    status_code: int = 200
    payload: Any = None
    text: str | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def respond(self, status_code: int, payload: Any = None, *, text: str | None = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.text = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.payload)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture()
def api_url() -> str:
    return API_URL


@pytest.fixture()
def api_key() -> str:
    return API_KEY


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def api_client(backend: FakeBackend) -> OasstApiClient:
    return OasstApiClient(API_URL, API_KEY, http_client=backend.http_client())
