"""Shared fixtures: a CereVoiceClient wired to httpx.MockTransport."""
from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from cerevoice.client import CereVoiceClient
from cerevoice.core.config import ClientConfig

TEST_URL = "https://cerevoice.test/rest/rest_1_1.php"


class RecordingHandler:
    """MockTransport handler returning a canned body and recording requests."""

    def __init__(self, body: bytes | str = b"", status_code: int = 200):
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(account_id="acc-123", password="s3cret", api_url=TEST_URL)


@pytest.fixture
def make_client(config: ClientConfig) -> Callable[..., tuple]:
    """Build (client, handler) answering every request with `body`."""

    def _make(body: bytes | str = b"", status_code: int = 200):
        handler = RecordingHandler(body, status_code)
        client = CereVoiceClient(config, transport=httpx.MockTransport(handler))
        return client, handler

    return _make
