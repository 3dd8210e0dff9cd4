from __future__ import annotations

import httpx
import pytest

from highlights.cache import YearCache
from highlights.service import LookupService
from highlights.upstream import GeminiClient


def gemini_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGemini:
    """MockTransport handler standing in for generateContent; records every request."""

    def __init__(self, text: str = '["Moon landing", "Woodstock festival"]') -> None:
        self.text = text
        self.status = 200
        self.error_body = "quota exceeded"
        self.payload: dict | None = None
        self.calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.status != 200:
            return httpx.Response(self.status, text=self.error_body)
        return httpx.Response(200, json=self.payload or gemini_payload(self.text))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def service(gemini: FakeGemini, clock: FakeClock) -> LookupService:
    upstream = GeminiClient(api_key="test-key", transport=gemini.transport)
    return LookupService(cache=YearCache(clock=clock), upstream=upstream)
