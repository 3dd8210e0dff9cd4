"""
Client for the Gemini generateContent endpoint.

Request body:
  {
    "contents": [{"parts": [{"text": "<prompt>"}]}],
    "generationConfig": {"temperature": 0.2, "topP": 0.95, "maxOutputTokens": 256}
  }

Response text lives at candidates[0].content.parts[0].text.

Notes / Pitfalls:
- One POST per call, no retries. Transport errors (timeouts, DNS, refused
  connections) are not UpstreamError: they propagate as httpx exceptions.
- The text is returned raw; coerce.coerce_to_string_list does the cleanup.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from highlights.errors import MissingCredentialError, NoContentError, UpstreamError
from highlights.observability import UPSTREAM_CALLS, UPSTREAM_LATENCY
from highlights.settings import API_KEY_ENV, GEMINI_ENDPOINT

logger = logging.getLogger("highlights.upstream")

GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.2,
    "topP": 0.95,
    "maxOutputTokens": 256,
}


def build_prompt(year: int) -> str:
    return (
        "Return a strict JSON array (no code fences) of up to 5 short strings, each describing "
        "one of the most important widely-recognized achievements or events that happened in "
        f"the year {year}. Each entry must be concise (<= 16 words), factual, and not include "
        "the year or numbering. Output ONLY a JSON array of strings."
    )


def build_request_body(year: int) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": build_prompt(year)}]}],
        "generationConfig": dict(GENERATION_CONFIG),
    }


def extract_text(payload: Any) -> str | None:
    """Pull candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class GeminiClient:
    def __init__(
        self,
        api_key: str | None,
        endpoint: str = GEMINI_ENDPOINT,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def generate(self, year: int) -> str:
        """
        Ask the model for the highlights of `year` and return its raw text.

        Raises:
          MissingCredentialError  no API key configured (checked before any I/O)
          UpstreamError           non-2xx status, detail carries the response body
          NoContentError          2xx without usable text
        """
        if not self._api_key:
            raise MissingCredentialError(API_KEY_ENV)

        headers = {"content-type": "application/json", "x-goog-api-key": self._api_key}
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                r = await client.post(
                    self._endpoint, json=build_request_body(year), headers=headers
                )
        except httpx.RequestError:
            UPSTREAM_CALLS.labels(outcome="transport_error").inc()
            raise
        finally:
            UPSTREAM_LATENCY.observe(time.perf_counter() - start)

        if not r.is_success:
            UPSTREAM_CALLS.labels(outcome="http_error").inc()
            logger.warning("upstream returned %s for year %s", r.status_code, year)
            raise UpstreamError(detail=r.text)

        text = extract_text(r.json())
        if text is None:
            UPSTREAM_CALLS.labels(outcome="no_content").inc()
            logger.warning("upstream returned no text for year %s", year)
            raise NoContentError()

        UPSTREAM_CALLS.labels(outcome="ok").inc()
        return text
