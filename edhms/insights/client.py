# edhms/insights/client.py
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from django.conf import settings

from edhms.common.api.exceptions import MalformedUpstreamResponse, UpstreamUnavailable

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin wrapper around the Gemini REST generateContent call.

    One prompt in, generated text out. No retries; the timeout is httpx's
    default unless GEMINI_TIMEOUT is set. Pass ``transport`` to swap the
    network out in tests.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        kwargs: dict[str, Any] = {
            "base_url": base_url or settings.GEMINI_API_BASE,
            "headers": {"Content-Type": "application/json"},
        }
        timeout = timeout if timeout is not None else getattr(settings, "GEMINI_TIMEOUT", None)
        if timeout is not None:
            kwargs["timeout"] = timeout
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.Client(**kwargs)

    def generate(self, model: str, prompt: str) -> str:
        try:
            r = self._client.post(
                f"/models/{model}:generateContent",
                params={"key": self.api_key},
                json={"contents": [{"parts": [{"text": prompt}]}]},
            )
            r.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Gemini %s returned HTTP %s", model, exc.response.status_code)
            raise UpstreamUnavailable(f"AI service returned HTTP {exc.response.status_code}.")
        except httpx.HTTPError as exc:
            logger.warning("Gemini %s request failed: %s", model, exc)
            raise UpstreamUnavailable()

        try:
            return r.json()["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError):
            logger.warning("Gemini %s response had no candidate text", model)
            raise MalformedUpstreamResponse()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GeminiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
