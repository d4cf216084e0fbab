"""Groq backend - OpenAI-compatible chat completions over HTTP."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

import httpx

from folioforge.backend.base import GenerationError, GenerationRequest, GenerationResult
from folioforge.pipeline.prompts import build_generation_prompt

if TYPE_CHECKING:
    from folioforge.backend.base import ProgressCallback
    from folioforge.config import GroqSettings

logger = logging.getLogger(__name__)


class GroqBackend:
    """Remote content generator using Groq's chat completions endpoint.

    One request per call and no retries; any failure surfaces as a
    :class:`GenerationError` with a message fit to show the user.
    """

    def __init__(
        self,
        settings: GroqSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._api_key: str = ""

    async def connect(self) -> None:
        self._api_key = self._settings.api_key or os.environ.get("GROQ_API_KEY", "")
        self._client = httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=httpx.Timeout(self._settings.timeout, connect=10.0),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
            transport=self._transport,
        )

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def is_available(self) -> bool:
        if not self._api_key:
            logger.warning("Groq API key not configured (set GROQ_API_KEY or groq.api_key)")
            return False
        try:
            client = self._ensure_client()
            resp = await client.get("/models")
            return resp.status_code == 200
        except (httpx.HTTPError, OSError):
            return False

    async def generate(
        self,
        request: GenerationRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> GenerationResult:
        request.validate()
        client = self._ensure_client()

        if progress_callback:
            progress_callback(1, 3, f"Submitting to {self._settings.model}")

        body = self._build_body(request)
        try:
            resp = await client.post("/chat/completions", json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            msg = f"Generation failed: HTTP {exc.response.status_code}"
            raise GenerationError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Generation failed: {exc}"
            raise GenerationError(msg) from exc
        except ValueError as exc:
            msg = "Generation failed: response was not valid JSON"
            raise GenerationError(msg) from exc

        if not isinstance(data, dict):
            msg = "Generation failed: response was not a JSON object"
            raise GenerationError(msg)

        if progress_callback:
            progress_callback(2, 3, "Reading response")

        html = self._extract_content(data)

        if progress_callback:
            progress_callback(3, 3, "Complete")

        logger.info("Generated %d characters of HTML with %s", len(html), self._settings.model)
        return GenerationResult(
            html=html,
            model=self._settings.model,
            metadata={"backend": "groq", "usage": data.get("usage", {})},
        )

    async def get_models(self) -> list[str]:
        return [self._settings.model]

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "Not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

    def _build_body(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "model": self._settings.model,
            "messages": [
                {"role": "user", "content": build_generation_prompt(request)},
            ],
        }

    @staticmethod
    def _extract_content(data: dict[str, Any]) -> str:
        """First choice's message content, or an empty string."""
        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message") or {}
        content = message.get("content") if isinstance(message, dict) else None
        return content if isinstance(content, str) else ""
