from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from utility.config import DEFAULT_API_BASE, DEFAULT_MODEL
from utility.exceptions import ProviderError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns a prompt into a text completion."""

    async def generate(self, prompt: str) -> str:
        ...


class GeminiClient:
    """
    Async client for the Gemini generateContent REST endpoint.
    One request per call: no retry, no timeout.
    """

    def __init__(
            self,
            api_key: str,
            model: str = DEFAULT_MODEL,
            api_base: str = DEFAULT_API_BASE,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("API key must be provided or set in GEMINI_API_KEY")
        self.api_key = api_key
        self.model = model
        self.endpoint = f"{api_base.rstrip('/')}/models/{model}:generateContent"
        self.headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        self._transport = transport

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pull the provider's human-readable message out of an error response."""
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"

        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return response.text or f"HTTP {response.status_code}"

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        feedback = data.get("promptFeedback") or {}
        block_reason = feedback.get("blockReason")
        if block_reason:
            raise ProviderError(f"Prompt was blocked by safety filters ({block_reason})")

        candidates = data.get("candidates") or []
        for candidate in candidates:
            parts = (candidate.get("content") or {}).get("parts") or []
            text = "".join(part.get("text", "") for part in parts)
            if text:
                return text

        if any(candidate.get("finishReason") == "SAFETY" for candidate in candidates):
            raise ProviderError("Response was blocked by safety filters (SAFETY)")
        raise ProviderError("Model returned an empty response")

    async def generate(self, prompt: str) -> str:
        """
        Send a single prompt and return the completion text.
        Raises ProviderError carrying the provider's message on any failure.
        """
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ]
        }

        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(self.endpoint, headers=self.headers, json=payload)
        except httpx.HTTPError as e:
            raise ProviderError(f"Could not reach the Gemini API: {e}") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning("Gemini API returned %s: %s", response.status_code, message)
            raise ProviderError(message)

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise ProviderError(f"Gemini API returned invalid JSON: {e}") from e

        return self._extract_text(data)
