"""OpenAI chat completions backend over plain HTTP."""

from __future__ import annotations

import base64
import logging
import mimetypes
from pathlib import Path

import httpx

from ..network import DEFAULT_TIMEOUT, ApiError, NetworkError, request_json
from . import DETECTION_PROMPT, SYSTEM_PROMPT, VisionBackend
from .parsing import DetectionResult, parse_detected_items

logger = logging.getLogger(__name__)


def image_data_url(path: str) -> str:
    """Encode an image file as a ``data:`` URL."""
    data = Path(path).read_bytes()
    media_type = mimetypes.guess_type(path)[0] or "image/jpeg"
    return f"data:{media_type};base64,{base64.standard_b64encode(data).decode()}"


class OpenAIVisionBackend(VisionBackend):
    """Detect fridge items and answer prompts via the chat completions API.

    Images are sent inline as ``data:`` URLs, or as remote URLs through
    :meth:`detect_items_from_url`.
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    async def complete(
        self,
        prompt: str,
        image_paths: list[str] | None = None,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
    ) -> str:
        self._check_api_key()
        urls = [image_data_url(p) for p in image_paths or []]
        return await self._chat(prompt, urls, system=system, max_tokens=max_tokens)

    def _check_api_key(self) -> None:
        if not self._api_key:
            raise ValueError(
                "OpenAI API key is not set. "
                "Check the config file or the OPENAI_API_KEY environment variable."
            )

    async def detect_items_from_url(self, image_url: str) -> DetectionResult:
        """Detect food items in an image that is already hosted somewhere."""
        text = await self._chat(DETECTION_PROMPT, [image_url], system=SYSTEM_PROMPT)
        return parse_detected_items(text)

    async def _chat(
        self,
        prompt: str,
        image_urls: list[str],
        *,
        system: str | None = None,
        max_tokens: int = 2000,
    ) -> str:
        self._check_api_key()

        content: list[dict] = [{"type": "text", "text": prompt}]
        for url in image_urls:
            content.append({"type": "image_url", "image_url": {"url": url}})

        messages: list[dict] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": content})

        payload = {
            "model": self._model,
            "messages": messages,
            "max_completion_tokens": max_tokens,
        }

        async with httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT, transport=self._transport
        ) as client:
            data = await request_json(
                client,
                "POST",
                f"{self._base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=payload,
            )

        try:
            choices = data["choices"]
            if not choices:
                return ""
            return choices[0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            logger.warning("Unexpected chat completion payload: %r", data)
            raise ApiError(NetworkError.SERIALIZATION) from e
