"""Claude API vision backend."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from . import VisionBackend


class ClaudeVisionBackend(VisionBackend):
    """Detect fridge items and answer prompts using Claude."""

    def __init__(self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929") -> None:
        self._api_key = api_key
        self._model = model

    async def complete(
        self,
        prompt: str,
        image_paths: list[str] | None = None,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
    ) -> str:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        content: list[dict] = []
        for path in image_paths or []:
            data = Path(path).read_bytes()
            media_type = mimetypes.guess_type(path)[0] or "image/jpeg"
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": media_type,
                        "data": base64.standard_b64encode(data).decode(),
                    },
                }
            )
        content.append({"type": "text", "text": prompt})

        kwargs: dict = {}
        if system:
            kwargs["system"] = system

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        response = await client.messages.create(
            model=self._model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": content}],
            **kwargs,
        )

        if not response.content:
            return ""
        return response.content[0].text
