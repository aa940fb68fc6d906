"""Gemini API vision backend."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from . import VisionBackend


class GeminiVisionBackend(VisionBackend):
    """Detect fridge items and answer prompts using Google Gemini."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
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
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model, system_instruction=system)

        parts: list = []
        for path in image_paths or []:
            data = Path(path).read_bytes()
            mime_type = mimetypes.guess_type(path)[0] or "image/jpeg"
            parts.append({"mime_type": mime_type, "data": data})
        parts.append(prompt)

        response = await model.generate_content_async(
            parts, generation_config={"max_output_tokens": max_tokens}
        )
        return response.text
