"""Gemini model handles.

The process entry point builds one genai.Client and wraps it in a GeminiModel
per model id (vision and recipe). Services receive these objects through their
constructors; nothing here is a module-level global.
"""

import asyncio
from typing import Any, Optional

from google import genai
from google.genai import types

from src.utils.config import Config
from src.utils.logger import logger


def create_genai_client(cfg: Config) -> genai.Client:
    """Create a Gemini client for Vertex AI or the Gemini Developer API.

    Args:
        cfg: Application configuration (USE_VERTEXAI selects the backend).

    Returns:
        genai.Client ready for generate_content calls.
    """
    if cfg.USE_VERTEXAI:
        logger.info(
            f"Using Vertex AI (project={cfg.GOOGLE_CLOUD_PROJECT}, location={cfg.GOOGLE_CLOUD_LOCATION})"
        )
        return genai.Client(
            vertexai=True,
            project=cfg.GOOGLE_CLOUD_PROJECT,
            location=cfg.GOOGLE_CLOUD_LOCATION,
        )
    logger.info("Using Gemini Developer API")
    return genai.Client(api_key=cfg.GEMINI_API_KEY)


class GeminiModel:
    """One Gemini model id bound to a client, with optional generation settings."""

    def __init__(
        self,
        client: genai.Client,
        model: str,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> None:
        if not model:
            raise ValueError("model id is required")
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def _generation_config(self) -> Optional[types.GenerateContentConfig]:
        if self.temperature is None and self.max_output_tokens is None:
            return None
        return types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
        )

    async def generate(self, contents: Any) -> types.GenerateContentResponse:
        """Single generate_content call, no retries.

        Runs the synchronous SDK call in a worker thread. SDK exceptions
        propagate unchanged; callers wrap them.
        """
        logger.debug(f"Calling {self.model}")
        return await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=contents,
            config=self._generation_config(),
        )
