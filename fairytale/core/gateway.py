"""
Generation backend gateway.

The pipeline only depends on ModelGateway.generate(); GeminiGateway is the
production implementation and tests substitute a deterministic stand-in.
A single attempt is made per call: no retry, no timeout beyond the SDK's
and the hosting environment's.
"""

import logging
from typing import Optional, Protocol

import httpx
from google.genai import errors as genai_errors
from google.genai.types import GenerateContentConfig

from ..config import get_genai_client, get_generation_config
from .errors import EmptyModelResponseError, GatewayTransportError

logger = logging.getLogger(__name__)

# Failures of the backend call itself, as opposed to unusable output
TRANSPORT_EXCEPTIONS = (
    genai_errors.APIError,
    httpx.HTTPError,
    ConnectionError,
    TimeoutError,
)


class ModelGateway(Protocol):
    """Anything that can turn a prompt into raw model text."""

    async def generate(self, prompt: str, model: str, credential: str) -> str:
        ...


class GeminiGateway:
    """ModelGateway backed by the Gemini API via google-genai."""

    def __init__(self, config: Optional[GenerateContentConfig] = None):
        self.config = config or get_generation_config()

    async def generate(self, prompt: str, model: str, credential: str) -> str:
        """
        Send the prompt to Gemini and return the response text.

        Raises:
            EmptyModelResponseError: If the backend returned no text
            GatewayTransportError: If the call itself failed
        """
        client = get_genai_client(credential)
        logger.info(f"Calling generation backend: model={model}, prompt_chars={len(prompt)}")

        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=prompt,
                config=self.config,
            )
        except TRANSPORT_EXCEPTIONS as e:
            logger.error(f"Generation backend call failed: {type(e).__name__}: {e}")
            raise GatewayTransportError(str(e)) from e

        text = getattr(response, "text", None)
        if not text:
            logger.warning(f"Generation backend returned no text: model={model}")
            raise EmptyModelResponseError()

        return text
