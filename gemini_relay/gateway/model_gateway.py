"""Gemini model gateway built on the google-genai SDK.

Shapes a prompt and optional inline media into a single generate-content
call with a fixed sampling configuration, and reads the answer text back
out of the response envelope.

The SDK response is dumped to plain data and validated into
``ResponseEnvelope`` so that missing candidates, content, or parts all
collapse to an empty answer instead of attribute errors.
"""

import logging
from typing import Any

from google import genai
from google.genai import types
from pydantic import ValidationError

from gemini_relay.errors import UpstreamError
from gemini_relay.gateway.config import GatewayConfig, get_gateway_config
from gemini_relay.models.schemas import (
    GenerationRequest,
    GenerationResult,
    ResponseEnvelope,
)

logger = logging.getLogger(__name__)


def parse_response(response: Any) -> GenerationResult:
    """Extract the answer text from a generate-content response.

    Args:
        response: SDK response object or equivalent plain dict.

    Returns:
        GenerationResult with the first candidate's concatenated text,
        or an empty string when the response carries none.

    Raises:
        UpstreamError: If the response does not have the expected shape.
    """
    if response is None:
        return GenerationResult()
    if hasattr(response, "model_dump"):
        response = response.model_dump(exclude_none=True)

    try:
        envelope = ResponseEnvelope.model_validate(response)
    except ValidationError as e:
        logger.error(f"Malformed model response: {e}")
        raise UpstreamError("Malformed response from model") from e

    return GenerationResult(text=envelope.first_candidate_text())


class ModelGateway:
    """Service wrapping the Gemini client.

    Wraps the SDK with:
    - A fixed model id and generation config
    - Content shaping for text-only and inline-media requests
    - Typed response parsing with empty defaults
    - Upstream failures surfaced as UpstreamError
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Optional gateway configuration.
                    Loads from environment if not provided.
            client: Optional pre-built SDK client.
        """
        self._config = config or get_gateway_config()
        self._client = client or genai.Client(api_key=self._config.api_key)
        self._generation_config = self._create_generation_config()
        logger.info(f"ModelGateway initialized. Model: {self._config.model_name}")

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _create_generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_output_tokens,
            top_p=self._config.top_p,
            top_k=self._config.top_k,
        )

    def build_contents(self, request: GenerationRequest) -> list[types.Content]:
        """Build the single user turn sent to the model.

        The text part always comes first; inline media follows when present.
        """
        parts = [types.Part.from_text(text=request.prompt)]
        if request.media is not None:
            parts.append(
                types.Part.from_bytes(
                    data=request.media.data,
                    mime_type=request.media.mime_type,
                )
            )
        return [types.Content(role="user", parts=parts)]

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Send one request to the model and return its text answer.

        Args:
            request: Prompt and optional inline media.

        Returns:
            GenerationResult; text is empty if the model returned none.

        Raises:
            UpstreamError: If the call fails for any reason (network, auth,
                quota, or a request the API rejects).
        """
        contents = self.build_contents(request)
        media_type = request.media.mime_type if request.media else "none"
        logger.debug(
            f"Calling {self._config.model_name}: prompt={len(request.prompt)} chars, "
            f"media={media_type}"
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self._config.model_name,
                contents=contents,
                config=self._generation_config,
            )
        except Exception as e:
            raise UpstreamError(str(e) or "Unknown error") from e

        result = parse_response(response)
        if not result.text:
            logger.warning("Model returned no text")
        return result


# Module-level singleton instance
_model_gateway: ModelGateway | None = None


def get_model_gateway() -> ModelGateway:
    """Get or create the global model gateway.

    Returns:
        The ModelGateway instance.

    Raises:
        UpstreamError: If the gateway cannot be configured (no API key).
    """
    global _model_gateway
    if _model_gateway is None:
        try:
            _model_gateway = ModelGateway()
        except ValidationError as e:
            logger.error(f"Invalid gateway configuration: {e}")
            raise UpstreamError("Model gateway is not configured. Set GEMINI_API_KEY.") from e
    return _model_gateway
