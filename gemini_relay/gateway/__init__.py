"""Gemini gateway for model calls.

Handles the single round-trip to the generative-language API.

Responsibilities:
    - Client initialization from environment configuration
    - Content shaping for text and inline media
    - Fixed sampling configuration
    - Response envelope parsing

Maintains clean separation from the HTTP layer.
"""

from gemini_relay.gateway.config import GatewayConfig, get_gateway_config
from gemini_relay.gateway.model_gateway import (
    ModelGateway,
    get_model_gateway,
    parse_response,
)

__all__ = [
    "GatewayConfig",
    "ModelGateway",
    "get_gateway_config",
    "get_model_gateway",
    "parse_response",
]
