"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the Gemini model gateway.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"


class GatewayConfig(BaseModel):
    """Configuration for the Gemini model gateway.

    Attributes:
        api_key: Gemini API key.
        model_name: Model identifier to use.
        temperature: Sampling temperature.
        max_output_tokens: Maximum tokens in generated response.
        top_p: Nucleus sampling threshold.
        top_k: Top-k sampling cutoff.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        description="Model to use",
    )
    temperature: float = Field(default=0.85, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=1500, ge=1)
    top_p: float = Field(default=0.98, ge=0.0, le=1.0)
    top_k: int = Field(default=70, ge=1)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY in .env")
        return v.strip()


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return GatewayConfig()
