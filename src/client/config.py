"""Client configuration with environment variable loading.

Pydantic-based configuration for the chunking and ingestion pipeline and
the remote Classory API it talks to.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

# Load environment variables from .env file
load_dotenv()

# Chunk size / overlap pairs, in words
CHUNK_PRESETS: dict[str, tuple[int, int]] = {
    "standard": (2000, 150),
    "compact": (500, 50),
}
DEFAULT_PRESET = "standard"


class ClientConfig(BaseModel):
    """Configuration for the document pipeline and the remote API.

    Attributes:
        api_base_url: Base URL of the ingestion / question-answering service.
        chunk_size: Maximum number of words per chunk.
        chunk_overlap: Words shared between consecutive chunks.
        batch_size: Maximum number of chunks per ingestion request.
        request_timeout: Transport timeout for every HTTP request, in seconds.
        batch_timeout: Optional upper bound for one batch submission, in seconds.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:3001"),
        description="Base URL of the remote API",
    )
    chunk_size: int = Field(
        default=CHUNK_PRESETS[DEFAULT_PRESET][0],
        gt=0,
        description="Maximum words per chunk",
    )
    chunk_overlap: int = Field(
        default=CHUNK_PRESETS[DEFAULT_PRESET][1],
        ge=0,
        description="Words shared between consecutive chunks",
    )
    batch_size: int = Field(
        default=15,
        gt=0,
        description="Maximum chunks per ingestion request",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="HTTP transport timeout in seconds",
    )
    batch_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Per-batch submission timeout in seconds",
    )

    @model_validator(mode="after")
    def validate_overlap(self) -> "ClientConfig":
        """Reject overlaps that would stall the chunk window."""
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @property
    def api_base(self) -> str:
        return self.api_base_url.rstrip("/")

    @classmethod
    def from_preset(cls, preset: str, **overrides: object) -> "ClientConfig":
        """Build a config from a named chunking preset.

        Args:
            preset: One of the keys of CHUNK_PRESETS.
            **overrides: Any other field values.

        Raises:
            ValueError: If the preset is unknown.
        """
        try:
            chunk_size, chunk_overlap = CHUNK_PRESETS[preset]
        except KeyError:
            known = ", ".join(sorted(CHUNK_PRESETS))
            raise ValueError(f"Unknown chunk preset '{preset}' (expected one of: {known})") from None
        values: dict[str, object] = {"chunk_size": chunk_size, "chunk_overlap": chunk_overlap}
        values.update(overrides)
        return cls(**values)


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    CHUNK_PRESET picks the chunk size / overlap pair; CHUNK_SIZE and
    CHUNK_OVERLAP override the preset individually.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the preset is unknown or a value is out of range.
    """
    overrides: dict[str, object] = {}
    env_fields = {
        "chunk_size": "CHUNK_SIZE",
        "chunk_overlap": "CHUNK_OVERLAP",
        "batch_size": "UPLOAD_BATCH_SIZE",
        "request_timeout": "REQUEST_TIMEOUT",
        "batch_timeout": "BATCH_TIMEOUT",
    }
    for field, env_var in env_fields.items():
        value = os.getenv(env_var)
        if value:
            overrides[field] = value

    return ClientConfig.from_preset(os.getenv("CHUNK_PRESET", DEFAULT_PRESET), **overrides)
