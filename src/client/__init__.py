"""Client for the remote Classory ingestion and question-answering API.

Responsibilities:
    - Environment-driven configuration (base URL, chunking, batching, timeouts)
    - POST /api/process-batch for chunk ingestion
    - POST /api/ask for question answering
"""

from src.client.api_client import ApiClient, QuestionAnsweringError
from src.client.config import CHUNK_PRESETS, ClientConfig, get_client_config

__all__ = [
    "CHUNK_PRESETS",
    "ApiClient",
    "ClientConfig",
    "QuestionAnsweringError",
    "get_client_config",
]
