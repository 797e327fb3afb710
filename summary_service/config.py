import os
from typing import Optional


class Config:
    """Runtime configuration for the summary service and its client.

    All values are read once at import time; mutate env and re-import to change.
    """

    # HTTP server
    HOST: str = os.environ.get("HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("PORT", "8000"))

    # Summarizer
    MAX_TEXT_LENGTH: int = int(os.environ.get("MAX_TEXT_LENGTH", "10000"))
    DEFAULT_LENGTH: str = os.environ.get("DEFAULT_LENGTH", "medium").lower()

    # Client
    API_BASE_URL: Optional[str] = os.environ.get("API_BASE_URL")
    USE_MOCK_DATA: bool = os.environ.get("USE_MOCK_DATA", "false").lower() in ("1", "true", "yes")
    CLIENT_TIMEOUT: float = float(os.environ.get("CLIENT_TIMEOUT", "20"))
    CLIENT_MAX_RETRIES: int = int(os.environ.get("CLIENT_MAX_RETRIES", "3"))

    # Observability
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "info").lower()


config = Config()
