"""Process-wide configuration for the document-service client."""
import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr

DEFAULT_BASE_URL = "https://api.zeroentropy.dev/v1"


class DocumentServiceConfig(BaseModel):
    """Built once at startup and never mutated afterwards."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    # None keeps the transport's own default (no timeout)
    timeout: Optional[float] = Field(default=None, gt=0)

    @classmethod
    def from_env(cls) -> "DocumentServiceConfig":
        """
        Read the configuration from the environment (and ``.env`` if present).

        Raises:
            ValueError: If ZEROENTROPY_API_KEY is not set
        """
        load_dotenv()

        api_key = os.getenv("ZEROENTROPY_API_KEY")
        if not api_key:
            raise ValueError("ZEROENTROPY_API_KEY is required")

        timeout = os.getenv("ZEROENTROPY_TIMEOUT")
        return cls(
            api_key=api_key,
            base_url=os.getenv("ZEROENTROPY_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=float(timeout) if timeout else None,
        )
