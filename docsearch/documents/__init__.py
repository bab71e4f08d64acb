"""Document-service clients with a cached factory used as a FastAPI dependency."""
from functools import lru_cache
from docsearch.config import DocumentServiceConfig
from docsearch.documents.base import DocumentServiceClient
from docsearch.documents.zeroentropy import ZeroEntropyClient
from docsearch.errors import ServiceNotConfigured
from docsearch.logging import get_logger

logger = get_logger(__name__)

@lru_cache(maxsize=1)
def get_document_client() -> DocumentServiceClient:
    """
    Build the process-wide document-service client on first use.

    The configuration is read once; later calls return the same client.

    Raises:
        ServiceNotConfigured: If the credential is not configured
    """
    try:
        config = DocumentServiceConfig.from_env()
    except ValueError as e:
        raise ServiceNotConfigured(str(e)) from e
    logger.info("creating_document_client", extra={"base_url": config.base_url})
    return ZeroEntropyClient(config)

__all__ = [
    "DocumentServiceClient",
    "ZeroEntropyClient",
    "get_document_client"
]
