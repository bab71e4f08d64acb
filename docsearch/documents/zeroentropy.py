"""ZeroEntropy document-service client implementation."""
from typing import Any, Dict, Iterable, List, Optional, Union
import requests
from pydantic import ValidationError as SchemaError
from docsearch.api.models import (
    AddDocumentResponse, Collection, Document, DocumentContent, TopDocumentResult
)
from docsearch.config import DocumentServiceConfig
from docsearch.documents.base import DocumentServiceClient
from docsearch.errors import RemoteRejected, RemoteUnexpected, TransportFailure, ValidationError
from docsearch.logging import get_logger, remote_call

logger = get_logger(__name__)

COLLECTION_LIST_ENDPOINT = "/collections/get-collection-list"
DOCUMENT_LIST_ENDPOINT = "/documents/get-document-info-list"
ADD_DOCUMENT_ENDPOINT = "/documents/add-document"
TOP_DOCUMENTS_ENDPOINT = "/queries/top-documents"

def _require(**fields: Any) -> None:
    """Raise ValidationError for the first missing (empty or blank) field."""
    for name, value in fields.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required")

def _detail_message(detail: Any) -> Optional[str]:
    """Extract the human-readable reason from a ``detail`` error payload."""
    if isinstance(detail, str):
        return detail or None
    if isinstance(detail, list):
        # FastAPI-style field errors: [{"loc": [...], "msg": "...", "type": "..."}]
        message = "; ".join(
            str(item.get("msg", "")) if isinstance(item, dict) else str(item)
            for item in detail
        )
        return message or None
    return None

class ZeroEntropyClient(DocumentServiceClient):
    """Client for the ZeroEntropy JSON API. Every call is a POST."""

    def __init__(
        self,
        config: DocumentServiceConfig,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            config: Immutable service configuration (credential, base URL, timeout)
            session: Optional requests session, mainly for connection reuse
        """
        self.config = config
        self.session = session or requests.Session()

        logger.info("document_client_initialized", extra={
            "base_url": self.config.base_url,
            "timeout": self.config.timeout
        })

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    def _post(self, endpoint: str, body: Dict[str, Any]) -> requests.Response:
        try:
            return self.session.post(
                f"{self.config.base_url}{endpoint}",
                json=body,
                headers=self._headers(),
                timeout=self.config.timeout
            )
        except requests.RequestException as e:
            raise TransportFailure(str(e)) from e

    def _unwrap(
        self,
        response: requests.Response,
        key: Optional[str],
        ok_statuses: Iterable[int] = (200,)
    ) -> Dict[str, Any]:
        """
        Classify a response exactly once.

        Returns the decoded payload on success. ``key`` names the field a
        success payload must carry; None accepts any body, even an empty one.
        """
        try:
            data = response.json()
        except ValueError:
            data = None

        status = response.status_code
        if status in ok_statuses:
            if key is None:
                return data if isinstance(data, dict) else {}
            if isinstance(data, dict) and isinstance(data.get(key), list):
                return data
            raise RemoteUnexpected()

        if isinstance(data, dict):
            message = _detail_message(data.get("detail"))
            if message is not None:
                raise RemoteRejected(message, status_code=status)

        raise RemoteUnexpected()

    def list_collections(self) -> List[Collection]:
        with remote_call("list_collections"):
            response = self._post(COLLECTION_LIST_ENDPOINT, {})
            data = self._unwrap(response, "collection_names")

        collections = [Collection(name=str(name)) for name in data["collection_names"]]
        logger.info("collections_listed", extra={"count": len(collections)})
        return collections

    def list_documents(
        self,
        collection_name: str,
        limit: int = 1024,
        path_prefix: str = "",
        path_gt: str = ""
    ) -> List[Document]:
        _require(collection_name=collection_name)

        body = {
            "collection_name": collection_name,
            "limit": limit,
            "path_prefix": path_prefix or "",
            "path_gt": path_gt or "",
        }
        with remote_call("list_documents", collection_name=collection_name):
            response = self._post(DOCUMENT_LIST_ENDPOINT, body)
            data = self._unwrap(response, "documents")

            try:
                documents = [Document.model_validate(d) for d in data["documents"]]
            except SchemaError as e:
                raise RemoteUnexpected() from e

        logger.info("documents_listed", extra={
            "collection_name": collection_name,
            "count": len(documents)
        })
        return documents

    def add_document(
        self,
        collection_name: str,
        path: str,
        content: Optional[DocumentContent],
        metadata: Optional[Dict[str, Union[str, List[str]]]] = None,
        overwrite: bool = False
    ) -> AddDocumentResponse:
        _require(collection_name=collection_name, path=path, content=content)

        body = {
            "collection_name": collection_name,
            "path": path,
            "content": content.model_dump(),
            "metadata": metadata or {},
            "overwrite": overwrite,
        }
        with remote_call("add_document", collection_name=collection_name, path=path,
                         content_type=content.type, overwrite=overwrite):
            response = self._post(ADD_DOCUMENT_ENDPOINT, body)
            data = self._unwrap(response, None, ok_statuses=(200, 201))

        return AddDocumentResponse(
            message=str(data.get("message") or "Success!"),
            status_code=response.status_code
        )

    def top_documents(
        self,
        collection_name: str,
        query: str,
        k: int = 5,
        latency_mode: str = "low"
    ) -> List[TopDocumentResult]:
        _require(collection_name=collection_name, query=query)

        body = {
            "collection_name": collection_name,
            "query": query,
            "k": k,
            "latency_mode": latency_mode,
        }
        with remote_call("top_documents", collection_name=collection_name, k=k):
            response = self._post(TOP_DOCUMENTS_ENDPOINT, body)
            data = self._unwrap(response, "results")

            try:
                return [TopDocumentResult.model_validate(r) for r in data["results"]]
            except SchemaError as e:
                raise RemoteUnexpected() from e
