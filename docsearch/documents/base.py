"""Base document-service client abstract class.

Collections vs Documents vs Queries
===================================

1. Collections
   - Named groups of documents on the remote service
   - Listed by name only; the list call carries no documents

2. Documents
   - Addressed by path, unique within one collection
   - Carry metadata and an index_status the service advances on its own

3. Queries
   - Ranked against exactly one collection per call
   - Fanning a query out over many collections happens in docsearch.search

The client is agnostic to how results are displayed.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Union
from docsearch.api.models import (
    AddDocumentResponse, Collection, Document, DocumentContent, TopDocumentResult
)
from docsearch.logging import get_logger

logger = get_logger(__name__)

class DocumentServiceClient(ABC):
    """Abstract base class for document-service clients."""

    @abstractmethod
    def list_collections(self) -> List[Collection]:
        """
        List every collection visible to the configured credential.

        Returns:
            Collections in server order, each with an empty documents list

        Raises:
            DocumentServiceError: On any remote or transport failure
        """
        pass

    @abstractmethod
    def list_documents(
        self,
        collection_name: str,
        limit: int = 1024,
        path_prefix: str = "",
        path_gt: str = ""
    ) -> List[Document]:
        """
        List one page of documents in a collection.

        Args:
            collection_name: Collection to list
            limit: Maximum number of documents in the page
            path_prefix: Only return paths starting with this prefix
            path_gt: Pagination cursor; only return paths sorting after it

        Returns:
            Documents ordered by path

        Raises:
            ValidationError: If collection_name is missing
            DocumentServiceError: On any remote or transport failure
        """
        pass

    @abstractmethod
    def add_document(
        self,
        collection_name: str,
        path: str,
        content: Optional[DocumentContent],
        metadata: Optional[Dict[str, Union[str, List[str]]]] = None,
        overwrite: bool = False
    ) -> AddDocumentResponse:
        """
        Create (or with overwrite, replace) a document at a path.

        Returns:
            Confirmation message from the service and the status it answered
            with (201 for a new document, 200 otherwise)

        Raises:
            ValidationError: If collection_name, path or content is missing
            RemoteRejected: If the path exists and overwrite is False (409)
        """
        pass

    @abstractmethod
    def top_documents(
        self,
        collection_name: str,
        query: str,
        k: int = 5,
        latency_mode: str = "low"
    ) -> List[TopDocumentResult]:
        """
        Rank documents of one collection against a natural-language query.

        Returns:
            Up to k hits ordered by descending score
        """
        pass

    def iter_documents(
        self,
        collection_name: str,
        path_prefix: str = "",
        page_size: int = 1024
    ) -> Iterator[Document]:
        """Yield every document in a collection, following the path_gt cursor."""
        cursor = ""
        while True:
            page = self.list_documents(
                collection_name,
                limit=page_size,
                path_prefix=path_prefix,
                path_gt=cursor
            )
            yield from page

            if not page or len(page) < page_size:
                break
            cursor = page[-1].path
            logger.debug("documents_page_fetched", extra={
                "collection_name": collection_name,
                "count": len(page),
                "cursor": cursor
            })
