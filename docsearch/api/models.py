"""API request/response models."""
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# Document models
class IndexStatus(str, Enum):
    """Indexing lifecycle reported by the document service (never set locally)."""
    NOT_PARSED = "not_parsed"
    PARSING = "parsing"
    NOT_INDEXED = "not_indexed"
    INDEXING = "indexing"
    INDEXED = "indexed"
    PARSING_FAILED = "parsing_failed"
    INDEXING_FAILED = "indexing_failed"

class Document(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    collection_name: Optional[str] = None
    path: str
    metadata: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    index_status: Optional[IndexStatus] = None
    created_at: Optional[str] = None
    size: Optional[int] = None
    num_pages: Optional[int] = None
    file_url: Optional[str] = None

class Collection(BaseModel):
    name: str
    documents: List[Document] = Field(default_factory=list)

class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str

class AutoContent(BaseModel):
    """Raw file bytes, base64-encoded; the service detects the format."""
    type: Literal["auto"] = "auto"
    base64_data: str

DocumentContent = Annotated[Union[TextContent, AutoContent], Field(discriminator="type")]

class AddDocumentRequest(BaseModel):
    # Required fields are checked by the client so missing ones surface as
    # "<field> is required" rather than a schema error.
    collection_name: Optional[str] = None
    path: Optional[str] = None
    content: Optional[DocumentContent] = None
    metadata: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    overwrite: bool = False

class AddDocumentResponse(BaseModel):
    message: str
    # 200 or 201 as answered by the document service; relayed, never serialized
    status_code: int = Field(200, exclude=True)

class CollectionsResponse(BaseModel):
    collections: List[Collection]

class DocumentsResponse(BaseModel):
    documents: List[Document]

# Rank / chat models
class TopDocumentResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: str
    score: float
    file_url: Optional[str] = None

class CollectionResults(BaseModel):
    collection: str
    results: List[TopDocumentResult]

class AggregatedOutcome(BaseModel):
    query: str
    results: List[CollectionResults] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    selected_collections: List[str] = Field(default_factory=list)

class ChatMessage(BaseModel):
    """One transcript entry. Held only by the presentation layer."""
    id: str
    text: str
    sender: Literal["user", "assistant"]
    outcome: Optional[AggregatedOutcome] = None

class RankRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    selected_collections: Optional[List[str]] = Field(default=None, alias="selectedCollections")

class RankResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    selected_collections: List[str] = Field(alias="selectedCollections")
    results: List[CollectionResults] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    message: ChatMessage

class ErrorResponse(BaseModel):
    error: str
