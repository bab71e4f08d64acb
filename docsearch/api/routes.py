"""API routes for collections, documents and ranked search.

Handlers are plain ``def``: the document client blocks on I/O, so FastAPI
runs them in its threadpool instead of on the event loop.
"""
import base64
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse
from docsearch.logging import get_logger
from docsearch.api.models import (
    AddDocumentRequest, AddDocumentResponse, AutoContent, CollectionsResponse,
    DocumentsResponse, ErrorResponse, RankRequest, RankResponse
)
from docsearch.documents import DocumentServiceClient, get_document_client
from docsearch.errors import ServiceNotConfigured, ValidationError
from docsearch.search.fanout import fan_out_query
from docsearch.search.formatting import format_response

logger = get_logger(__name__)

_ERRORS = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

# Create routers for different services
collections_router = APIRouter(prefix="/api/collections", tags=["collections"], responses=_ERRORS)
documents_router = APIRouter(prefix="/api/documents", tags=["documents"], responses=_ERRORS)
rank_router = APIRouter(prefix="/api/rank", tags=["rank"], responses=_ERRORS)
health_router = APIRouter(prefix="/api/health", tags=["health"])


# Collection endpoints
@collections_router.get("", response_model=CollectionsResponse)
@collections_router.post("", response_model=CollectionsResponse)
def list_collections(
    include_documents: bool = Query(False, description="Also list every document of each collection"),
    client: DocumentServiceClient = Depends(get_document_client)
):
    """
    List all collections.

    Collections come back with empty document lists unless include_documents
    is set, in which case each collection is paged through in full.
    """
    collections = client.list_collections()

    if include_documents:
        for collection in collections:
            collection.documents = list(client.iter_documents(collection.name))

    return CollectionsResponse(collections=collections)


# Document endpoints
@documents_router.get("", response_model=DocumentsResponse)
def list_documents(
    collection_name: str = Query("", description="Collection to list"),
    limit: int = Query(1024, ge=1),
    path_prefix: str = Query(""),
    path_gt: str = Query("", description="Pagination cursor: last path of the previous page"),
    client: DocumentServiceClient = Depends(get_document_client)
):
    """List one page of documents in a collection."""
    documents = client.list_documents(
        collection_name,
        limit=limit,
        path_prefix=path_prefix,
        path_gt=path_gt
    )
    return DocumentsResponse(documents=documents)

@documents_router.post("", response_model=AddDocumentResponse)
def add_document(
    request: AddDocumentRequest,
    client: DocumentServiceClient = Depends(get_document_client)
):
    """
    Add a document to a collection.

    Answers with the service's status: 201 for a new document, 200 when
    replaced. With overwrite=false an existing path is a conflict, relayed
    with the service's status code.
    """
    added = client.add_document(
        request.collection_name,
        request.path,
        request.content,
        metadata=request.metadata,
        overwrite=request.overwrite
    )

    logger.info("document_added", extra={
        "collection_name": request.collection_name,
        "path": request.path,
        "overwrite": request.overwrite
    })

    return JSONResponse(status_code=added.status_code, content=added.model_dump())

@documents_router.post("/upload", response_model=AddDocumentResponse)
def upload_document(
    collection_name: str = Form(""),
    path: str = Form("", description="Defaults to the uploaded file name"),
    overwrite: bool = Form(False),
    file: UploadFile = File(...),
    client: DocumentServiceClient = Depends(get_document_client)
):
    """Upload a file as-is; the document service detects its format."""
    raw = file.file.read()
    if not raw:
        raise ValidationError("file is empty")

    target_path = path or file.filename
    content = AutoContent(base64_data=base64.b64encode(raw).decode("ascii"))
    added = client.add_document(collection_name, target_path, content, overwrite=overwrite)

    logger.info("document_uploaded", extra={
        "collection_name": collection_name,
        "path": target_path,
        "size": len(raw)
    })

    return JSONResponse(status_code=added.status_code, content=added.model_dump())


# Rank endpoints
@rank_router.post("", response_model=RankResponse)
def rank(
    request: RankRequest,
    client: DocumentServiceClient = Depends(get_document_client)
):
    """
    Rank a chat message against the selected collections.

    Always 200 once the message is valid: collections that fail are listed
    under ``errors`` next to the results of those that succeeded.
    """
    outcome = fan_out_query(client, request.message, request.selected_collections)
    return format_response(outcome)


# Health endpoints
@health_router.get("/ready")
def ready_check():
    """Check that the document client can be built from the configuration."""
    try:
        get_document_client()
    except ServiceNotConfigured as e:
        return JSONResponse(status_code=503, content={"status": "not_ready", "error": str(e)})
    return {"status": "ready"}

@health_router.get("/live")
async def liveness_check():
    """Simple liveness check."""
    return {"status": "alive"}
