from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from prometheus_fastapi_instrumentator import Instrumentator
from docsearch.logging import init_logging
from docsearch.api.routes import collections_router, documents_router, rank_router, health_router
from docsearch.documents import get_document_client
from docsearch.errors import DocumentServiceError, ServiceNotConfigured

logger = init_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the document client on startup so bad configuration shows early."""
    try:
        get_document_client()
        logger.info("startup_complete")
    except ServiceNotConfigured as e:
        # Keep serving: /api/health/ready reports the problem
        logger.error("startup_failed", extra={"error": str(e)})

    yield

    logger.info("shutdown_complete")

app = FastAPI(title="Document Search Dashboard API", lifespan=lifespan)

@app.exception_handler(DocumentServiceError)
async def document_service_error_handler(request: Request, exc: DocumentServiceError):
    logger.info("request_failed", extra={
        "path": request.url.path,
        "error_type": type(exc).__name__,
        "status_code": exc.status_code,
        "error": exc.message
    })
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same 400 {"error"} shape as missing fields."""
    reasons = []
    for error in exc.errors():
        # loc looks like ("body", "content", "text"); drop the "body"/"query" prefix
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        reasons.append(f"{field}: {error['msg']}" if field else error["msg"])
    message = "; ".join(reasons)

    logger.info("request_rejected", extra={"path": request.url.path, "error": message})
    return JSONResponse(status_code=400, content={"error": message})

# Include routers
app.include_router(collections_router)
app.include_router(documents_router)
app.include_router(rank_router)
app.include_router(health_router)

@app.get("/healthz")
def healthz():
    return {"ok": True}

# Prometheus /metrics
Instrumentator().instrument(app).expose(app, endpoint="/metrics")
