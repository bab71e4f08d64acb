"""Fan one query out over several collections and aggregate the outcome."""
from typing import Iterable, List, Optional, Tuple, Union
from docsearch.api.models import AggregatedOutcome, CollectionResults, TopDocumentResult
from docsearch.documents.base import DocumentServiceClient
from docsearch.errors import DocumentServiceError, ValidationError
from docsearch.logging import get_logger

logger = get_logger(__name__)

TOP_K = 5
LATENCY_MODE = "low"

# (input index, collection name, hits or error message)
_Outcome = Tuple[int, str, Union[List[TopDocumentResult], str]]

def _dedupe(names: Iterable[str]) -> List[str]:
    """Drop repeated collection names, keeping first occurrences in order."""
    seen = set()
    unique = []
    for name in names:
        if name not in seen:
            seen.add(name)
            unique.append(name)
    return unique

def _query_one(client: DocumentServiceClient, index: int, collection: str, message: str) -> _Outcome:
    try:
        hits = client.top_documents(collection, message, k=TOP_K, latency_mode=LATENCY_MODE)
    except DocumentServiceError as e:
        return index, collection, f"{collection}: {e.message}"
    return index, collection, hits

def fan_out_query(
    client: DocumentServiceClient,
    message: Optional[str],
    selected_collections: Optional[Iterable[str]]
) -> AggregatedOutcome:
    """
    Rank ``message`` against every selected collection.

    A failing collection is reported in ``errors`` and never prevents results
    from the others. Results and errors both follow the input order of
    ``selected_collections``. Nothing is retried.

    Raises:
        ValidationError: If message is missing or blank (no network call is made)
    """
    if not message or not message.strip():
        raise ValidationError("message is required")

    selected = _dedupe(selected_collections or [])
    if not selected:
        logger.info("rank_no_collections_selected")
        return AggregatedOutcome(query=message)

    # map: one independent outcome per collection
    outcomes = [_query_one(client, i, name, message) for i, name in enumerate(selected)]

    # reduce: partition back into input order
    results: List[CollectionResults] = []
    errors: List[str] = []
    for _, collection, outcome in sorted(outcomes, key=lambda o: o[0]):
        if isinstance(outcome, str):
            errors.append(outcome)
        else:
            results.append(CollectionResults(collection=collection, results=outcome))

    logger.info("rank_fanout_complete", extra={
        "collections": len(selected),
        "succeeded": len(results),
        "failed": len(errors)
    })

    return AggregatedOutcome(
        query=message,
        results=results,
        errors=errors,
        selected_collections=selected
    )
