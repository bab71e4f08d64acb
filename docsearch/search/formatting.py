"""Render an aggregated outcome for the chat transcript."""
import uuid
from docsearch.api.models import AggregatedOutcome, ChatMessage, RankResponse

NO_COLLECTIONS_SELECTED = "Please select at least one collection to search in."
NO_RESULTS = "No results found for your query."

def format_score(score: float) -> str:
    return f"{score:.2f}"

def format_summary(outcome: AggregatedOutcome) -> str:
    """
    Build the plain-text answer for an outcome.

    Layout: a header echoing the query, one numbered block per collection with
    hits, an ``Errors:`` block if any collection failed, or a fixed line when
    there was nothing at all. Pure: the same outcome always gives the same text.
    """
    if not outcome.selected_collections and not outcome.results and not outcome.errors:
        return NO_COLLECTIONS_SELECTED

    lines = [f'Found results for your query: "{outcome.query}"', ""]

    for block in outcome.results:
        lines.append(f"{block.collection}:")
        for rank, hit in enumerate(block.results, start=1):
            lines.append(f"{rank}. {hit.path} (Score: {format_score(hit.score)})")
        lines.append("")

    if outcome.errors:
        lines.append("Errors:")
        lines.extend(f"- {error}" for error in outcome.errors)

    if not outcome.results and not outcome.errors:
        lines.append(NO_RESULTS)

    return "\n".join(lines).strip()

def format_response(outcome: AggregatedOutcome) -> RankResponse:
    """Pair the summary text with the unmodified structured results."""
    text = format_summary(outcome)
    return RankResponse(
        response=text,
        selected_collections=outcome.selected_collections,
        results=outcome.results,
        errors=outcome.errors,
        message=ChatMessage(
            id=str(uuid.uuid4()),
            text=text,
            sender="assistant",
            outcome=outcome
        )
    )
