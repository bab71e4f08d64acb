import unittest

from docsearch.api.models import AggregatedOutcome, CollectionResults
from docsearch.search.formatting import (
    NO_COLLECTIONS_SELECTED,
    format_response,
    format_score,
    format_summary,
)
from tests.fakes import hit


def outcome(results=(), errors=(), selected=None, query="refund policy"):
    results = [CollectionResults(collection=name, results=hits) for name, hits in results]
    if selected is None:
        selected = [r.collection for r in results] + [e.split(":", 1)[0] for e in errors]
    return AggregatedOutcome(query=query, results=results, errors=list(errors), selected_collections=selected)


class TestFormatScore(unittest.TestCase):
    def test_two_decimals(self):
        self.assertEqual(format_score(0.91499), "0.91")
        self.assertEqual(format_score(1), "1.00")
        self.assertEqual(format_score(0.5), "0.50")


class TestFormatSummary(unittest.TestCase):
    def test_refund_policy_example(self):
        summary = format_summary(outcome(
            results=[("support-docs", [hit("faq.md", 0.87)])],
            errors=["legal-docs: collection not found"],
        ))

        self.assertEqual(summary, (
            'Found results for your query: "refund policy"\n'
            "\n"
            "support-docs:\n"
            "1. faq.md (Score: 0.87)\n"
            "\n"
            "Errors:\n"
            "- legal-docs: collection not found"
        ))
        self.assertLess(
            summary.index("support-docs:\n1. faq.md (Score: 0.87)"),
            summary.index("Errors:"),
        )

    def test_ranks_follow_returned_order(self):
        summary = format_summary(outcome(results=[
            ("a", [hit("one.md", 0.9), hit("two.md", 0.91499)]),
            ("b", [hit("three.md", 1)]),
        ]))

        self.assertIn("a:\n1. one.md (Score: 0.90)\n2. two.md (Score: 0.91)", summary)
        self.assertIn("b:\n1. three.md (Score: 1.00)", summary)
        self.assertNotIn("Errors:", summary)

    def test_nothing_found(self):
        summary = format_summary(outcome(selected=["a"]))

        self.assertEqual(summary, 'Found results for your query: "refund policy"\n\nNo results found for your query.')

    def test_no_collections_selected(self):
        self.assertEqual(format_summary(outcome(selected=[])), NO_COLLECTIONS_SELECTED)
        self.assertEqual(NO_COLLECTIONS_SELECTED, "Please select at least one collection to search in.")

    def test_results_shown_even_without_selection_list(self):
        summary = format_summary(outcome(
            results=[("support-docs", [hit("faq.md", 0.87)])],
            errors=["legal-docs: collection not found"],
            selected=[],
        ))

        self.assertNotEqual(summary, NO_COLLECTIONS_SELECTED)
        self.assertIn("support-docs:\n1. faq.md (Score: 0.87)", summary)
        self.assertIn("Errors:\n- legal-docs: collection not found", summary)

    def test_formatting_is_repeatable(self):
        value = outcome(
            results=[("a", [hit("one.md", 0.123456)])],
            errors=["b: Network error: timed out"],
        )

        self.assertEqual(format_summary(value), format_summary(value))


class TestFormatResponse(unittest.TestCase):
    def test_structured_results_pass_through(self):
        value = outcome(
            results=[("support-docs", [hit("faq.md", 0.87, file_url="https://files.example.test/faq.md")])],
            errors=["legal-docs: collection not found"],
        )

        response = format_response(value)

        self.assertEqual(response.results, value.results)
        self.assertEqual(response.errors, ["legal-docs: collection not found"])
        self.assertEqual(response.selected_collections, ["support-docs", "legal-docs"])
        self.assertEqual(response.message.sender, "assistant")
        self.assertEqual(response.message.text, response.response)
        self.assertEqual(response.message.outcome, value)
        self.assertTrue(response.message.id)


if __name__ == "__main__":
    unittest.main()
