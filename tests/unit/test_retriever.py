"""Unit tests for similarity filtering and context assembly."""

from slack_rag.models import QueryMatch
from slack_rag.rag import build_context, filter_matches


def _match(score: float, content: str = "") -> QueryMatch:
    return QueryMatch(id=content or str(score), score=score, metadata={"content": content})


class TestFilterMatches:
    """Tests for the score threshold filter."""

    def test_threshold_is_strict(self):
        """Test that a score exactly at the threshold is excluded."""
        assert filter_matches([_match(0.5)], 0.5) == []

    def test_just_above_threshold_included(self):
        """Test that 0.50001 passes a 0.5 threshold."""
        kept = filter_matches([_match(0.50001)], 0.5)
        assert [m.score for m in kept] == [0.50001]

    def test_rank_order_preserved(self):
        """Test that surviving matches keep the store's order."""
        kept = filter_matches([_match(0.9, "a"), _match(0.6, "b"), _match(0.4, "c")], 0.5)
        assert [m.content for m in kept] == ["a", "b"]

    def test_filter_is_idempotent(self):
        matches = [_match(0.9), _match(0.6), _match(0.4)]
        once = filter_matches(matches, 0.5)
        assert filter_matches(once, 0.5) == once


class TestBuildContext:
    """Tests for context assembly."""

    def test_double_newline_separated(self):
        context = build_context([_match(0.9, "first"), _match(0.6, "second")])
        assert context == "first\n\nsecond"

    def test_missing_content_is_empty(self):
        context = build_context([QueryMatch(id="x", score=0.9), _match(0.8, "kept")])
        assert context == "\n\nkept"
