"""Threshold filtering and context assembly for retrieved matches."""

from typing import Iterable, List

from ..models import QueryMatch


def filter_matches(matches: Iterable[QueryMatch], score_threshold: float) -> List[QueryMatch]:
    """Keep matches scoring strictly above the threshold, preserving rank order."""
    return [match for match in matches if match.score > score_threshold]


def build_context(matches: Iterable[QueryMatch]) -> str:
    """Join stored message content, double-newline separated, in rank order."""
    return "\n\n".join(match.content for match in matches)
