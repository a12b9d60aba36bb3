"""Query ranking for picker candidate labels.

Substring hits always outrank subsequence hits. Among substring hits an
earlier match position, then a shorter label, wins. Subsequence hits are
scored by consecutive runs and by matches at path-segment boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass

SUBSTRING_BASE_SCORE = 10_000
_BOUNDARY_CHARS = "/_-. "


@dataclass(frozen=True)
class RankedLabel:
    """One matching label with its original index and score."""

    index: int
    label: str
    score: int


def subsequence_score(query: str, candidate: str) -> int | None:
    """Score ``query`` as a case-insensitive subsequence of ``candidate``."""
    if not query:
        return 0
    needle = query.casefold()
    haystack = candidate.casefold()

    score = 0
    run = 0
    prev_idx = -1
    for char in needle:
        idx = haystack.find(char, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            run = 0
            score -= min(40, (idx - prev_idx - 1) * 2)
        if idx == 0 or haystack[idx - 1] in _BOUNDARY_CHARS:
            score += 35
        prev_idx = idx
    return score - len(haystack) // 5


def rank_labels(query: str, labels: list[str], limit: int = 50) -> list[RankedLabel]:
    """Return up to ``limit`` labels matching ``query``, best first."""
    max_results = max(1, limit)
    needle = query.casefold()

    substring_hits: list[tuple[int, int, str, int]] = []
    for idx, label in enumerate(labels):
        position = label.casefold().find(needle)
        if position >= 0:
            substring_hits.append((position, len(label), label, idx))
    if substring_hits:
        substring_hits.sort()
        return [
            RankedLabel(index=idx, label=label, score=SUBSTRING_BASE_SCORE - position * 50 - length)
            for position, length, label, idx in substring_hits[:max_results]
        ]

    scored: list[tuple[int, int, str, int]] = []
    for idx, label in enumerate(labels):
        score = subsequence_score(query, label)
        if score is not None:
            scored.append((-score, len(label), label, idx))
    scored.sort()
    return [
        RankedLabel(index=idx, label=label, score=-negated)
        for negated, _length, label, idx in scored[:max_results]
    ]


def best_match(query: str, labels: list[str]) -> str | None:
    """Return the top-ranked label for ``query``; ``None`` for no match or empty query."""
    if not query.strip():
        return None
    ranked = rank_labels(query.strip(), labels, limit=1)
    return ranked[0].label if ranked else None


__all__ = ["RankedLabel", "best_match", "rank_labels", "subsequence_score"]
