"""RankingPolicy — order scored candidates deterministically.

1. Higher total first.
2. Totals within *epsilon* count as a tie: lower weighted load wins.
3. Still tied: earlier position in the candidate list wins.
"""

from __future__ import annotations

from functools import cmp_to_key

from assignment_engine.domain.value_objects.score_breakdown import ScoreBreakdown


def rank_candidates(
    scores: list[ScoreBreakdown] | tuple[ScoreBreakdown, ...],
    epsilon: float = 0.001,
) -> tuple[ScoreBreakdown, ...]:
    """Sort scores best-first. Input order is the final tie-breaker.

    Raises:
        ValueError: if epsilon is negative.
    """
    if epsilon < 0:
        raise ValueError("Tie epsilon must be non-negative")

    indexed = list(enumerate(scores))

    def compare(a: tuple[int, ScoreBreakdown], b: tuple[int, ScoreBreakdown]) -> int:
        (ia, sa), (ib, sb) = a, b
        if abs(sa.total - sb.total) > epsilon:
            return -1 if sa.total > sb.total else 1
        if sa.weighted_load != sb.weighted_load:
            return -1 if sa.weighted_load < sb.weighted_load else 1
        return ia - ib

    return tuple(s for _, s in sorted(indexed, key=cmp_to_key(compare)))
