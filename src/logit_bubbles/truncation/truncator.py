"""Top-k / top-p truncation of a scored distribution.

Implements: rank (descending probability, ties by input order) -> top-k
prefix -> top-p walk that includes the item crossing the threshold and
drops everything after it.

Neither threshold is ever rejected. Out-of-range values saturate:
top_k beyond the item count keeps everything, top_k <= 0 keeps nothing,
top_p >= 1 passes every top-k item, top_p <= 0 keeps only the top item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logit_bubbles.truncation.types import TruncationResult, VisibleItem

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logit_bubbles.distribution.types import ScoredItem

DEFAULT_TOP_P_EPSILON = 1e-9


class Truncator:
    """Stateless top-k / top-p truncator.

    The only setting is the top-p rounding tolerance, fixed at construction.
    """

    def __init__(self, epsilon: float = DEFAULT_TOP_P_EPSILON) -> None:
        """Initialize the truncator.

        Args:
            epsilon: Tolerance subtracted from top_p so that a running sum
                a hair under the threshold (e.g. 0.9999999999 for p = 1.0)
                still counts as reaching it.
        """
        self._epsilon = epsilon

    @property
    def epsilon(self) -> float:
        """Top-p rounding tolerance."""
        return self._epsilon

    def truncate(
        self,
        scored_items: Sequence[ScoredItem],
        top_k: int,
        top_p: float,
    ) -> TruncationResult:
        """Select the visible subset of a distribution.

        Args:
            scored_items: Items of one distribution, in any order.
            top_k: Maximum number of items to keep.
            top_p: Cumulative-mass threshold.

        Returns:
            TruncationResult with visible items in rank order and the
            realized cumulative mass.
        """
        ranked = self._rank(scored_items)
        candidates, effective_k = self._apply_top_k(ranked, top_k)
        kept, mass = self._apply_top_p(candidates, top_p, self._epsilon)

        visible = tuple(
            VisibleItem(
                label=item.label,
                raw_score=item.raw_score,
                index=item.index,
                probability=item.probability,
                rank=rank,
            )
            for rank, item in enumerate(kept)
        )
        return TruncationResult(
            visible=visible,
            realized_cumulative_mass=mass,
            diagnostics={
                "effective_top_k": effective_k,
                "top_p_candidates": len(candidates),
                "num_visible": len(visible),
            },
        )

    @staticmethod
    def _rank(scored_items: Sequence[ScoredItem]) -> list[ScoredItem]:
        """Sort by probability descending; equal probabilities keep input order."""
        return sorted(scored_items, key=lambda item: (-item.probability, item.index))

    @staticmethod
    def _apply_top_k(ranked: list[ScoredItem], top_k: int) -> tuple[list[ScoredItem], int]:
        """Keep the first *top_k* ranked items.

        Args:
            ranked: Items in rank order.
            top_k: Requested count. Non-integers are truncated toward zero.

        Returns:
            Tuple of (kept prefix, effective k).
        """
        k = int(top_k)
        if k <= 0:
            return [], 0
        if k >= len(ranked):
            return ranked, len(ranked)
        return ranked[:k], k

    @staticmethod
    def _apply_top_p(
        candidates: list[ScoredItem], top_p: float, epsilon: float
    ) -> tuple[list[ScoredItem], float]:
        """Nucleus walk: keep items up to and including the threshold crossing.

        Args:
            candidates: Top-k items in rank order.
            top_p: Cumulative-mass threshold.
            epsilon: Rounding tolerance applied to the threshold.

        Returns:
            Tuple of (kept prefix, cumulative mass at the last kept item).
        """
        threshold = top_p - epsilon
        cumulative = 0.0
        kept: list[ScoredItem] = []
        for item in candidates:
            cumulative += item.probability
            kept.append(item)
            if cumulative >= threshold:
                break
        return kept, cumulative


_DEFAULT_TRUNCATOR = Truncator()


def truncate(
    scored_items: Sequence[ScoredItem],
    top_k: int,
    top_p: float,
    epsilon: float = DEFAULT_TOP_P_EPSILON,
) -> TruncationResult:
    """Truncate *scored_items* with top-k then top-p.

    Convenience wrapper around :meth:`Truncator.truncate`.
    """
    truncator = _DEFAULT_TRUNCATOR if epsilon == DEFAULT_TOP_P_EPSILON else Truncator(epsilon)
    return truncator.truncate(scored_items, top_k, top_p)
