"""Data types for the truncation subsystem."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class VisibleItem:
    """A scored item that survived top-k and top-p truncation.

    Attributes:
        label: Item label.
        raw_score: Unnormalized score.
        index: Position in the score set.
        probability: Softmax probability (not renormalized after truncation).
        rank: 0-based position in descending-probability order.
    """

    label: str
    raw_score: float
    index: int
    probability: float
    rank: int


@dataclass(frozen=True, slots=True)
class TruncationResult:
    """Outcome of truncating one distribution.

    Attributes:
        visible: Surviving items in rank order.
        realized_cumulative_mass: Probability mass the visible items
            represent (cumulative mass at the top-p boundary item).
        diagnostics: Filtering stats (effective top-k, candidate count).
    """

    visible: tuple[VisibleItem, ...]
    realized_cumulative_mass: float
    diagnostics: dict[str, Any]
