"""Data types for the distribution subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScoredItem:
    """An item with its probability under the current temperature.

    Attributes:
        label: Item label.
        raw_score: Unnormalized score the probability was derived from.
        index: Position of the item in its score set (tie-break key).
        probability: Softmax probability; all probabilities of one
            distribution sum to 1.
    """

    label: str
    raw_score: float
    index: int
    probability: float
