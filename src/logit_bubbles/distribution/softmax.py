"""Temperature-scaled softmax over a score set.

Pipeline: clamp temperature to the floor -> scores / T -> shift by max ->
exp -> normalize. Pure functions; nothing here raises for any finite input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from logit_bubbles.distribution.types import ScoredItem

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logit_bubbles.scores import Item, ScoreSet

DEFAULT_TEMPERATURE_FLOOR = 1e-6


def clamp_temperature(temperature: float, floor: float = DEFAULT_TEMPERATURE_FLOOR) -> float:
    """Raise *temperature* to *floor* if it is below it (including <= 0)."""
    return max(float(temperature), floor)


def stable_softmax(
    raw_scores: np.ndarray,
    temperature: float,
    floor: float = DEFAULT_TEMPERATURE_FLOOR,
) -> np.ndarray:
    """Numerically stable softmax with temperature via shift-by-max.

    Args:
        raw_scores: 1-D array of finite raw scores.
        temperature: Sampling temperature; clamped to *floor* first.
        floor: Minimum positive temperature.

    Returns:
        Float64 probability array of the same length, summing to 1.0.
        Empty input yields an empty array.
    """
    scores = np.asarray(raw_scores, dtype=np.float64)
    if scores.size == 0:
        return np.zeros(0, dtype=np.float64)

    scaled = scores / clamp_temperature(temperature, floor)
    # The max entry becomes exp(0) = 1, so the sum is always >= 1.
    exp_shifted = np.exp(scaled - np.max(scaled))
    result: np.ndarray = exp_shifted / np.sum(exp_shifted)
    return result


def compute_distribution(
    items: ScoreSet | Sequence[Item],
    temperature: float,
    floor: float = DEFAULT_TEMPERATURE_FLOOR,
) -> tuple[ScoredItem, ...]:
    """Attach a softmax probability to every item.

    Args:
        items: A ScoreSet or any sequence of Items, in input order.
        temperature: Sampling temperature; values below *floor* are
            silently corrected, never rejected.
        floor: Minimum positive temperature.

    Returns:
        ScoredItems in the same order as *items*.
    """
    raw = np.array([item.raw_score for item in items], dtype=np.float64)
    probs = stable_softmax(raw, temperature, floor)
    return tuple(
        ScoredItem(
            label=item.label,
            raw_score=item.raw_score,
            index=i,
            probability=float(p),
        )
        for i, (item, p) in enumerate(zip(items, probs))
    )


def compute_shannon_entropy(probabilities: Sequence[float] | np.ndarray) -> float:
    """Compute Shannon entropy H = -sum(p_i * ln(p_i)) of a distribution.

    Zero-probability entries are skipped. Returns 0.0 for an empty or
    one-hot distribution.

    Args:
        probabilities: Probabilities summing to ~1.

    Returns:
        Shannon entropy in nats.
    """
    probs = np.asarray(probabilities, dtype=np.float64)
    mask = probs > 0
    if not np.any(mask):
        return 0.0
    entropy = -float(np.sum(probs[mask] * np.log(probs[mask])))
    # Guard against floating-point artifacts producing tiny negatives.
    return max(0.0, entropy)
