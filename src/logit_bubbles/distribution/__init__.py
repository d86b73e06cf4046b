"""Distribution subsystem for logit-bubbles.

Turns raw scores plus a temperature into a normalized probability per item
using the shift-by-max softmax.
"""

from logit_bubbles.distribution.softmax import (
    DEFAULT_TEMPERATURE_FLOOR,
    clamp_temperature,
    compute_distribution,
    compute_shannon_entropy,
    stable_softmax,
)
from logit_bubbles.distribution.types import ScoredItem

__all__ = [
    "DEFAULT_TEMPERATURE_FLOOR",
    "ScoredItem",
    "clamp_temperature",
    "compute_distribution",
    "compute_shannon_entropy",
    "stable_softmax",
]
