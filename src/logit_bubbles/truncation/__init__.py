"""Truncation subsystem for logit-bubbles.

Ranks a distribution and applies top-k then top-p (nucleus) filtering to
choose the items that are displayed.
"""

from logit_bubbles.truncation.truncator import DEFAULT_TOP_P_EPSILON, Truncator, truncate
from logit_bubbles.truncation.types import TruncationResult, VisibleItem

__all__ = [
    "DEFAULT_TOP_P_EPSILON",
    "TruncationResult",
    "Truncator",
    "VisibleItem",
    "truncate",
]
