"""logit-bubbles: see how temperature, top-k and top-p reshape a token distribution.

Computes a temperature-scaled softmax over a fixed vocabulary, truncates it
with top-k and top-p, and keeps a stable bubble layout of the visible
tokens as the controls move.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("logit-bubbles")
except PackageNotFoundError:
    __version__ = "0.0.0"

from logit_bubbles.chart import BubbleChart
from logit_bubbles.config import BubbleChartConfig, resolve_config, validate_overrides
from logit_bubbles.distribution import ScoredItem, compute_distribution
from logit_bubbles.exceptions import (
    ConfigValidationError,
    LogitBubblesError,
    ScoreSetError,
    SolverError,
)
from logit_bubbles.layout import LayoutEngine, LayoutState, PositionedItem
from logit_bubbles.presentation import Frame, Presenter
from logit_bubbles.scores import Item, ScoreSet
from logit_bubbles.truncation import TruncationResult, VisibleItem, truncate

__all__ = [
    "BubbleChart",
    "BubbleChartConfig",
    "ConfigValidationError",
    "Frame",
    "Item",
    "LayoutEngine",
    "LayoutState",
    "LogitBubblesError",
    "PositionedItem",
    "Presenter",
    "ScoreSet",
    "ScoreSetError",
    "ScoredItem",
    "SolverError",
    "TruncationResult",
    "VisibleItem",
    "__version__",
    "compute_distribution",
    "resolve_config",
    "truncate",
    "validate_overrides",
]
