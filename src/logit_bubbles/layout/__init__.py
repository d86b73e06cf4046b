"""Layout subsystem for logit-bubbles.

Sizes, colors and positions the visible items, reusing each surviving
item's previous position and settling the set with a relaxation solver.
"""

from logit_bubbles.layout.base import ForceSettings, RelaxationSolver
from logit_bubbles.layout.engine import (
    LayoutEngine,
    clamp_to_canvas,
    initial_position,
    label_hash,
)
from logit_bubbles.layout.force import ForceSimulation
from logit_bubbles.layout.registry import SolverRegistry
from logit_bubbles.layout.scales import color_value_for, interpolate_rgb, radius_for
from logit_bubbles.layout.types import LayoutResult, LayoutState, PositionedItem

__all__ = [
    "ForceSettings",
    "ForceSimulation",
    "LayoutEngine",
    "LayoutResult",
    "LayoutState",
    "PositionedItem",
    "RelaxationSolver",
    "SolverRegistry",
    "clamp_to_canvas",
    "color_value_for",
    "initial_position",
    "interpolate_rgb",
    "label_hash",
    "radius_for",
]
