"""Stable incremental layout of the visible items.

Each cycle:
    1. Size and color every visible item from its probability.
    2. Start surviving items at their previous position; place new items
       at a deterministic, label-derived spot (big items near the center).
    3. Replace the solver's node set and run a fixed number of relaxation
       steps synchronously, so the result is already settled.
    4. Clamp every circle inside the canvas.
    5. Snapshot the final positions as the next cycle's LayoutState.

The solver may keep ticking afterwards (residual settling); every such tick
is clamped too.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np

from logit_bubbles.layout.base import ForceSettings
from logit_bubbles.layout.registry import SolverRegistry
from logit_bubbles.layout.scales import color_value_for, interpolate_rgb, radius_for
from logit_bubbles.layout.types import LayoutResult, LayoutState, PositionedItem

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from logit_bubbles.config import BubbleChartConfig
    from logit_bubbles.layout.base import RelaxationSolver
    from logit_bubbles.truncation.types import VisibleItem

logger = logging.getLogger("logit_bubbles")


def label_hash(label: str) -> int:
    """Order-independent hash of a label: the sum of its character codes."""
    return sum(ord(ch) for ch in label)


def initial_position(
    label: str,
    radius: float,
    max_radius: float,
    canvas_width: float,
    canvas_height: float,
) -> tuple[float, float]:
    """First-appearance position for an item.

    The angle comes from ``label_hash(label) % 360`` degrees; the distance
    from the canvas center shrinks as the radius approaches *max_radius*,
    so larger items start closer to the center.

    Returns:
        ``(x, y)`` in canvas coordinates.
    """
    angle = math.radians(label_hash(label) % 360)
    fraction = 1.0 - radius / max_radius if max_radius > 0 else 0.0
    distance = fraction * min(canvas_width, canvas_height) / 2.0
    return (
        canvas_width / 2.0 + math.cos(angle) * distance,
        canvas_height / 2.0 + math.sin(angle) * distance,
    )


def clamp_to_canvas(
    xs: np.ndarray,
    ys: np.ndarray,
    radii: np.ndarray,
    canvas_width: float,
    canvas_height: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Clamp circle centers so each full circle lies inside the canvas.

    A circle wider than the canvas along an axis is centered on that axis.

    Returns:
        New ``(xs, ys)`` arrays.
    """
    return (
        _clamp_axis(xs, radii, canvas_width),
        _clamp_axis(ys, radii, canvas_height),
    )


def _clamp_axis(values: np.ndarray, radii: np.ndarray, extent: float) -> np.ndarray:
    low = radii
    high = extent - radii
    clamped = np.minimum(np.maximum(values, low), high)
    result: np.ndarray = np.where(low > high, extent / 2.0, clamped)
    return result


class LayoutEngine:
    """Positions visible items and keeps them stable across cycles.

    The engine owns the relaxation solver for its lifetime. Only the most
    recent cycle's items are tracked; earlier items are forgotten.
    """

    def __init__(
        self,
        config: BubbleChartConfig,
        solver: RelaxationSolver | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Scales, collision margin and force parameters.
            solver: Relaxation solver. Built from ``config.solver_type``
                when omitted.
        """
        self._config = config
        self._solver = solver if solver is not None else SolverRegistry.build(config)
        self._solver.on_tick(self._clamp_solver)
        self._current: tuple[PositionedItem, ...] = ()
        self._radii = np.zeros(0, dtype=np.float64)
        self._canvas = (config.canvas_width, config.canvas_height)

    @property
    def solver(self) -> RelaxationSolver:
        """The relaxation solver driven by this engine."""
        return self._solver

    @property
    def current(self) -> tuple[PositionedItem, ...]:
        """Items of the most recent cycle at their latest positions."""
        return self._current

    def reconfigure(self, config: BubbleChartConfig) -> None:
        """Use *config* from the next cycle on."""
        self._config = config

    def layout(
        self,
        visible_items: Sequence[VisibleItem],
        previous_state: Mapping[str, tuple[float, float]],
        canvas_width: float,
        canvas_height: float,
        radius_range: tuple[float, float],
    ) -> LayoutResult:
        """Lay out one cycle's visible items.

        Args:
            visible_items: Items in rank order.
            previous_state: ``label -> (x, y)`` from the previous cycle.
            canvas_width: Canvas width in pixels.
            canvas_height: Canvas height in pixels.
            radius_range: ``(min_radius, max_radius)``.

        Returns:
            LayoutResult with settled, in-bounds items and the new state.
        """
        config = self._config
        min_radius, max_radius = radius_range

        sized: list[PositionedItem] = []
        reused = 0
        for item in visible_items:
            radius = radius_for(item.probability, min_radius, max_radius)
            color_value = color_value_for(item.probability, config.color_exponent)
            start = previous_state.get(item.label)
            if start is None:
                start = initial_position(
                    item.label, radius, max_radius, canvas_width, canvas_height
                )
            else:
                reused += 1
            sized.append(
                PositionedItem(
                    label=item.label,
                    raw_score=item.raw_score,
                    index=item.index,
                    probability=item.probability,
                    rank=item.rank,
                    x=start[0],
                    y=start[1],
                    radius=radius,
                    color_value=color_value,
                    color=interpolate_rgb(config.color_start, config.color_end, color_value),
                )
            )

        self._current = tuple(sized)
        self._radii = np.array([item.radius for item in sized], dtype=np.float64)
        self._canvas = (canvas_width, canvas_height)

        solver = self._solver
        solver.configure(ForceSettings.from_config(config, canvas_width, canvas_height))
        solver.set_nodes(
            np.array([item.x for item in sized], dtype=np.float64),
            np.array([item.y for item in sized], dtype=np.float64),
            self._radii + config.collision_margin,
        )
        solver.restart(config.reheat_alpha)
        steps = solver.step(config.settle_steps)
        self._clamp_solver(solver)
        positioned = self._read_positions()

        logger.debug(
            "layout: items=%d reused=%d placed=%d steps=%d alpha=%.4f",
            len(sized),
            reused,
            len(sized) - reused,
            steps,
            solver.alpha,
        )
        return LayoutResult(
            positioned=positioned,
            state=LayoutState.from_items(positioned),
            steps_run=steps,
        )

    def tick(self) -> tuple[PositionedItem, ...] | None:
        """Advance residual settling by one clamped solver tick.

        Returns:
            The current items at their new positions, or ``None`` once the
            solver has cooled down (or there is nothing laid out).
        """
        if not self._current or not self._solver.is_active:
            return None
        self._solver.tick()
        return self._read_positions()

    def _clamp_solver(self, solver: RelaxationSolver) -> None:
        if solver.node_count != self._radii.size or solver.node_count == 0:
            return
        xs, ys = solver.positions()
        width, height = self._canvas
        xs, ys = clamp_to_canvas(xs, ys, self._radii, width, height)
        solver.set_positions(xs, ys)

    def _read_positions(self) -> tuple[PositionedItem, ...]:
        xs, ys = self._solver.positions()
        self._current = tuple(
            replace(item, x=float(x), y=float(y))
            for item, x, y in zip(self._current, xs, ys)
        )
        return self._current
