"""Relaxation solver interface.

The layout engine hands positions and collision radii to a solver, lets it
run a bounded number of steps, and reads positions back. Any 2-D
force-directed integrator satisfying :class:`RelaxationSolver` can be
plugged in through the solver registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import numpy as np

    from logit_bubbles.config import BubbleChartConfig


@dataclass(frozen=True, slots=True)
class ForceSettings:
    """Force configuration for one canvas.

    Attributes:
        center_x: Canvas center x (target of the centering forces).
        center_y: Canvas center y.
        charge_strength: Mutual repulsion between all nodes (positive repels).
        x_strength: Pull toward ``center_x``.
        y_strength: Pull toward ``center_y``.
        collision_strength: Non-overlap enforcement in [0, 1].
        velocity_decay: Fraction of velocity lost per tick.
        alpha_decay: Cooling rate per tick.
        alpha_min: Alpha below which the solver is considered settled.
        alpha_target: Alpha the solver cools toward.
    """

    center_x: float
    center_y: float
    charge_strength: float = 10.0
    x_strength: float = 0.05
    y_strength: float = 0.25
    collision_strength: float = 1.0
    velocity_decay: float = 0.2
    alpha_decay: float = 0.03
    alpha_min: float = 0.001
    alpha_target: float = 0.0

    @classmethod
    def from_config(
        cls, config: BubbleChartConfig, canvas_width: float, canvas_height: float
    ) -> ForceSettings:
        """Build settings centered on a ``canvas_width`` x ``canvas_height`` canvas."""
        return cls(
            center_x=canvas_width / 2.0,
            center_y=canvas_height / 2.0,
            charge_strength=config.charge_strength,
            x_strength=config.center_x_strength,
            y_strength=config.center_y_strength,
            collision_strength=config.collision_strength,
            velocity_decay=config.velocity_decay,
            alpha_decay=config.alpha_decay,
            alpha_min=config.alpha_min,
        )


class RelaxationSolver(ABC):
    """Abstract base class for 2-D relaxation solvers.

    Lifecycle per layout cycle::

        solver.configure(settings)
        solver.set_nodes(xs, ys, collision_radii)
        solver.restart(alpha)
        solver.step(n)             # synchronous, no tick callbacks
        xs, ys = solver.positions()

    Afterwards, :meth:`tick` may be called repeatedly (e.g. from an event
    loop) for residual settling; each call fires the registered tick
    callback.
    """

    @abstractmethod
    def configure(self, settings: ForceSettings) -> None:
        """Replace the force configuration."""

    @abstractmethod
    def set_nodes(self, xs: np.ndarray, ys: np.ndarray, collision_radii: np.ndarray) -> None:
        """Replace the node set, discarding all velocities.

        Args:
            xs: Starting x coordinates.
            ys: Starting y coordinates.
            collision_radii: Per-node radius used for non-overlap.
        """

    @abstractmethod
    def set_positions(self, xs: np.ndarray, ys: np.ndarray) -> None:
        """Overwrite node positions in place, keeping velocities."""

    @abstractmethod
    def positions(self) -> tuple[np.ndarray, np.ndarray]:
        """Return copies of the current ``(xs, ys)``."""

    @abstractmethod
    def restart(self, alpha: float) -> None:
        """Reheat the simulation to *alpha*."""

    @abstractmethod
    def step(self, n: int) -> int:
        """Advance *n* steps synchronously without firing tick callbacks.

        Returns:
            The number of steps actually run.
        """

    @abstractmethod
    def tick(self) -> bool:
        """Advance one step and fire the tick callback.

        Returns:
            True if the solver is still active (``alpha >= alpha_min``).
        """

    @abstractmethod
    def on_tick(self, callback: Callable[[RelaxationSolver], None] | None) -> None:
        """Register the tick callback, replacing any previous one (None clears)."""

    @property
    @abstractmethod
    def alpha(self) -> float:
        """Current simulation temperature."""

    @property
    @abstractmethod
    def node_count(self) -> int:
        """Number of nodes in the current set."""

    @property
    def is_active(self) -> bool:
        """True while background ticks still move nodes noticeably."""
        return self.alpha >= self.alpha_min

    @property
    @abstractmethod
    def alpha_min(self) -> float:
        """Alpha below which the solver counts as settled."""
