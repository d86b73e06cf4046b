"""Force-directed relaxation solver on numpy arrays.

Velocity-based integrator with simulated cooling. Each step:

    alpha += (alpha_target - alpha) * alpha_decay
    apply forces (charge, center, axis pulls, collision) to velocities
    v *= 1 - velocity_decay
    x += v

Forces:
    charge     mutual inverse-distance repulsion between every pair
    center     translates all nodes so their centroid sits on the center
    axis pulls per-axis springs toward the center (x and y strengths differ)
    collision  separates overlapping circles, lighter nodes moving more

All pairwise forces are evaluated exactly (O(n^2)).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from logit_bubbles.exceptions import SolverError
from logit_bubbles.layout.base import ForceSettings, RelaxationSolver
from logit_bubbles.layout.registry import SolverRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

# Squared distances below this are clamped in the charge force.
_MIN_CHARGE_DISTANCE_SQ = 1.0


@SolverRegistry.register("force")
class ForceSimulation(RelaxationSolver):
    """Many-body + centering + collision simulation.

    Coincident nodes are separated with a tiny deterministic jiggle drawn
    from a seeded generator, so identical inputs give identical layouts.
    """

    def __init__(self, settings: ForceSettings | None = None, seed: int = 0) -> None:
        """Initialize an empty simulation.

        Args:
            settings: Force configuration. Defaults to forces centered on
                the origin; the layout engine reconfigures per canvas.
            seed: Seed for the coincident-node jiggle.
        """
        self._settings = settings or ForceSettings(center_x=0.0, center_y=0.0)
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        self._x = np.zeros(0, dtype=np.float64)
        self._y = np.zeros(0, dtype=np.float64)
        self._vx = np.zeros(0, dtype=np.float64)
        self._vy = np.zeros(0, dtype=np.float64)
        self._radii = np.zeros(0, dtype=np.float64)
        self._alpha = 1.0
        self._callback: Callable[[RelaxationSolver], None] | None = None

    # --- RelaxationSolver interface ---

    def configure(self, settings: ForceSettings) -> None:
        self._settings = settings

    def set_nodes(self, xs: np.ndarray, ys: np.ndarray, collision_radii: np.ndarray) -> None:
        xs = np.array(xs, dtype=np.float64)
        ys = np.array(ys, dtype=np.float64)
        radii = np.array(collision_radii, dtype=np.float64)
        if not (xs.shape == ys.shape == radii.shape) or xs.ndim != 1:
            raise SolverError(
                f"Node arrays must be 1-D and equal length, got shapes "
                f"{xs.shape}, {ys.shape}, {radii.shape}"
            )
        self._x = xs
        self._y = ys
        self._radii = radii
        self._vx = np.zeros_like(xs)
        self._vy = np.zeros_like(ys)
        # Same node set, same jiggle sequence.
        self._rng = np.random.default_rng(self._seed)

    def set_positions(self, xs: np.ndarray, ys: np.ndarray) -> None:
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if xs.shape != self._x.shape or ys.shape != self._y.shape:
            raise SolverError(
                f"Expected {self.node_count} positions, got shapes {xs.shape}, {ys.shape}"
            )
        self._x[:] = xs
        self._y[:] = ys

    def positions(self) -> tuple[np.ndarray, np.ndarray]:
        return self._x.copy(), self._y.copy()

    def restart(self, alpha: float) -> None:
        self._alpha = float(alpha)

    def step(self, n: int) -> int:
        if n < 0:
            raise SolverError(f"Step count must be >= 0, got {n}")
        for _ in range(n):
            self._advance()
        return n

    def tick(self) -> bool:
        self._advance()
        if self._callback is not None:
            self._callback(self)
        return self.is_active

    def on_tick(self, callback: Callable[[RelaxationSolver], None] | None) -> None:
        self._callback = callback

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def alpha_min(self) -> float:
        return self._settings.alpha_min

    @property
    def node_count(self) -> int:
        return int(self._x.size)

    @property
    def settings(self) -> ForceSettings:
        """The active force configuration."""
        return self._settings

    # --- Integration ---

    def _advance(self) -> None:
        s = self._settings
        self._alpha += (s.alpha_target - self._alpha) * s.alpha_decay
        if self._x.size == 0:
            return

        alpha = self._alpha
        self._apply_charge(alpha)
        self._apply_center()
        self._apply_axis_pull(alpha)
        self._apply_collision()

        keep = 1.0 - s.velocity_decay
        self._vx *= keep
        self._vy *= keep
        self._x += self._vx
        self._y += self._vy

    def _apply_charge(self, alpha: float) -> None:
        """Inverse-distance repulsion between every pair of nodes."""
        strength = self._settings.charge_strength
        if self._x.size < 2 or strength == 0.0:
            return
        # dx[i, j] points from node i to node j.
        dx = self._x[np.newaxis, :] - self._x[:, np.newaxis]
        dy = self._y[np.newaxis, :] - self._y[:, np.newaxis]
        dist_sq = np.maximum(dx * dx + dy * dy, _MIN_CHARGE_DISTANCE_SQ)
        w = -strength * alpha / dist_sq
        np.fill_diagonal(w, 0.0)
        self._vx += np.sum(dx * w, axis=1)
        self._vy += np.sum(dy * w, axis=1)

    def _apply_center(self) -> None:
        """Shift all nodes so the centroid lands on the canvas center."""
        s = self._settings
        self._x -= np.mean(self._x) - s.center_x
        self._y -= np.mean(self._y) - s.center_y

    def _apply_axis_pull(self, alpha: float) -> None:
        s = self._settings
        self._vx += (s.center_x - self._x) * s.x_strength * alpha
        self._vy += (s.center_y - self._y) * s.y_strength * alpha

    def _apply_collision(self) -> None:
        """Push apart circles that will overlap after this step's velocities."""
        strength = self._settings.collision_strength
        n = self._x.size
        if n < 2 or strength == 0.0:
            return

        px = self._x + self._vx
        py = self._y + self._vy
        # dx[i, j] points from node j to node i.
        dx = px[:, np.newaxis] - px[np.newaxis, :]
        dy = py[:, np.newaxis] - py[np.newaxis, :]
        reach = self._radii[:, np.newaxis] + self._radii[np.newaxis, :]
        dist_sq = dx * dx + dy * dy

        off_diagonal = ~np.eye(n, dtype=bool)
        overlapping = (dist_sq < reach * reach) & off_diagonal
        if not np.any(overlapping):
            return

        coincident = overlapping & (dist_sq == 0.0)
        if np.any(coincident):
            dx = np.where(coincident, self._jiggle(n), dx)
            dist_sq = dx * dx + dy * dy

        dist = np.where(overlapping, np.sqrt(dist_sq), 1.0)
        factor = np.where(overlapping, (reach - dist) / dist * strength, 0.0)

        # Node i moves by the share r_j^2 / (r_i^2 + r_j^2) of the overlap.
        area = self._radii * self._radii
        total = area[:, np.newaxis] + area[np.newaxis, :]
        share = np.divide(
            np.broadcast_to(area[np.newaxis, :], total.shape),
            total,
            out=np.full_like(total, 0.5),
            where=total > 0,
        )
        self._vx += np.sum(dx * factor * share, axis=1)
        self._vy += np.sum(dy * factor * share, axis=1)

    def _jiggle(self, n: int) -> np.ndarray:
        """Antisymmetric matrix of tiny non-zero offsets."""
        upper = np.triu(self._rng.uniform(1e-7, 1e-6, size=(n, n)), k=1)
        result: np.ndarray = upper - upper.T
        return result
