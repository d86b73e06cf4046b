"""Bubble chart controller: the integration layer for logit-bubbles.

Orchestrates one full cycle per control change:
    temperature -> softmax -> top-k/top-p -> layout -> render.

Rapid control changes are debounced so only the last value in a burst is
computed. After a cycle, the solver may keep ticking on the event loop for
residual settling; a new cycle stops those ticks and replaces the node set
synchronously before control returns to the loop.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from typing import TYPE_CHECKING

from logit_bubbles.config import BubbleChartConfig, resolve_config
from logit_bubbles.distribution.softmax import (
    clamp_temperature,
    compute_distribution,
    compute_shannon_entropy,
)
from logit_bubbles.layout.engine import LayoutEngine
from logit_bubbles.layout.types import LayoutState
from logit_bubbles.logging.logger import CycleLogger
from logit_bubbles.logging.types import CycleRecord
from logit_bubbles.presentation import Frame, reconcile
from logit_bubbles.scheduling import Debouncer
from logit_bubbles.truncation.truncator import Truncator

if TYPE_CHECKING:
    from logit_bubbles.layout.base import RelaxationSolver
    from logit_bubbles.layout.types import PositionedItem
    from logit_bubbles.presentation import Presenter
    from logit_bubbles.scores import ScoreSet

logger = logging.getLogger("logit_bubbles")


def _config_hash(config: BubbleChartConfig) -> str:
    """Compute a short hash of the config for logging.

    Returns:
        First 16 hex characters of the SHA-256 digest of the config dump.
    """
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


class BubbleChart:
    """Interactive top-k / top-p / temperature bubble chart.

    Holds the static score set, the layout state carried between cycles and
    the last frame handed to the presenter. All methods run on one thread;
    :meth:`schedule_update` and :meth:`start_settling` use an asyncio loop.
    """

    def __init__(
        self,
        score_set: ScoreSet,
        config: BubbleChartConfig | None = None,
        presenter: Presenter | None = None,
        solver: RelaxationSolver | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the chart and all subsystems.

        Args:
            score_set: Static items to visualize.
            config: Configuration. Loaded from the environment when omitted.
            presenter: Rendering surface; frames are only returned when None.
            solver: Relaxation solver. Built from ``config.solver_type``
                when omitted.
            loop: Event loop for debounced updates and residual ticks.
                Defaults to the running loop at call time.
        """
        self._score_set = score_set
        self._config = config if config is not None else BubbleChartConfig()
        self._presenter = presenter
        self._loop = loop

        self._truncator = Truncator(self._config.top_p_epsilon)
        self._layout_engine = LayoutEngine(self._config, solver)
        self._logger = CycleLogger(self._config)
        self._debouncer = Debouncer(self._config.debounce_ms / 1000.0, loop)
        self._config_hash_str = _config_hash(self._config)

        self._state = LayoutState.empty()
        self._frame: Frame | None = None
        self._tick_handle: asyncio.TimerHandle | None = None

        logger.info(
            "BubbleChart initialized: items=%d canvas=%gx%g solver=%s",
            len(score_set),
            self._config.canvas_width,
            self._config.canvas_height,
            self._config.solver_type,
        )

    @property
    def config(self) -> BubbleChartConfig:
        """The active configuration."""
        return self._config

    @property
    def score_set(self) -> ScoreSet:
        """The static score set."""
        return self._score_set

    @property
    def layout_state(self) -> LayoutState:
        """Positions of the items visible in the most recent cycle."""
        return self._state

    @property
    def last_frame(self) -> Frame | None:
        """The most recent frame, or None before the first cycle."""
        return self._frame

    @property
    def cycle_logger(self) -> CycleLogger:
        """The diagnostic logger for this chart."""
        return self._logger

    @property
    def layout_engine(self) -> LayoutEngine:
        """The layout engine (and through it, the solver)."""
        return self._layout_engine

    @property
    def update_pending(self) -> bool:
        """True while a debounced update is waiting to run."""
        return self._debouncer.pending

    @property
    def settling(self) -> bool:
        """True while residual settling ticks are scheduled."""
        return self._tick_handle is not None

    def update(
        self,
        top_k: int | None = None,
        top_p: float | None = None,
        temperature: float | None = None,
    ) -> Frame:
        """Run one full cycle synchronously and render it.

        Omitted controls fall back to the config's start-up values.

        Args:
            top_k: Maximum number of visible items.
            top_p: Cumulative-mass threshold.
            temperature: Softmax temperature (floor-clamped).

        Returns:
            The frame handed to the presenter.
        """
        config = self._config
        top_k = config.default_top_k if top_k is None else int(top_k)
        top_p = config.default_top_p if top_p is None else float(top_p)
        temperature = config.default_temperature if temperature is None else float(temperature)

        self.stop_settling()
        t_start_ns = time.perf_counter_ns()

        # --- 1. Distribution ---
        effective_temperature = clamp_temperature(temperature, config.temperature_floor)
        scored = compute_distribution(self._score_set, temperature, config.temperature_floor)

        # --- 2. Truncation ---
        truncation = self._truncator.truncate(scored, top_k, top_p)
        t_layout_ns = time.perf_counter_ns()

        # --- 3. Layout ---
        result = self._layout_engine.layout(
            truncation.visible,
            self._state,
            config.canvas_width,
            config.canvas_height,
            config.radius_range,
        )
        t_layout_end_ns = time.perf_counter_ns()

        # --- 4. Reconcile & render ---
        previous_labels = self._frame.labels if self._frame is not None else ()
        entering, updating, exiting = reconcile(previous_labels, result.positioned)
        frame = Frame(
            items=result.positioned,
            entering=entering,
            updating=updating,
            exiting=exiting,
            realized_cumulative_mass=truncation.realized_cumulative_mass,
            top_k=top_k,
            top_p=top_p,
            temperature=temperature,
            effective_temperature=effective_temperature,
        )
        self._state = result.state
        self._frame = frame
        if self._presenter is not None:
            self._presenter.render(frame)

        # --- 5. Log cycle record ---
        t_end_ns = time.perf_counter_ns()
        self._logger.log_cycle(
            CycleRecord(
                timestamp_ns=t_start_ns,
                distribution_ms=(t_layout_ns - t_start_ns) / 1_000_000.0,
                layout_ms=(t_layout_end_ns - t_layout_ns) / 1_000_000.0,
                total_ms=(t_end_ns - t_start_ns) / 1_000_000.0,
                top_k=top_k,
                top_p=top_p,
                temperature_requested=temperature,
                temperature_used=effective_temperature,
                shannon_entropy=compute_shannon_entropy([s.probability for s in scored]),
                num_candidates=len(scored),
                num_visible=len(result.positioned),
                num_entering=len(entering),
                num_exiting=len(exiting),
                realized_cumulative_mass=truncation.realized_cumulative_mass,
                relaxation_steps=result.steps_run,
                solver_alpha=self._layout_engine.solver.alpha,
                config_hash=self._config_hash_str,
            )
        )
        return frame

    def schedule_update(self, top_k: int, top_p: float, temperature: float) -> None:
        """Debounced :meth:`update`: replaces any update not yet started.

        The scheduled cycle runs on the loop and resumes residual settling
        once its synchronous steps are done.
        """
        self._debouncer.submit(self._run_scheduled, top_k, top_p, temperature)

    def cancel_scheduled_update(self) -> bool:
        """Drop a pending debounced update.

        Returns:
            True if an update was pending.
        """
        return self._debouncer.cancel()

    def tick(self) -> tuple[PositionedItem, ...] | None:
        """Run one residual settling tick and forward the moves.

        Returns:
            Moved items, or None once the solver has cooled down.
        """
        moved = self._layout_engine.tick()
        if moved is None:
            return None
        self._state = LayoutState.from_items(moved)
        if self._presenter is not None:
            self._presenter.move(moved)
        return moved

    def start_settling(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Keep ticking the solver on *loop* until it cools down.

        Args:
            loop: Event loop to tick on. Defaults to the chart's loop, then
                the running loop.

        Raises:
            RuntimeError: If no loop is available.
        """
        self.stop_settling()
        loop = loop or self._loop or asyncio.get_running_loop()
        self._schedule_tick(loop)

    def stop_settling(self) -> None:
        """Cancel the next residual settling tick, if scheduled."""
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def resize(self, canvas_width: float, canvas_height: float) -> None:
        """Change the canvas size used from the next cycle on.

        Raises:
            ConfigValidationError: If the size is not positive.
        """
        self._config = resolve_config(
            self._config,
            {"lb_canvas_width": canvas_width, "lb_canvas_height": canvas_height},
        )
        self._layout_engine.reconfigure(self._config)
        self._config_hash_str = _config_hash(self._config)
        logger.info("canvas resized to %gx%g", canvas_width, canvas_height)

    def _run_scheduled(self, top_k: int, top_p: float, temperature: float) -> None:
        self.update(top_k, top_p, temperature)
        self.start_settling()

    def _schedule_tick(self, loop: asyncio.AbstractEventLoop) -> None:
        interval = self._config.tick_interval_ms / 1000.0
        self._tick_handle = loop.call_later(interval, self._on_tick, loop)

    def _on_tick(self, loop: asyncio.AbstractEventLoop) -> None:
        self._tick_handle = None
        if self.tick() is not None:
            self._schedule_tick(loop)
