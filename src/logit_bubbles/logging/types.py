"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CycleRecord:
    """Immutable record of one recompute-and-layout cycle.

    Attributes:
        timestamp_ns: Monotonic start time of the cycle (nanoseconds).
        distribution_ms: Time spent in softmax and truncation (ms).
        layout_ms: Time spent sizing, placing and relaxing (ms).
        total_ms: Total cycle time including rendering (ms).
        top_k: Requested top-k.
        top_p: Requested top-p.
        temperature_requested: Temperature as supplied by the controls.
        temperature_used: Temperature after the floor clamp.
        shannon_entropy: Entropy of the full distribution (nats).
        num_candidates: Number of items in the score set.
        num_visible: Items surviving truncation.
        num_entering: Visible items absent from the previous cycle.
        num_exiting: Previous items no longer visible.
        realized_cumulative_mass: Mass represented by the visible items.
        relaxation_steps: Synchronous solver steps run.
        solver_alpha: Solver alpha after the synchronous steps.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    # Timing
    timestamp_ns: int
    distribution_ms: float
    layout_ms: float
    total_ms: float

    # Controls
    top_k: int
    top_p: float
    temperature_requested: float
    temperature_used: float

    # Distribution & truncation
    shannon_entropy: float
    num_candidates: int
    num_visible: int
    num_entering: int
    num_exiting: int
    realized_cumulative_mass: float

    # Layout
    relaxation_steps: int
    solver_alpha: float

    # Config snapshot
    config_hash: str
