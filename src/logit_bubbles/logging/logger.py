"""Per-cycle diagnostics for the bubble chart.

Every recompute cycle produces one :class:`CycleRecord`. Records go to the
``"logit_bubbles"`` logger at the configured verbosity and, in diagnostic
mode, are kept in memory for later aggregation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from logit_bubbles.config import BubbleChartConfig
    from logit_bubbles.logging.types import CycleRecord

logger = logging.getLogger("logit_bubbles")

_SUMMARY_FORMAT = (
    "k=%d p=%.3f temp=%.3f entropy=%.3f visible=%d/%d enter=%d exit=%d "
    "mass=%.4f steps=%d layout=%.2fms total=%.2fms"
)


def _summary_args(record: CycleRecord) -> tuple[Any, ...]:
    return (
        record.top_k,
        record.top_p,
        record.temperature_used,
        record.shannon_entropy,
        record.num_visible,
        record.num_candidates,
        record.num_entering,
        record.num_exiting,
        record.realized_cumulative_mass,
        record.relaxation_steps,
        record.layout_ms,
        record.total_ms,
    )


class CycleLogger:
    """Writes cycle records to the log and optionally keeps them.

    ``log_level`` is one of ``"none"``, ``"summary"`` (one line per cycle)
    or ``"full"`` (the record as JSON). ``diagnostic_mode`` is independent
    of the level.
    """

    def __init__(self, config: BubbleChartConfig) -> None:
        self._log_level = config.log_level
        self._keep = config.diagnostic_mode
        self._records: list[CycleRecord] = []

    def log_cycle(self, record: CycleRecord) -> None:
        """Store *record* (in diagnostic mode) and emit it at the configured level."""
        if self._keep:
            self._records.append(record)
        if self._log_level == "summary":
            logger.info(_SUMMARY_FORMAT, *_summary_args(record))
        elif self._log_level == "full":
            logger.info("cycle_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[CycleRecord]:
        """Records stored so far; always empty outside diagnostic mode."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Aggregate the stored records.

        Returns:
            Visible counts, realized mass, enter/exit totals and timings
            over all stored cycles, or an empty dict when nothing is stored.
        """
        if not self._records:
            return {}

        visible = np.array([r.num_visible for r in self._records])
        masses = np.array([r.realized_cumulative_mass for r in self._records])
        layout_ms = np.array([r.layout_ms for r in self._records])
        total_ms = np.array([r.total_ms for r in self._records])

        return {
            "total_cycles": len(self._records),
            "mean_visible": float(visible.mean()),
            "max_visible": int(visible.max()),
            "mean_mass": float(masses.mean()),
            "min_mass": float(masses.min()),
            "total_entering": sum(r.num_entering for r in self._records),
            "total_exiting": sum(r.num_exiting for r in self._records),
            "mean_layout_ms": float(layout_ms.mean()),
            "mean_total_ms": float(total_ms.mean()),
            "max_total_ms": float(total_ms.max()),
        }
