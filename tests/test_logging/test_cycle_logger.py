"""Tests for CycleLogger and CycleRecord."""

from __future__ import annotations

import json
import logging

import pytest

from logit_bubbles.config import BubbleChartConfig
from logit_bubbles.logging.logger import CycleLogger
from logit_bubbles.logging.types import CycleRecord


def _make_record(**overrides: object) -> CycleRecord:
    """Create a CycleRecord with sensible defaults, overridable."""
    defaults: dict[str, object] = {
        "timestamp_ns": 1000000000,
        "distribution_ms": 0.2,
        "layout_ms": 3.0,
        "total_ms": 3.5,
        "top_k": 50,
        "top_p": 0.9,
        "temperature_requested": 0.5,
        "temperature_used": 0.5,
        "shannon_entropy": 1.2,
        "num_candidates": 100,
        "num_visible": 12,
        "num_entering": 2,
        "num_exiting": 1,
        "realized_cumulative_mass": 0.9031,
        "relaxation_steps": 80,
        "solver_alpha": 0.0087,
        "config_hash": "abcdef1234567890",
    }
    defaults.update(overrides)
    return CycleRecord(**defaults)  # type: ignore[arg-type]


def _config(**kwargs: object) -> BubbleChartConfig:
    return BubbleChartConfig(_env_file=None, **kwargs)  # type: ignore[arg-type]


class TestCycleRecord:
    def test_frozen(self) -> None:
        record = _make_record()
        with pytest.raises(AttributeError):
            record.num_visible = 99  # type: ignore[misc]

    def test_slots(self) -> None:
        assert hasattr(_make_record(), "__slots__")


class TestCycleLogger:
    def test_log_level_none_no_output(self, caplog: pytest.LogCaptureFixture) -> None:
        log = CycleLogger(_config(log_level="none"))
        with caplog.at_level(logging.DEBUG, logger="logit_bubbles"):
            log.log_cycle(_make_record())
        assert len(caplog.records) == 0

    def test_log_level_summary_output(self, caplog: pytest.LogCaptureFixture) -> None:
        log = CycleLogger(_config(log_level="summary"))
        with caplog.at_level(logging.DEBUG, logger="logit_bubbles"):
            log.log_cycle(_make_record())
        assert len(caplog.records) == 1
        msg = caplog.records[0].message
        assert "k=50" in msg
        assert "visible=12/100" in msg
        assert "mass=0.9031" in msg

    def test_log_level_full_json(self, caplog: pytest.LogCaptureFixture) -> None:
        log = CycleLogger(_config(log_level="full"))
        with caplog.at_level(logging.DEBUG, logger="logit_bubbles"):
            log.log_cycle(_make_record())
        msg = caplog.records[0].message
        assert msg.startswith("cycle_record: ")
        payload = json.loads(msg[len("cycle_record: ") :])
        assert payload["num_visible"] == 12
        assert payload["config_hash"] == "abcdef1234567890"

    def test_diagnostic_mode_stores_records(self) -> None:
        log = CycleLogger(_config(log_level="none", diagnostic_mode=True))
        log.log_cycle(_make_record(num_visible=3))
        log.log_cycle(_make_record(num_visible=5))
        data = log.get_diagnostic_data()
        assert [r.num_visible for r in data] == [3, 5]

    def test_no_storage_without_diagnostic_mode(self) -> None:
        log = CycleLogger(_config(log_level="none"))
        log.log_cycle(_make_record())
        assert log.get_diagnostic_data() == []
        assert log.get_summary_stats() == {}

    def test_summary_stats(self) -> None:
        log = CycleLogger(_config(log_level="none", diagnostic_mode=True))
        log.log_cycle(_make_record(num_visible=2, realized_cumulative_mass=0.5, num_entering=2))
        log.log_cycle(_make_record(num_visible=4, realized_cumulative_mass=0.9, num_exiting=0))
        stats = log.get_summary_stats()
        assert stats["total_cycles"] == 2
        assert stats["mean_visible"] == 3.0
        assert stats["max_visible"] == 4
        assert stats["min_mass"] == 0.5
        assert stats["mean_mass"] == pytest.approx(0.7)
        assert stats["total_entering"] == 4
        assert stats["total_exiting"] == 1
