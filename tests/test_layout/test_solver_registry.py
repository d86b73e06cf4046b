"""Tests for the SolverRegistry."""

from __future__ import annotations

import pytest

from logit_bubbles.config import BubbleChartConfig
from logit_bubbles.layout.force import ForceSimulation
from logit_bubbles.layout.registry import SolverRegistry


class TestSolverRegistry:
    def test_force_registered(self) -> None:
        assert SolverRegistry.get("force") is ForceSimulation

    def test_unknown_solver_raises(self) -> None:
        with pytest.raises(KeyError, match="Unknown relaxation solver"):
            SolverRegistry.get("nonexistent_solver")

    def test_duplicate_registration_rejected(self) -> None:
        with pytest.raises(ValueError, match="already registered"):
            SolverRegistry.register("force")(ForceSimulation)

    def test_build_from_config(self, config: BubbleChartConfig) -> None:
        solver = SolverRegistry.build(config)
        assert isinstance(solver, ForceSimulation)
        assert solver.node_count == 0

    def test_build_unknown_from_config(self) -> None:
        config = BubbleChartConfig(_env_file=None, solver_type="spring")  # type: ignore[call-arg]
        with pytest.raises(KeyError):
            SolverRegistry.build(config)

    def test_list_registered(self) -> None:
        names = SolverRegistry.list_registered()
        assert "force" in names
        assert names == sorted(names)
