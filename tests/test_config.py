"""Tests for logit_bubbles.config.

Covers:
- Default values
- Environment variable loading (monkeypatch)
- Geometry validation
- resolve_config merge logic and error reporting
"""

from __future__ import annotations

import pytest

from logit_bubbles.config import BubbleChartConfig, resolve_config, validate_overrides
from logit_bubbles.exceptions import ConfigValidationError


def _config(**kwargs: object) -> BubbleChartConfig:
    return BubbleChartConfig(_env_file=None, **kwargs)  # type: ignore[arg-type]


class TestBubbleChartConfigDefaults:
    """Verify default values."""

    def test_scale_defaults(self) -> None:
        cfg = _config()
        assert cfg.min_radius == 40.0
        assert cfg.max_radius == 60.0
        assert cfg.radius_range == (40.0, 60.0)
        assert cfg.color_exponent == 0.4

    def test_numeric_defaults(self) -> None:
        cfg = _config()
        assert cfg.temperature_floor == 1e-6
        assert cfg.top_p_epsilon == 1e-9

    def test_initial_control_defaults(self) -> None:
        cfg = _config()
        assert cfg.default_top_k == 50
        assert cfg.default_top_p == 1.0
        assert cfg.default_temperature == 0.5

    def test_relaxation_defaults(self) -> None:
        cfg = _config()
        assert cfg.solver_type == "force"
        assert cfg.settle_steps == 80
        assert cfg.reheat_alpha == 0.1
        assert cfg.center_y_strength > cfg.center_x_strength
        assert cfg.collision_margin == 2.0

    def test_scheduling_and_logging_defaults(self) -> None:
        cfg = _config()
        assert cfg.debounce_ms == 5.0
        assert cfg.log_level == "summary"
        assert cfg.diagnostic_mode is False


class TestEnvironmentLoading:
    """Config fields can be set through LB_* environment variables."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LB_CANVAS_WIDTH", "1280")
        monkeypatch.setenv("LB_SETTLE_STEPS", "20")
        cfg = _config()
        assert cfg.canvas_width == 1280.0
        assert cfg.settle_steps == 20

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LB_CANVAS_WIDTH", "1280")
        cfg = _config(canvas_width=640.0)
        assert cfg.canvas_width == 640.0


class TestGeometryValidation:
    """Impossible geometry is rejected at construction."""

    def test_zero_width_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="positive size"):
            _config(canvas_width=0.0)

    def test_negative_height_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="positive size"):
            _config(canvas_height=-5.0)

    def test_inverted_radius_range_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="Radius range"):
            _config(min_radius=70.0, max_radius=60.0)

    def test_negative_settle_steps_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="settle_steps"):
            _config(settle_steps=-1)


class TestResolveConfig:
    """Tests for resolve_config merge logic."""

    def test_none_overrides_returns_defaults(self) -> None:
        defaults = _config()
        assert resolve_config(defaults, None) is defaults

    def test_empty_overrides_returns_defaults(self) -> None:
        defaults = _config()
        assert resolve_config(defaults, {}) is defaults

    def test_unprefixed_keys_ignored(self) -> None:
        defaults = _config()
        assert resolve_config(defaults, {"canvas_width": 10}) is defaults

    def test_override_fields(self) -> None:
        defaults = _config()
        result = resolve_config(defaults, {"lb_canvas_width": 1280, "lb_settle_steps": 10})
        assert result.canvas_width == 1280.0
        assert result.settle_steps == 10
        assert result.max_radius == defaults.max_radius

    def test_returns_new_instance(self) -> None:
        defaults = _config()
        result = resolve_config(defaults, {"lb_canvas_height": 720})
        assert result is not defaults
        assert defaults.canvas_height == 540.0

    def test_string_values_coerced(self) -> None:
        result = resolve_config(_config(), {"lb_settle_steps": "12"})
        assert result.settle_steps == 12

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ConfigValidationError, match="Unknown config field"):
            resolve_config(_config(), {"lb_no_such_field": 1})

    def test_bad_type_rejected(self) -> None:
        with pytest.raises(ConfigValidationError):
            resolve_config(_config(), {"lb_settle_steps": "many"})

    def test_bad_geometry_rejected(self) -> None:
        with pytest.raises(ConfigValidationError):
            resolve_config(_config(), {"lb_canvas_width": 0})


class TestValidateOverrides:
    def test_known_keys_pass(self) -> None:
        validate_overrides({"lb_canvas_width": 100, "other_plugin": 1})

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigValidationError):
            validate_overrides({"lb_bogus": 1})
