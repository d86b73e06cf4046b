"""Configuration system for logit-bubbles.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (LB_*) -> .env file -> field defaults.

Runtime changes (e.g. a canvas resize) are applied via resolve_config()
which creates a new config instance without mutating the current one.
The three interactive controls (top-k, top-p, temperature) are not config:
they arrive per cycle. Only their start-up values live here.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logit_bubbles.exceptions import ConfigValidationError

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()

_OVERRIDE_PREFIX = "lb_"


class BubbleChartConfig(BaseSettings):
    """Configuration for logit-bubbles.

    Resolution order: init kwargs -> env vars (LB_*) -> .env file -> defaults.

    Fields are grouped by the stage of the pipeline they tune:
    - **Canvas & scales**: drawing surface size, radius range, color ramp.
    - **Numerics**: temperature floor and the top-p rounding tolerance.
    - **Relaxation**: solver choice and force parameters.
    - **Scheduling**: debounce delay and residual tick interval.
    - **Logging**: per-cycle verbosity and in-memory diagnostics.
    """

    model_config = SettingsConfigDict(
        env_prefix="LB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Canvas & scales ---

    canvas_width: float = Field(
        default=960.0,
        description="Drawing surface width in pixels",
    )
    canvas_height: float = Field(
        default=540.0,
        description="Drawing surface height in pixels",
    )
    min_radius: float = Field(
        default=40.0,
        description="Bubble radius at probability 0",
    )
    max_radius: float = Field(
        default=60.0,
        description="Bubble radius at probability 1",
    )
    color_start: str = Field(
        default="#3ca5f5",
        description="Fill color at probability 0 (hex)",
    )
    color_end: str = Field(
        default="#004c87",
        description="Fill color at probability 1 (hex)",
    )
    color_exponent: float = Field(
        default=0.4,
        description="Power applied to probability before color interpolation",
    )

    # --- Numerics ---

    temperature_floor: float = Field(
        default=1e-6,
        description="Temperatures below this are silently raised to it",
    )
    top_p_epsilon: float = Field(
        default=1e-9,
        description="Tolerance absorbing float rounding at the top-p boundary",
    )

    # --- Initial controls ---

    default_top_k: int = Field(
        default=50,
        description="Top-k used for the first cycle",
    )
    default_top_p: float = Field(
        default=1.0,
        description="Top-p used for the first cycle",
    )
    default_temperature: float = Field(
        default=0.5,
        description="Temperature used for the first cycle",
    )

    # --- Relaxation ---

    solver_type: str = Field(
        default="force",
        description="Registered relaxation solver name",
    )
    charge_strength: float = Field(
        default=10.0,
        description="Mutual repulsion between bubbles (positive repels)",
    )
    center_x_strength: float = Field(
        default=0.05,
        description="Horizontal pull toward the canvas center",
    )
    center_y_strength: float = Field(
        default=0.25,
        description="Vertical pull toward the canvas center",
    )
    collision_strength: float = Field(
        default=1.0,
        description="Non-overlap enforcement strength in [0, 1]",
    )
    collision_margin: float = Field(
        default=2.0,
        description="Gap added to each radius for collision",
    )
    velocity_decay: float = Field(
        default=0.2,
        description="Fraction of velocity lost per tick",
    )
    alpha_decay: float = Field(
        default=0.03,
        description="Cooling rate of the simulation per tick",
    )
    alpha_min: float = Field(
        default=0.001,
        description="Simulation stops ticking in the background below this alpha",
    )
    reheat_alpha: float = Field(
        default=0.1,
        description="Alpha the simulation is reheated to on each cycle",
    )
    settle_steps: int = Field(
        default=80,
        description="Synchronous relaxation steps run before a layout is returned",
    )

    # --- Scheduling ---

    debounce_ms: float = Field(
        default=5.0,
        description="Delay before a scheduled cycle runs; newer requests replace it",
    )
    tick_interval_ms: float = Field(
        default=1000.0 / 60.0,
        description="Interval between residual settling ticks",
    )

    # --- Logging ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all cycle records in memory for analysis",
    )

    @model_validator(mode="after")
    def _check_geometry(self) -> BubbleChartConfig:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ConfigValidationError(
                f"Canvas must have positive size, got "
                f"{self.canvas_width}x{self.canvas_height}"
            )
        if self.min_radius < 0 or self.min_radius > self.max_radius:
            raise ConfigValidationError(
                f"Radius range must satisfy 0 <= min <= max, got "
                f"[{self.min_radius}, {self.max_radius}]"
            )
        if self.settle_steps < 0:
            raise ConfigValidationError(f"settle_steps must be >= 0, got {self.settle_steps}")
        return self

    @property
    def radius_range(self) -> tuple[float, float]:
        """``(min_radius, max_radius)`` as a tuple."""
        return (self.min_radius, self.max_radius)


# Populate _ALL_FIELDS now that the class is defined.
_ALL_FIELDS = frozenset(BubbleChartConfig.model_fields.keys())


def _strip_prefix(key: str) -> str:
    """Strip the 'lb_' prefix from an override key.

    Args:
        key: The key with or without 'lb_' prefix.

    Returns:
        The key with 'lb_' prefix removed if present.
    """
    if key.startswith(_OVERRIDE_PREFIX):
        return key[len(_OVERRIDE_PREFIX) :]
    return key


def validate_overrides(overrides: dict[str, Any]) -> None:
    """Validate all lb_* keys in *overrides* without creating a config.

    Args:
        overrides: Dictionary of overrides, potentially with lb_ prefix.

    Raises:
        ConfigValidationError: If any lb_* key names an unknown field.
    """
    for key in overrides:
        if not key.startswith(_OVERRIDE_PREFIX):
            continue
        field_name = _strip_prefix(key)
        if field_name not in _ALL_FIELDS:
            raise ConfigValidationError(
                f"Unknown config field: '{key}' (no field '{field_name}' exists)"
            )


def resolve_config(
    defaults: BubbleChartConfig,
    overrides: dict[str, Any] | None,
) -> BubbleChartConfig:
    """Create a new config instance merging *defaults* with *overrides*.

    Override keys use the 'lb_' prefix (e.g., ``'lb_canvas_width': 1280``).
    Keys without the prefix are silently ignored.

    Args:
        defaults: The base configuration.
        overrides: Field overrides.

    Returns:
        A new BubbleChartConfig with overrides applied, or *defaults* itself
        when there is nothing to apply.

    Raises:
        ConfigValidationError: If a key is unknown or a value fails validation.
    """
    if not overrides:
        return defaults

    validate_overrides(overrides)

    updates: dict[str, Any] = {
        _strip_prefix(key): value
        for key, value in overrides.items()
        if key.startswith(_OVERRIDE_PREFIX)
    }
    if not updates:
        return defaults

    # model_copy(update=...) skips validation; model_validate coerces and checks.
    merged = defaults.model_dump()
    merged.update(updates)
    try:
        return BubbleChartConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
