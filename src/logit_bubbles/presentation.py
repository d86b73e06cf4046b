"""Boundary to the rendering surface.

The renderer is external. It receives one :class:`Frame` per full cycle
and a tuple of moved items per residual settling tick. Display strings
and font sizes are derived here so every renderer formats them alike.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logit_bubbles.layout.types import PositionedItem


def format_probability(probability: float) -> str:
    """Percentage with two decimals, e.g. ``0.659 -> '65.90%'``."""
    return f"{probability * 100:.2f}%"


def format_mass(mass: float) -> str:
    """Realized cumulative mass with four decimals, e.g. ``'0.9006'``."""
    return f"{mass:.4f}"


def format_temperature(temperature: float) -> str:
    """Temperature readout with two decimals."""
    return f"{temperature:.2f}"


def label_font_size(radius: float) -> float:
    """Font size in pixels for the item label inside a bubble."""
    return max(8.0, radius / 3.0)


def probability_font_size(radius: float) -> float:
    """Font size in pixels for the percentage inside a bubble."""
    return max(6.0, radius / 4.0)


def reconcile(
    previous_labels: Iterable[str], items: Iterable[PositionedItem]
) -> tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]]:
    """Split a new frame's labels against the previous frame's.

    Args:
        previous_labels: Labels displayed before this cycle.
        items: Items of this cycle, in rank order.

    Returns:
        ``(entering, updating, exiting)``. Entering and updating follow
        rank order; exiting follows the previous order.
    """
    previous = list(previous_labels)
    previous_set = set(previous)
    current = [item.label for item in items]
    current_set = set(current)
    entering = tuple(label for label in current if label not in previous_set)
    updating = tuple(label for label in current if label in previous_set)
    exiting = tuple(label for label in previous if label not in current_set)
    return entering, updating, exiting


@dataclass(frozen=True, slots=True)
class Frame:
    """Everything a renderer needs for one full cycle.

    Attributes:
        items: Positioned items keyed by label, in rank order.
        entering: Labels to create.
        updating: Labels to resize, recolor and move.
        exiting: Labels to remove.
        realized_cumulative_mass: Mass represented by ``items``.
        top_k: Top-k used for this cycle.
        top_p: Top-p used for this cycle.
        temperature: Temperature requested for this cycle.
        effective_temperature: Temperature after the floor clamp.
    """

    items: tuple[PositionedItem, ...]
    entering: tuple[str, ...]
    updating: tuple[str, ...]
    exiting: tuple[str, ...]
    realized_cumulative_mass: float
    top_k: int
    top_p: float
    temperature: float
    effective_temperature: float

    @property
    def labels(self) -> tuple[str, ...]:
        """Labels in rank order."""
        return tuple(item.label for item in self.items)

    @property
    def mass_readout(self) -> str:
        """Realized cumulative mass formatted for display."""
        return format_mass(self.realized_cumulative_mass)

    @property
    def temperature_readout(self) -> str:
        """Requested temperature formatted for display."""
        return format_temperature(self.temperature)

    def probability_readouts(self) -> dict[str, str]:
        """Map each label to its formatted percentage."""
        return {item.label: format_probability(item.probability) for item in self.items}

    def font_sizes(self) -> dict[str, tuple[float, float]]:
        """Map each label to its ``(label, percentage)`` font sizes in pixels."""
        return {
            item.label: (label_font_size(item.radius), probability_font_size(item.radius))
            for item in self.items
        }


class Presenter(ABC):
    """Rendering surface driven by :class:`~logit_bubbles.chart.BubbleChart`."""

    @abstractmethod
    def render(self, frame: Frame) -> None:
        """Apply a full cycle: create, update and remove shapes."""

    @abstractmethod
    def move(self, items: tuple[PositionedItem, ...]) -> None:
        """Apply a residual settling tick: positions only."""
