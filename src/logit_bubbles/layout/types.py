"""Data types for the layout subsystem."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PositionedItem:
    """A visible item placed on the canvas.

    Attributes:
        label: Item label (the key for enter/update/exit reconciliation).
        raw_score: Unnormalized score.
        index: Position in the score set.
        probability: Softmax probability.
        rank: 0-based position in descending-probability order.
        x: Center x in canvas pixels.
        y: Center y in canvas pixels.
        radius: Bubble radius, a sqrt-scale function of probability.
        color_value: Color intensity in [0, 1], a power-scale function of
            probability.
        color: Fill color as ``#rrggbb``.
    """

    label: str
    raw_score: float
    index: int
    probability: float
    rank: int
    x: float
    y: float
    radius: float
    color_value: float
    color: str


class LayoutState(Mapping[str, tuple[float, float]]):
    """Immutable ``label -> (x, y)`` snapshot of the most recent cycle.

    Holds exactly the items visible in that cycle. A new snapshot replaces
    the previous one wholesale after every cycle.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: Mapping[str, tuple[float, float]] | None = None) -> None:
        self._positions: dict[str, tuple[float, float]] = {
            label: (float(x), float(y)) for label, (x, y) in (positions or {}).items()
        }

    @classmethod
    def empty(cls) -> LayoutState:
        """Return a snapshot with no items (the state before the first cycle)."""
        return cls()

    @classmethod
    def from_items(cls, items: Iterable[PositionedItem]) -> LayoutState:
        """Build a snapshot from positioned items."""
        return cls({item.label: (item.x, item.y) for item in items})

    def __getitem__(self, label: str) -> tuple[float, float]:
        return self._positions[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"LayoutState({len(self._positions)} items)"


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """Outcome of one layout cycle.

    Attributes:
        positioned: Items with settled, in-bounds positions, in rank order.
        state: Snapshot to seed the next cycle.
        steps_run: Synchronous relaxation steps executed.
    """

    positioned: tuple[PositionedItem, ...]
    state: LayoutState
    steps_run: int
