"""The static score set: candidate tokens and their raw scores (logits).

Loaded once at start-up and never mutated. Every recompute cycle derives
fresh probabilities from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from logit_bubbles.exceptions import ScoreSetError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


@dataclass(frozen=True, slots=True)
class Item:
    """One candidate token.

    Attributes:
        label: Display text; identity of the item within a score set.
        raw_score: Unnormalized score (logit).
    """

    label: str
    raw_score: float


# Key pairs accepted by ScoreSet.from_records(), in lookup order.
_RECORD_KEYS: tuple[tuple[str, str], ...] = (
    ("label", "raw_score"),
    ("word", "logit"),
)


class ScoreSet:
    """Immutable, ordered collection of uniquely-labelled items.

    The order of items is significant: it is the tie-break order when two
    items end up with equal probability.
    """

    __slots__ = ("_index", "_items", "_raw_scores")

    def __init__(self, items: Iterable[Item]) -> None:
        """Build a score set, validating labels and scores.

        Args:
            items: Items in input order.

        Raises:
            ScoreSetError: On an empty or duplicate label, or a non-finite score.
        """
        self._items: tuple[Item, ...] = tuple(items)
        self._index: dict[str, int] = {}
        for i, item in enumerate(self._items):
            if not item.label:
                raise ScoreSetError(f"Item at position {i} has an empty label")
            if item.label in self._index:
                raise ScoreSetError(f"Duplicate label {item.label!r} at position {i}")
            if not math.isfinite(item.raw_score):
                raise ScoreSetError(
                    f"Item {item.label!r} has non-finite raw score {item.raw_score!r}"
                )
            self._index[item.label] = i

        scores = np.array([item.raw_score for item in self._items], dtype=np.float64)
        scores.setflags(write=False)
        self._raw_scores = scores

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, float]]) -> ScoreSet:
        """Build from ``(label, raw_score)`` pairs."""
        return cls(Item(str(label), float(score)) for label, score in pairs)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> ScoreSet:
        """Build from mappings with ``label``/``raw_score`` or ``word``/``logit`` keys.

        Args:
            records: Mappings, one per item.

        Returns:
            A new ScoreSet.

        Raises:
            ScoreSetError: If a record has neither key pair.
        """
        items: list[Item] = []
        for i, record in enumerate(records):
            for label_key, score_key in _RECORD_KEYS:
                if label_key in record and score_key in record:
                    items.append(Item(str(record[label_key]), float(record[score_key])))
                    break
            else:
                raise ScoreSetError(
                    f"Record at position {i} has no label/raw_score or word/logit keys"
                )
        return cls(items)

    @property
    def items(self) -> tuple[Item, ...]:
        """All items in input order."""
        return self._items

    @property
    def labels(self) -> tuple[str, ...]:
        """All labels in input order."""
        return tuple(item.label for item in self._items)

    @property
    def raw_scores(self) -> np.ndarray:
        """Read-only float64 array of raw scores in input order."""
        return self._raw_scores

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __getitem__(self, position: int) -> Item:
        return self._items[position]

    def __repr__(self) -> str:
        return f"ScoreSet({len(self._items)} items)"
