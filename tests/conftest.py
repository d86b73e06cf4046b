"""Shared pytest fixtures for logit-bubbles tests.

Provides reusable configuration objects, score sets and a recording
presenter used across multiple test modules.
"""

from __future__ import annotations

import numpy as np
import pytest

from logit_bubbles.config import BubbleChartConfig
from logit_bubbles.layout.types import PositionedItem
from logit_bubbles.presentation import Frame, Presenter
from logit_bubbles.scores import ScoreSet


class RecordingPresenter(Presenter):
    """Presenter that remembers everything it was asked to draw."""

    def __init__(self) -> None:
        self.frames: list[Frame] = []
        self.moves: list[tuple[PositionedItem, ...]] = []

    def render(self, frame: Frame) -> None:
        self.frames.append(frame)

    def move(self, items: tuple[PositionedItem, ...]) -> None:
        self.moves.append(items)


@pytest.fixture()
def config() -> BubbleChartConfig:
    """Default config without .env lookup and without log output."""
    return BubbleChartConfig(_env_file=None, log_level="none")  # type: ignore[call-arg]


@pytest.fixture()
def diagnostic_config() -> BubbleChartConfig:
    """Config with diagnostic mode and full logging enabled."""
    return BubbleChartConfig(
        _env_file=None,  # type: ignore[call-arg]
        log_level="full",
        diagnostic_mode=True,
    )


@pytest.fixture()
def abc_scores() -> ScoreSet:
    """The three-item example: a=2.0, b=1.0, c=0.1."""
    return ScoreSet.from_pairs([("a", 2.0), ("b", 1.0), ("c", 0.1)])


@pytest.fixture()
def word_scores() -> ScoreSet:
    """A small vocabulary in the {word, logit} record format."""
    return ScoreSet.from_records(
        [
            {"word": "the", "logit": 4.2},
            {"word": "a", "logit": 3.1},
            {"word": "cat", "logit": 2.5},
            {"word": "dog", "logit": 2.4},
            {"word": "tree", "logit": 1.0},
            {"word": "quantum", "logit": -0.5},
            {"word": "zebra", "logit": -1.7},
        ]
    )


@pytest.fixture()
def random_scores() -> ScoreSet:
    """Forty items with normally distributed raw scores (fixed seed)."""
    rng = np.random.default_rng(seed=12345)
    return ScoreSet.from_pairs(
        (f"tok{i}", float(score)) for i, score in enumerate(rng.standard_normal(40) * 2.0)
    )


@pytest.fixture()
def presenter() -> RecordingPresenter:
    """Fresh recording presenter."""
    return RecordingPresenter()
