"""Tests for Item and ScoreSet."""

from __future__ import annotations

import math

import pytest

from logit_bubbles.exceptions import ScoreSetError
from logit_bubbles.scores import Item, ScoreSet


class TestScoreSetConstruction:
    def test_from_pairs_preserves_order(self) -> None:
        scores = ScoreSet.from_pairs([("x", 1.0), ("y", 3.0), ("z", 2.0)])
        assert scores.labels == ("x", "y", "z")
        assert list(scores.raw_scores) == [1.0, 3.0, 2.0]

    def test_from_records_word_logit(self) -> None:
        scores = ScoreSet.from_records([{"word": "hi", "logit": 1.5}])
        assert scores[0] == Item("hi", 1.5)

    def test_from_records_label_raw_score(self) -> None:
        scores = ScoreSet.from_records([{"label": "hi", "raw_score": "2"}])
        assert scores[0] == Item("hi", 2.0)

    def test_from_records_missing_keys(self) -> None:
        with pytest.raises(ScoreSetError, match="position 1"):
            ScoreSet.from_records([{"word": "ok", "logit": 1.0}, {"text": "bad"}])

    def test_empty_set_allowed(self) -> None:
        scores = ScoreSet([])
        assert len(scores) == 0
        assert scores.raw_scores.shape == (0,)

    def test_duplicate_label_rejected(self) -> None:
        with pytest.raises(ScoreSetError, match="Duplicate label 'a'"):
            ScoreSet.from_pairs([("a", 1.0), ("b", 2.0), ("a", 3.0)])

    def test_empty_label_rejected(self) -> None:
        with pytest.raises(ScoreSetError, match="empty label"):
            ScoreSet.from_pairs([("", 1.0)])

    @pytest.mark.parametrize("bad", [math.inf, -math.inf, math.nan])
    def test_non_finite_score_rejected(self, bad: float) -> None:
        with pytest.raises(ScoreSetError, match="non-finite"):
            ScoreSet.from_pairs([("a", bad)])


class TestScoreSetAccess:
    def test_lookup(self, abc_scores: ScoreSet) -> None:
        assert "c" in abc_scores
        assert "d" not in abc_scores
        assert len(abc_scores) == 3

    def test_iteration_yields_items(self, abc_scores: ScoreSet) -> None:
        assert [item.label for item in abc_scores] == ["a", "b", "c"]

    def test_raw_scores_read_only(self, abc_scores: ScoreSet) -> None:
        with pytest.raises(ValueError):
            abc_scores.raw_scores[0] = 10.0

    def test_item_is_frozen(self) -> None:
        item = Item("a", 1.0)
        with pytest.raises(AttributeError):
            item.raw_score = 2.0  # type: ignore[misc]
