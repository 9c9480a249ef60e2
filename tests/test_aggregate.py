"""Tests for the weighted overall score."""

from __future__ import annotations

import itertools

from siteaudit.audit.aggregate import WEIGHTS, aggregate
from siteaudit.audit.models import Category

P, S, A, C = (
    Category.PERFORMANCE,
    Category.SEO,
    Category.ACCESSIBILITY,
    Category.CRAWLABILITY,
)


class TestAggregate:
    def test_default_weights(self) -> None:
        assert WEIGHTS == {P: 0.30, S: 0.30, A: 0.20, C: 0.20}

    def test_all_categories(self) -> None:
        # round(90*.3 + 80*.3 + 70*.2 + 60*.2) = round(77.0)
        assert aggregate({P: 90, S: 80, A: 70, C: 60}) == 77

    def test_failed_category_is_excluded_not_zeroed(self) -> None:
        # round((27 + 24 + 12) / 0.8) = round(78.75)
        assert aggregate({P: 90, S: 80, A: None, C: 60}) == 79

    def test_missing_key_behaves_like_failure(self) -> None:
        assert aggregate({P: 90, S: 80, C: 60}) == 79

    def test_single_category(self) -> None:
        assert aggregate({P: None, S: None, A: 42, C: None}) == 42

    def test_no_valid_scores(self) -> None:
        assert aggregate({P: None, S: None, A: None, C: None}) == 0
        assert aggregate({}) == 0

    def test_half_rounds_up(self) -> None:
        # (85*.3 + 86*.3) / .6 = 85.5
        assert aggregate({P: 85, S: 86}) == 86

    def test_custom_weights(self) -> None:
        assert aggregate({P: 100, S: 0}, weights={P: 1.0, S: 3.0}) == 25

    def test_stays_in_range(self) -> None:
        for combo in itertools.product((None, 0, 57, 100), repeat=4):
            scores = dict(zip((P, S, A, C), combo))
            assert 0 <= aggregate(scores) <= 100
