"""Weighted overall score."""

from __future__ import annotations

import math
from typing import Mapping

from siteaudit.audit.models import Category

WEIGHTS: Mapping[Category, float] = {
    Category.PERFORMANCE: 0.30,
    Category.SEO: 0.30,
    Category.ACCESSIBILITY: 0.20,
    Category.CRAWLABILITY: 0.20,
}


def _round_half_up(value: float) -> int:
    # Weight sums such as 0.3 + 0.3 + 0.2 are not exact in binary floating
    # point; trim the noise before rounding so x.5 always rounds up.
    return int(math.floor(round(value, 9) + 0.5))


def aggregate(
    scores: Mapping[Category, int | None],
    weights: Mapping[Category, float] = WEIGHTS,
) -> int:
    """Combine category scores into one integer in ``[0, 100]``.

    Categories whose score is ``None`` (extraction failed) are left out of
    both the weighted sum and the total weight, so the remaining weights are
    renormalised rather than the failure counting as a zero.
    """
    numerator = 0.0
    denominator = 0.0
    for category, weight in weights.items():
        score = scores.get(category)
        if score is None:
            continue
        numerator += score * weight
        denominator += weight
    if denominator <= 0:
        return 0
    return _round_half_up(numerator / denominator)
