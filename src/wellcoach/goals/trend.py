"""Least-squares weight trend.

Weigh-ins are fitted against their index (one index step per weigh-in,
assumed daily), so slope is kg per entry and slope x 7 is kg per week.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from wellcoach.profiles.models import WeightPoint


def fit_weight_trend(points: Sequence[WeightPoint]) -> tuple[float, float]:
    """Fit an ordinary least-squares line through weigh-ins.

    Args:
        points: Chronological weigh-ins (at least two)

    Returns:
        Tuple of (slope in kg per entry, intercept in kg)
    """
    if len(points) < 2:
        raise ValueError("At least two weigh-ins are needed to fit a trend")

    x = np.arange(len(points), dtype=float)
    y = np.array([point.weight for point in points], dtype=float)
    slope, intercept = np.polyfit(x, y, 1)
    return float(slope), float(intercept)


def weekly_rate(points: Sequence[WeightPoint]) -> float:
    """Return the fitted weight change in kg per week (negative = losing)."""
    slope, _ = fit_weight_trend(points)
    return slope * 7
