"""
Rolling price history used for the in-app chart.

The buffer keeps the most recent samples of one data source, oldest first.
Once it is full, every append pushes the oldest sample out of the front.
"""

import math
from collections import deque
from typing import Iterable, List, Optional, Sequence

from swampdoge_sync.constants import (
    CHART_RANGE_FLOOR,
    CHART_WINDOW,
    HISTORY_CAPACITY,
    MIN_CHART_POINTS,
)


def _is_finite_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def normalize_series(values: Sequence[float]) -> List[float]:
    """
    Scale values into [0, 1] via (v - min) / (max - min).

    The denominator is floored at CHART_RANGE_FLOOR so that a flat series maps
    to zeros instead of dividing by zero.

    Args:
        values: Finite samples

    Returns:
        Normalized samples in the same order
    """
    if not values:
        return []
    low = min(values)
    high = max(values)
    span = max(high - low, CHART_RANGE_FLOOR)
    return [(v - low) / span for v in values]


class HistoryBuffer:
    """Fixed-capacity rolling window of price samples."""

    def __init__(self, capacity: int = HISTORY_CAPACITY, samples: Optional[Iterable[float]] = None):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._samples: deque = deque(samples or (), maxlen=capacity)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)

    def append(self, sample: float) -> None:
        """Append a sample, dropping the oldest once capacity is exceeded."""
        self._samples.append(sample)

    def clear(self) -> None:
        self._samples.clear()

    def values(self) -> List[float]:
        """All samples, oldest first."""
        return list(self._samples)

    def recent_window(self, k: int = CHART_WINDOW) -> List[float]:
        """
        Return the last ``k`` finite samples, oldest first.

        Args:
            k: Window size

        Returns:
            Up to ``k`` finite samples
        """
        if k <= 0:
            return []
        tail = list(self._samples)[-k:]
        return [float(v) for v in tail if _is_finite_number(v)]

    def has_sufficient_data(self, k: int = CHART_WINDOW) -> bool:
        return len(self.recent_window(k)) >= MIN_CHART_POINTS

    def chart_points(self, k: int = CHART_WINDOW) -> Optional[List[float]]:
        """
        Normalized chart series for the last ``k`` samples.

        Returns:
            Values in [0, 1], or None when fewer than MIN_CHART_POINTS finite
            samples exist (a one-point or flat chart would be misleading)
        """
        window = self.recent_window(k)
        if len(window) < MIN_CHART_POINTS:
            return None
        return normalize_series(window)
