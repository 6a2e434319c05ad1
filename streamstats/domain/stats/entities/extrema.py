# streamstats/domain/stats/entities/extrema.py
import math
from typing import Any, Tuple

from .online_stat import OnlineStat


class Extrema(OnlineStat):
    """
    Minimum and maximum of a stream of ordered values.

    Both ends are seeded with the first observation, so the initial
    placeholders never leak into the result.
    """
    _config_fields = ("dtype",)

    def __init__(self, dtype: type = float):
        super().__init__()
        self.dtype = dtype
        if dtype is float:
            self.min, self.max = math.inf, -math.inf
        else:
            self.min, self.max = None, None

    def _check(self, y):
        if self.n > 0:
            # Raises TypeError for values not ordered against the current extremes
            min(self.min, y)
            max(self.max, y)
        return y

    def _fit(self, y):
        if self.n == 0:
            lo = hi = y
        else:
            lo = min(self.min, y)
            hi = max(self.max, y)
        self.min, self.max = lo, hi
        self.n += 1

    def _merge(self, other: "Extrema"):
        if other.n == 0:
            return
        if self.n == 0:
            self.min, self.max = other.min, other.max
        else:
            self.min = min(self.min, other.min)
            self.max = max(self.max, other.max)
        self.n += other.n

    def value(self) -> Tuple[Any, Any]:
        return self.min, self.max

    def minimum(self):
        return self.min

    def maximum(self):
        return self.max
