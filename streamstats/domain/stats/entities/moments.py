# streamstats/domain/stats/entities/moments.py
import math
import numbers
from typing import Tuple

import numpy as np

from .online_stat import OnlineStat, bessel, smooth
from .weights import EqualWeight


class Moments(OnlineStat):
    """
    First four non-central moments E[y], E[y^2], E[y^3], E[y^4].

    Mean, variance, skewness and kurtosis are derived from the raw moments.
    With one observation or fewer the derived shape statistics divide by a
    zero variance and come out as nan or inf instead of raising.
    """
    input_type = numbers.Number
    _config_fields = ("weight",)

    def __init__(self, weight=None):
        super().__init__()
        self.m = np.zeros(4)
        self.weight = weight if weight is not None else EqualWeight()

    def _check(self, y):
        return float(y)

    def _fit(self, x):
        gamma = self.weight(self.n + 1)
        x2 = x * x
        self.m = smooth(self.m, np.array([x, x2, x * x2, x2 * x2]), gamma)
        self.n += 1

    def _merge(self, other: "Moments"):
        if other.n == 0:
            return
        self.n += other.n
        self.m = smooth(self.m, other.m, other.n / self.n)

    def value(self) -> Tuple[float, float, float, float]:
        return tuple(float(v) for v in self.m)

    def mean(self) -> float:
        return float(self.m[0])

    def var(self, corrected: bool = True) -> float:
        out = self.m[1] - self.m[0] ** 2
        if corrected and self.n > 1:
            out = out * bessel(self.n)
        return float(out)

    def std(self, corrected: bool = True) -> float:
        return math.sqrt(max(self.var(corrected), 0.0))

    def skewness(self) -> float:
        m1, m2, m3, _ = self.m
        vr = np.float64(m2 - m1 ** 2)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float((m3 - 3.0 * m1 * vr - m1 ** 3) / vr ** 1.5)

    def kurtosis(self) -> float:
        """Excess kurtosis."""
        m1, m2, m3, m4 = self.m
        vr = np.float64(m2 - m1 ** 2)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(
                (m4 - 4.0 * m1 * m3 + 6.0 * m1 ** 2 * m2 - 3.0 * m1 ** 4) / vr ** 2 - 3.0
            )
