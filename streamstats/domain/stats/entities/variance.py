# streamstats/domain/stats/entities/variance.py
import math
import numbers

from .online_stat import OnlineStat, bessel, smooth
from .weights import EqualWeight


class Variance(OnlineStat):
    """
    Univariate variance and mean.

    `sigma2` is the weighted mean of squared deviations. Each update smooths
    it toward the product of the observation's deviation from the old and
    from the new mean, which is the weighted form of Welford's recurrence.

    Merging uses the parallel variance identity: the smoothed pooled value
    plus delta^2 * gamma * (1 - gamma), where delta is the difference of the
    two means.
    """
    input_type = numbers.Number
    _config_fields = ("weight",)

    def __init__(self, weight=None):
        super().__init__()
        self.sigma2 = 0.0
        self.mu = 0.0
        self.weight = weight if weight is not None else EqualWeight()

    def _check(self, y):
        return float(y)

    def _fit(self, x):
        gamma = self.weight(self.n + 1)
        old_mu = self.mu
        mu = smooth(old_mu, x, gamma)
        self.sigma2 = smooth(self.sigma2, (x - mu) * (x - old_mu), gamma)
        self.mu = mu
        self.n += 1

    def _merge(self, other: "Variance"):
        if other.n == 0:
            return
        self.n += other.n
        gamma = other.n / self.n
        delta = other.mu - self.mu
        self.sigma2 = smooth(self.sigma2, other.sigma2, gamma) + delta ** 2 * gamma * (1.0 - gamma)
        self.mu = smooth(self.mu, other.mu, gamma)

    def value(self) -> float:
        """Bessel-corrected variance, or 1.0 until more than one observation is seen."""
        return self.sigma2 * bessel(self.n) if self.n > 1 else 1.0

    def var(self) -> float:
        return self.value()

    def std(self) -> float:
        return math.sqrt(self.value())

    def mean(self) -> float:
        return self.mu
