# streamstats/domain/stats/entities/mean.py
import numbers

from .online_stat import OnlineStat, smooth
from .weights import EqualWeight


class Mean(OnlineStat):
    """
    Univariate mean.

    Each observation moves the mean toward itself by the weight evaluated at
    the new observation count.
    """
    input_type = numbers.Number
    _config_fields = ("weight",)

    def __init__(self, weight=None):
        super().__init__()
        self.mu = 0.0
        self.weight = weight if weight is not None else EqualWeight()

    def _check(self, y):
        return float(y)

    def _fit(self, x):
        gamma = self.weight(self.n + 1)
        self.mu = smooth(self.mu, x, gamma)
        self.n += 1

    def _merge(self, other: "Mean"):
        if other.n == 0:
            return
        self.n += other.n
        self.mu = smooth(self.mu, other.mu, other.n / self.n)

    def value(self) -> float:
        return self.mu

    def mean(self) -> float:
        return self.mu
