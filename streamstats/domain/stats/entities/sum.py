# streamstats/domain/stats/entities/sum.py
import numbers

from .online_stat import OnlineStat


class Sum(OnlineStat):
    """
    Track the overall sum.

    Floating point sums add observations directly; integer sums round each
    observation to the nearest integer (ties to even) before adding it.

    Example:
        Sum(int).fit([1] * 100).value()  # 100
    """
    input_type = numbers.Number
    _config_fields = ("dtype",)

    def __init__(self, dtype: type = float):
        super().__init__()
        if dtype not in (float, int):
            raise ValueError(f"Sum dtype must be float or int, got {dtype!r}")
        self.dtype = dtype
        self.sum = dtype(0)

    def _check(self, y):
        if self.dtype is int:
            return int(round(y))
        return float(y)

    def _fit(self, y):
        self.sum += y
        self.n += 1

    def _merge(self, other: "Sum"):
        self.sum += other.sum
        self.n += other.n

    def value(self):
        return self.sum
