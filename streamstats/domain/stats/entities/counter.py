# streamstats/domain/stats/entities/counter.py
from .online_stat import OnlineStat


class Counter(OnlineStat):
    """
    Count the number of items in a data stream.

    Example:
        Counter().fit(range(100)).value()  # 100
    """
    _config_fields = ("input_type",)

    def __init__(self, input_type: type = object):
        super().__init__()
        self.input_type = input_type

    def _fit(self, y):
        self.n += 1

    def _merge(self, other: "Counter"):
        self.n += other.n

    def value(self) -> int:
        return self.n
