# streamstats/domain/collections/entities/group.py
from collections.abc import Iterable, Mapping

from .stat_collection import StatCollection, check_input


class Group(StatCollection):
    """
    Vector-input statistic made of several scalar-input statistics.

    For an observation `y`, `y[i]` is sent to `stats[i]`. A named group also
    accepts a mapping and routes `y[name]` to the stat of that name.

    Example:
        g = Group(Mean(), Variance()).fit([[1, 2], [3, 4]])
        g.value()  # (2.0, 2.0)
    """
    input_type = Iterable

    def _check(self, y):
        if self.names is not None and isinstance(y, Mapping):
            values = [y[name] for name in self.names]
        else:
            values = list(y)

        if len(values) != len(self.stats):
            raise ValueError(f"Group of {len(self.stats)} stats got an observation of length {len(values)}")
        for stat, yi in zip(self.stats, values):
            check_input(stat, yi)
        return [stat._check(yi) for stat, yi in zip(self.stats, values)]

    def _fit(self, prepared):
        for stat, yi in zip(self.stats, prepared):
            stat._fit(yi)
