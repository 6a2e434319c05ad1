# streamstats/domain/collections/entities/ft_series.py
from typing import Any, Callable

from streamstats.domain.stats.entities.errors import MergeMismatchError

from .stat_collection import StatCollection, check_input, common_input_type


def keep_all(y) -> bool:
    return True


def identity(y):
    return y


class FTSeries(StatCollection):
    """
    Series whose observations are filtered and transformed before fitting.

    An observation for which `filter(y)` is false is only counted in
    `nfiltered`; otherwise `transform(y)` goes to every component. Observations
    that are not instances of `input_type` are rejected before the filter
    runs. Exceptions raised by the filter or the transform reach the caller
    unchanged, and the series is left as it was.

    Two FTSeries merge only if they hold the very same filter and transform
    callables (copies of one FTSeries do).

    Example:
        o = FTSeries(Mean(), Variance(), transform=abs)
        o.fit(-np.random.rand(1000))
    """
    def __init__(self, *stats, filter: Callable[[Any], bool] = keep_all,
                 transform: Callable[[Any], Any] = identity, input_type: type = object,
                 **named_stats):
        super().__init__(*stats, **named_stats)
        self.filter = filter
        self.transform = transform
        self.input_type = input_type
        self.output_type = common_input_type((s.input_type for s in self.stats), type(self).__name__)
        self.nfiltered = 0

    def _check(self, y):
        check_input(self, y)
        if not self.filter(y):
            return None
        yt = self.transform(y)
        if not isinstance(yt, self.output_type):
            raise TypeError(
                f"FTSeries transform produced {type(yt).__name__}, "
                f"components expect {self.output_type.__name__}"
            )
        return [stat._check(yt) for stat in self.stats]

    def _fit(self, prepared):
        if prepared is None:
            self.nfiltered += 1
            return
        for stat, yi in zip(self.stats, prepared):
            stat._fit(yi)

    def check_mergeable(self, other: "FTSeries"):
        super().check_mergeable(other)
        if self.filter is not other.filter:
            raise MergeMismatchError(self, other, "different filter functions")
        if self.transform is not other.transform:
            raise MergeMismatchError(self, other, "different transform functions")

    def _merge(self, other: "FTSeries"):
        self.nfiltered += other.nfiltered
        super()._merge(other)
