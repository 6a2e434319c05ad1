# streamstats/domain/collections/entities/series.py
from .stat_collection import StatCollection, check_input, common_input_type


class Series(StatCollection):
    """
    Track several statistics of one data stream.

    Every component receives the same observation, so the components'
    declared input types must share a common subtype.

    Example:
        s = Series(Mean(), Variance(), Extrema()).fit(np.random.randn(1000))
    """
    def __init__(self, *stats, **named_stats):
        super().__init__(*stats, **named_stats)
        self.input_type = common_input_type((s.input_type for s in self.stats), type(self).__name__)

    def _check(self, y):
        check_input(self, y)
        return [stat._check(y) for stat in self.stats]

    def _fit(self, prepared):
        for stat, yi in zip(self.stats, prepared):
            stat._fit(yi)
