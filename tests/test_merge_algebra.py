# tests/test_merge_algebra.py
import unittest
import sys
import os

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from streamstats.domain.collections.entities.group_by import GroupBy
from streamstats.domain.collections.entities.series import Series
from streamstats.domain.stats.entities.count_map import CountMap
from streamstats.domain.stats.entities.counter import Counter
from streamstats.domain.stats.entities.cov_matrix import CovMatrix
from streamstats.domain.stats.entities.extrema import Extrema
from streamstats.domain.stats.entities.mean import Mean
from streamstats.domain.stats.entities.moments import Moments
from streamstats.domain.stats.entities.sum import Sum
from streamstats.domain.stats.entities.variance import Variance


def fit_shards(prototype, shards):
    return [prototype.copy().fit(shard) for shard in shards]


def merge_left(stats):
    result = stats[0].copy()
    for stat in stats[1:]:
        result.merge(stat)
    return result


def merge_right(stats):
    result = stats[-1].copy()
    for stat in reversed(stats[:-1]):
        partial = stat.copy()
        partial.merge(result)
        result = partial
    return result


def merge_tree(stats):
    if len(stats) == 1:
        return stats[0].copy()
    half = len(stats) // 2
    left = merge_tree(stats[:half])
    left.merge(merge_tree(stats[half:]))
    return left


class TestMergeOrderIndependence(unittest.TestCase):
    """
    Fitting shards independently and merging them in any order gives the
    single-pass result, up to rounding.
    """

    def setUp(self):
        self.rng = np.random.default_rng(31337)
        self.scalars = list(self.rng.normal(5.0, 3.0, size=600))
        self.vectors = self.rng.normal(size=(600, 4))
        self.labels = list(self.rng.integers(0, 7, size=600))
        # uneven partitions, including a single-element shard
        self.cuts = [[300], [1, 599], [17, 120, 121, 480], [50, 100, 150, 200, 250, 300, 550]]

    def _partitions(self, data):
        for cuts in self.cuts:
            bounds = [0] + cuts + [len(data)]
            yield [data[a:b] for a, b in zip(bounds[:-1], bounds[1:])]

    def _check(self, prototype, data, compare):
        expected = prototype.copy().fit(data)
        for shards in self._partitions(data):
            partials = fit_shards(prototype, shards)
            for merge in (merge_left, merge_right, merge_tree):
                merged = merge(partials)
                self.assertEqual(merged.observation_count(), expected.observation_count())
                compare(merged.value(), expected.value())

    def _close(self, actual, expected):
        np.testing.assert_allclose(actual, expected, rtol=1e-9, atol=1e-12)

    def test_mean(self):
        self._check(Mean(), self.scalars, self._close)

    def test_variance(self):
        self._check(Variance(), self.scalars, self._close)

    def test_moments(self):
        self._check(Moments(), self.scalars, self._close)

    def test_cov_matrix(self):
        self._check(CovMatrix(), self.vectors, self._close)

    def test_counter_exact(self):
        self._check(Counter(), self.scalars, self.assertEqual)

    def test_integer_sum_exact(self):
        self._check(Sum(int), self.labels, self.assertEqual)

    def test_count_map_exact(self):
        self._check(CountMap(), self.labels, self.assertEqual)

    def test_extrema_exact(self):
        self._check(Extrema(), self.scalars, self.assertEqual)

    def test_series(self):
        def compare(actual, expected):
            for a, e in zip(actual, expected):
                self._close(a, e)

        self._check(Series(Mean(), Variance(), Extrema()), self.scalars, compare)

    def test_group_by(self):
        pairs = list(zip(self.labels, self.scalars))

        def compare(actual, expected):
            self.assertEqual(set(actual), set(expected))
            for key in expected:
                self._close(actual[key], expected[key])

        self._check(GroupBy(int, Variance()), pairs, compare)

    def test_merge_does_not_mutate_sources(self):
        partials = fit_shards(Variance(), [self.scalars[:100], self.scalars[100:]])
        snapshots = [p.copy() for p in partials]
        merge_tree(partials)
        for partial, snapshot in zip(partials, snapshots):
            self.assertEqual(partial, snapshot)


if __name__ == "__main__":
    unittest.main()
