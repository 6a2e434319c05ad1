# tests/test_primitive_stats.py
import unittest
import sys
import os
import math

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from streamstats.domain.stats.entities.counter import Counter
from streamstats.domain.stats.entities.extrema import Extrema
from streamstats.domain.stats.entities.sum import Sum
from streamstats.domain.stats.entities.mean import Mean
from streamstats.domain.stats.entities.variance import Variance
from streamstats.domain.stats.entities.moments import Moments
from streamstats.domain.stats.entities.count_map import CountMap
from streamstats.domain.stats.entities.weights import EqualWeight, ExponentialWeight
from streamstats.domain.stats.entities.errors import MergeMismatchError


class TestCounter(unittest.TestCase):
    """Test cases for Counter."""

    def test_counts_items(self):
        o = Counter().fit(range(100))
        self.assertEqual(o.value(), 100)
        self.assertEqual(o.observation_count(), 100)

    def test_counts_any_type(self):
        o = Counter().fit(["a", None, (1, 2), 3.5])
        self.assertEqual(o.value(), 4)

    def test_merge(self):
        a = Counter().fit(range(10))
        b = Counter().fit(range(5))
        a.merge(b)
        self.assertEqual(a.value(), 15)
        self.assertEqual(b.value(), 5)

    def test_empty(self):
        self.assertEqual(Counter().value(), 0)


class TestExtrema(unittest.TestCase):
    """Test cases for Extrema."""

    def test_single_observation_seeds_both_ends(self):
        self.assertEqual(Extrema().fit([5]).value(), (5, 5))

    def test_min_max(self):
        self.assertEqual(Extrema().fit([3, 7, 1]).value(), (1, 7))

    def test_merge(self):
        a = Extrema().fit([1, 5])
        b = Extrema().fit([0, 9])
        a.merge(b)
        self.assertEqual(a.value(), (0, 9))
        self.assertEqual(a.observation_count(), 4)

    def test_merge_into_empty_adopts_other(self):
        a = Extrema()
        a.merge(Extrema().fit([4, 2]))
        self.assertEqual(a.value(), (2, 4))

    def test_merge_empty_is_identity(self):
        a = Extrema().fit([4, 2])
        a.merge(Extrema())
        self.assertEqual(a.value(), (2, 4))
        self.assertEqual(a.observation_count(), 2)

    def test_strings(self):
        o = Extrema(str).fit(["pear", "apple", "zucchini"])
        self.assertEqual(o.value(), ("apple", "zucchini"))
        self.assertEqual(o.minimum(), "apple")
        self.assertEqual(o.maximum(), "zucchini")

    def test_sentinel_is_a_valid_observation(self):
        o = Extrema().fit([math.inf])
        self.assertEqual(o.value(), (math.inf, math.inf))

    def test_merge_different_dtype_fails(self):
        with self.assertRaises(MergeMismatchError):
            Extrema(float).merge(Extrema(str))

    def test_unordered_value_leaves_state_unchanged(self):
        o = Extrema().fit([1.0, 4.0])
        with self.assertRaises(TypeError):
            o.update("x")
        self.assertEqual(o.value(), (1.0, 4.0))
        self.assertEqual(o.observation_count(), 2)


class TestSum(unittest.TestCase):
    """Test cases for Sum."""

    def test_integer_sum(self):
        o = Sum(int).fit([1] * 100)
        self.assertEqual(o.value(), 100)
        self.assertIsInstance(o.value(), int)

    def test_integer_sum_rounds_each_observation(self):
        self.assertEqual(Sum(int).fit([1.4, 1.6, 2.5]).value(), 1 + 2 + 2)

    def test_float_sum(self):
        self.assertAlmostEqual(Sum().fit([0.5, 0.25, 0.25]).value(), 1.0)

    def test_merge(self):
        a = Sum(int).fit([1, 2, 3])
        a.merge(Sum(int).fit([4, 5]))
        self.assertEqual(a.value(), 15)
        self.assertEqual(a.observation_count(), 5)

    def test_invalid_dtype(self):
        with self.assertRaises(ValueError):
            Sum(str)

    def test_merge_different_dtype_fails(self):
        with self.assertRaises(MergeMismatchError):
            Sum(int).merge(Sum(float))

    def test_non_finite_integer_sum_leaves_state_unchanged(self):
        o = Sum(int).fit([1, 2])
        with self.assertRaises(ValueError):
            o.update(float("nan"))
        with self.assertRaises(OverflowError):
            o.update(float("inf"))
        self.assertEqual(o.value(), 3)
        self.assertEqual(o.observation_count(), 2)


class TestMean(unittest.TestCase):
    """Test cases for Mean."""

    def setUp(self):
        self.rng = np.random.default_rng(12345)
        self.data = self.rng.normal(3.0, 2.0, size=1000)

    def test_mean(self):
        o = Mean().fit(self.data)
        self.assertAlmostEqual(o.value(), np.mean(self.data), places=10)
        self.assertEqual(o.observation_count(), 1000)

    def test_empty_mean(self):
        self.assertEqual(Mean().value(), 0.0)

    def test_merge(self):
        a = Mean().fit(self.data[:300])
        b = Mean().fit(self.data[300:])
        a.merge(b)
        self.assertAlmostEqual(a.value(), np.mean(self.data), places=10)

    def test_merge_does_not_modify_source(self):
        a = Mean().fit([1, 2])
        b = Mean().fit([3, 4])
        before = b.copy()
        a.merge(b)
        self.assertEqual(b, before)

    def test_exponential_weight(self):
        o = Mean(weight=ExponentialWeight(0.5)).fit([1.0, 3.0])
        # first observation has weight 1, second weight 0.5
        self.assertAlmostEqual(o.value(), 2.0)
        o.update(5.0)
        self.assertAlmostEqual(o.value(), 3.5)

    def test_merge_different_weights_fails(self):
        a = Mean().fit([1.0])
        b = Mean(weight=ExponentialWeight(0.1)).fit([2.0])
        with self.assertRaises(MergeMismatchError):
            a.merge(b)
        self.assertEqual(a.value(), 1.0)
        self.assertEqual(a.observation_count(), 1)

    def test_merge_with_itself_fails(self):
        a = Mean().fit([1.0, 2.0])
        with self.assertRaises(ValueError):
            a.merge(a)

    def test_merge_different_types_fails(self):
        with self.assertRaises(MergeMismatchError):
            Mean().merge(Variance())

    def test_failed_update_leaves_state_unchanged(self):
        o = Mean().fit([1.0, 2.0])
        with self.assertRaises((TypeError, ValueError)):
            o.update("not a number")
        self.assertEqual(o.observation_count(), 2)
        self.assertAlmostEqual(o.value(), 1.5)


class TestVariance(unittest.TestCase):
    """Test cases for Variance."""

    def setUp(self):
        self.rng = np.random.default_rng(2024)
        self.data = self.rng.normal(-1.0, 3.0, size=500)

    def test_sample_variance(self):
        o = Variance().fit(self.data)
        self.assertAlmostEqual(o.value(), np.var(self.data, ddof=1), places=8)
        self.assertAlmostEqual(o.mean(), np.mean(self.data), places=10)
        self.assertAlmostEqual(o.std(), np.std(self.data, ddof=1), places=8)

    def test_sentinel_before_two_observations(self):
        self.assertEqual(Variance().value(), 1.0)
        self.assertEqual(Variance().fit([42.0]).value(), 1.0)

    def test_positive_for_non_constant_sample(self):
        self.assertGreater(Variance().fit([1.0, 1.0, 1.5]).value(), 0.0)

    def test_merge_with_different_means(self):
        left = self.data[:100] + 10.0
        right = self.data[100:]
        a = Variance().fit(left)
        a.merge(Variance().fit(right))
        full = np.concatenate([left, right])
        self.assertAlmostEqual(a.value(), np.var(full, ddof=1), places=8)
        self.assertAlmostEqual(a.mean(), np.mean(full), places=10)

    def test_merge_into_empty(self):
        a = Variance()
        a.merge(Variance().fit([1.0, 2.0, 3.0]))
        self.assertAlmostEqual(a.value(), 1.0)
        self.assertAlmostEqual(a.mean(), 2.0)
        self.assertEqual(a.observation_count(), 3)

    def test_merge_empty_is_identity(self):
        a = Variance().fit([1.0, 2.0, 3.0])
        a.merge(Variance())
        self.assertAlmostEqual(a.value(), 1.0)
        self.assertEqual(a.observation_count(), 3)


class TestMoments(unittest.TestCase):
    """Test cases for Moments."""

    def setUp(self):
        self.rng = np.random.default_rng(7)
        self.data = self.rng.exponential(2.0, size=2000)

    def test_raw_moments(self):
        o = Moments().fit(self.data)
        expected = [np.mean(self.data ** k) for k in range(1, 5)]
        np.testing.assert_allclose(o.value(), expected, rtol=1e-9)

    def test_derived_statistics(self):
        o = Moments().fit(self.data)
        d = self.data - self.data.mean()
        m2 = np.mean(d ** 2)
        self.assertAlmostEqual(o.mean(), np.mean(self.data), places=10)
        self.assertAlmostEqual(o.var(), np.var(self.data, ddof=1), places=6)
        self.assertAlmostEqual(o.var(corrected=False), m2, places=6)
        self.assertAlmostEqual(o.skewness(), np.mean(d ** 3) / m2 ** 1.5, places=6)
        self.assertAlmostEqual(o.kurtosis(), np.mean(d ** 4) / m2 ** 2 - 3.0, places=5)

    def test_degenerate_state_does_not_raise(self):
        o = Moments().fit([2.0])
        self.assertTrue(math.isnan(o.skewness()) or math.isinf(o.skewness()))
        self.assertTrue(math.isnan(o.kurtosis()) or math.isinf(o.kurtosis()))

    def test_merge(self):
        a = Moments().fit(self.data[:700])
        a.merge(Moments().fit(self.data[700:]))
        np.testing.assert_allclose(a.value(), Moments().fit(self.data).value(), rtol=1e-9)
        self.assertEqual(a.observation_count(), 2000)


class TestCountMap(unittest.TestCase):
    """Test cases for CountMap."""

    def test_counts(self):
        o = CountMap().fit([1, 2, 2, 3, 3, 3])
        self.assertEqual(o.value(), {1: 1, 2: 2, 3: 3})
        self.assertEqual(list(o.keys()), [1, 2, 3])
        self.assertEqual(o[3], 3)
        self.assertEqual(o.nkeys(), 3)
        self.assertEqual(sum(o.values()), o.observation_count())

    def test_probs_and_pdf(self):
        o = CountMap().fit(["a", "b", "b", "a", "b"])
        np.testing.assert_allclose(o.probs(), [0.4, 0.6])
        np.testing.assert_allclose(o.probs(["b", "a", "c"]), [0.6, 0.4, 0.0])
        self.assertAlmostEqual(o.pdf("a"), 0.4)
        self.assertEqual(o.pdf("missing"), 0.0)

    def test_probs_all_unseen_keys(self):
        out = CountMap().fit([1, 2]).probs([7, 8])
        np.testing.assert_array_equal(out, [0.0, 0.0])
        self.assertEqual(out.dtype, np.float64)

    def test_merge_is_additive(self):
        a = CountMap().fit([1, 1, 2])
        b = CountMap().fit([2, 3])
        a.merge(b)
        self.assertEqual(a.value(), {1: 2, 2: 2, 3: 1})
        self.assertEqual(a.observation_count(), 5)
        self.assertEqual(sum(a.values()), a.observation_count())
        self.assertEqual(b.value(), {2: 1, 3: 1})

    def test_disjoint_merge_probs(self):
        a = CountMap().fit(["x"] * 3)
        b = CountMap().fit(["y"] * 1)
        a.merge(b)
        np.testing.assert_allclose(a.probs(["x", "y"]), [0.75, 0.25])

    def test_initial_counts(self):
        o = CountMap(counts={"a": 2, "b": 1})
        self.assertEqual(o.observation_count(), 3)
        o.update("a")
        self.assertEqual(o["a"], 3)

    def test_unseen_key_getitem_fails(self):
        with self.assertRaises(KeyError):
            CountMap()["nope"]

    def test_unhashable_value_leaves_state_unchanged(self):
        o = CountMap().fit(["a"])
        with self.assertRaises(TypeError):
            o.update(["not", "hashable"])
        self.assertEqual(o.value(), {"a": 1})
        self.assertEqual(o.observation_count(), 1)


class TestStatContract(unittest.TestCase):
    """Behaviour shared by every statistic."""

    def test_update_returns_self(self):
        o = Mean()
        self.assertIs(o.update(1.0), o)
        self.assertIs(o.fit([2.0]), o)

    def test_copy_is_independent(self):
        a = Variance().fit([1.0, 2.0])
        b = a.copy()
        b.update(100.0)
        self.assertEqual(a.observation_count(), 2)
        self.assertEqual(b.observation_count(), 3)

    def test_equality(self):
        self.assertEqual(Mean().fit([1, 2]), Mean().fit([1, 2]))
        self.assertNotEqual(Mean().fit([1, 2]), Mean().fit([1, 3]))
        self.assertNotEqual(Mean(), Mean(weight=ExponentialWeight(0.2)))
        self.assertEqual(Mean(), Mean(weight=EqualWeight()))

    def test_repr(self):
        self.assertIn("Counter", repr(Counter().fit([1, 2])))


if __name__ == "__main__":
    unittest.main()
