# streamstats/domain/stats/entities/__init__.py
"""
Primitive online statistics and the contract they share.
"""

from .errors import StatError, MergeMismatchError, IncompatibleInputError
from .weights import EqualWeight, ExponentialWeight, LearningRate, HarmonicWeight, Bounded, create_weight
from .online_stat import OnlineStat
from .counter import Counter
from .extrema import Extrema
from .sum import Sum
from .mean import Mean
from .variance import Variance
from .moments import Moments
from .cov_matrix import CovMatrix
from .count_map import CountMap

__all__ = [
    'StatError',
    'MergeMismatchError',
    'IncompatibleInputError',
    'EqualWeight',
    'ExponentialWeight',
    'LearningRate',
    'HarmonicWeight',
    'Bounded',
    'create_weight',
    'OnlineStat',
    'Counter',
    'Extrema',
    'Sum',
    'Mean',
    'Variance',
    'Moments',
    'CovMatrix',
    'CountMap',
]
