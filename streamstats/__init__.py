# streamstats/__init__.py
"""
streamstats - online statistics with an associative merge.

Every statistic is updated one observation at a time and can be merged
with another instance of the same type and configuration, as if both had
seen all of the data. This makes them usable for map-then-combine reductions.
"""

from .domain.stats.entities import (
    StatError,
    MergeMismatchError,
    IncompatibleInputError,
    EqualWeight,
    ExponentialWeight,
    LearningRate,
    HarmonicWeight,
    Bounded,
    OnlineStat,
    Counter,
    Extrema,
    Sum,
    Mean,
    Variance,
    Moments,
    CovMatrix,
    CountMap,
)
from .domain.collections.entities import Group, Series, FTSeries, GroupBy

__all__ = [
    'StatError',
    'MergeMismatchError',
    'IncompatibleInputError',
    'EqualWeight',
    'ExponentialWeight',
    'LearningRate',
    'HarmonicWeight',
    'Bounded',
    'OnlineStat',
    'Counter',
    'Extrema',
    'Sum',
    'Mean',
    'Variance',
    'Moments',
    'CovMatrix',
    'CountMap',
    'Group',
    'Series',
    'FTSeries',
    'GroupBy',
]

__version__ = "0.1.0"
