# streamstats/application/reduction/__init__.py
"""
Parallel reduction: shard a data set, fit each shard independently and
merge the partial statistics.
"""

from .parallel_reducer import ParallelReducer, split_into_shards, fit_shard, merge_all
from .reduction_runner import ReductionRunner

__all__ = [
    'ParallelReducer',
    'split_into_shards',
    'fit_shard',
    'merge_all',
    'ReductionRunner',
]
