# streamstats/application/reduction/parallel_reducer.py
import functools
import logging
from typing import List, Optional, Sequence

from streamstats.domain.stats.entities.online_stat import OnlineStat
from streamstats.infrastructure.concurrency.task_executor import TaskExecutor


def split_into_shards(data: Sequence, n_shards: int) -> List[Sequence]:
    """
    Split a sequence into contiguous, near-equal shards.

    Shard sizes differ by at most one. If there are fewer observations than
    shards, only the non-empty shards are returned; empty data gives a single
    empty shard.

    Args:
        data: Sequence of observations
        n_shards: Requested number of shards (>= 1)

    Returns:
        List of slices of `data`, in order
    """
    if n_shards < 1:
        raise ValueError(f"Number of shards must be at least 1, got {n_shards}")

    total = len(data)
    if total == 0:
        return [data[0:0]]

    n_shards = min(n_shards, total)
    base, extra = divmod(total, n_shards)
    shards = []
    start = 0
    for i in range(n_shards):
        stop = start + base + (1 if i < extra else 0)
        shards.append(data[start:stop])
        start = stop
    return shards


def fit_shard(prototype: OnlineStat, shard: Sequence) -> OnlineStat:
    """Fit a fresh copy of `prototype` on one shard."""
    return prototype.copy().fit(shard)


def merge_all(stats: Sequence[OnlineStat]) -> OnlineStat:
    """
    Merge partial statistics into one by pairwise tree reduction.

    Neighbouring partials are merged level by level, so shard order is kept.
    The inputs are left untouched.

    Args:
        stats: Partial statistics of identical type and configuration

    Returns:
        New statistic equivalent to having seen every partial's observations

    Raises:
        ValueError: If `stats` is empty
        MergeMismatchError: If two partials cannot be merged
    """
    if not stats:
        raise ValueError("Cannot merge an empty list of statistics")

    level = [stat.copy() for stat in stats]
    while len(level) > 1:
        merged = []
        for i in range(0, len(level) - 1, 2):
            merged.append(level[i].merge(level[i + 1]))
        if len(level) % 2 == 1:
            merged.append(level[-1])
        level = merged
    return level[0]


class ParallelReducer:
    """
    Computes a statistic over a data set by fitting shards independently and
    merging the partial results.
    """
    def __init__(self, executor: Optional[TaskExecutor] = None):
        """
        Initialize the reducer.

        Args:
            executor: Task executor used to fit shards (sequential if not given)
        """
        self.logger = logging.getLogger("application.reduction.reducer")
        self.executor = executor or TaskExecutor()

    def fit_partials(self, prototype: OnlineStat, data: Sequence, n_shards: int = 1) -> List[OnlineStat]:
        """
        Fit one copy of `prototype` per shard of `data`.

        Returns:
            Partial statistics in shard order
        """
        shards = split_into_shards(data, n_shards)
        self.logger.info(
            f"Fitting {type(prototype).__name__} on {len(data)} observations in {len(shards)} shards"
        )
        tasks = [functools.partial(fit_shard, prototype, shard) for shard in shards]
        return self.executor.execute_with_progress(tasks, self._log_progress)

    def reduce(self, prototype: OnlineStat, data: Sequence, n_shards: int = 1) -> OnlineStat:
        """
        Shard, fit and merge.

        Args:
            prototype: Statistic to compute; it is copied, never updated
            data: Sequence of observations
            n_shards: Number of shards to split the data into

        Returns:
            Merged statistic
        """
        partials = self.fit_partials(prototype, data, n_shards)
        result = merge_all(partials)
        self.logger.info(
            f"Merged {len(partials)} partial {type(prototype).__name__} results "
            f"({result.observation_count()} observations)"
        )
        return result

    def _log_progress(self, completed: int, total: int):
        self.logger.debug(f"Shard {completed}/{total} fitted")
