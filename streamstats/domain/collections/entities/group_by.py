# streamstats/domain/collections/entities/group_by.py
from collections.abc import Iterable
from typing import Any, Dict

import numpy as np

from streamstats.domain.stats.entities.errors import MergeMismatchError
from streamstats.domain.stats.entities.online_stat import OnlineStat


class GroupBy(OnlineStat):
    """
    Track a separate statistic for every group.

    An observation is a `(key, y)` pair. The first time a key is seen, a
    deep copy of the prototype is created for it; `y` then updates the
    statistic of its key. Groups keep the order in which keys first appeared.
    numpy scalar keys are stored as the equivalent Python scalar, so
    `GroupBy(int, ...)` accepts the labels of an integer array.

    Example:
        o = GroupBy(int, Extrema()).fit(zip(x, y))
        o[3].value()
    """
    input_type = Iterable

    def __init__(self, key_type: type, prototype: OnlineStat):
        super().__init__()
        if not isinstance(prototype, OnlineStat):
            raise TypeError(f"GroupBy prototype must be an OnlineStat, got {type(prototype).__name__}")
        self.key_type = key_type
        self.prototype = prototype.copy()
        self.groups: Dict[Any, OnlineStat] = {}

    def _check(self, xy):
        key, y = xy
        if isinstance(key, np.generic):
            key = key.item()
        if not isinstance(key, self.key_type):
            raise TypeError(f"GroupBy expects {self.key_type.__name__} keys, got {type(key).__name__}")
        target = self.groups.get(key, self.prototype)
        return key, target._check(y)

    def _fit(self, prepared):
        key, y = prepared
        stat = self.groups.get(key)
        if stat is None:
            stat = self.prototype.copy()
            self.groups[key] = stat
        stat._fit(y)
        self.n += 1

    def check_mergeable(self, other: "GroupBy"):
        super().check_mergeable(other)
        if self.key_type is not other.key_type:
            raise MergeMismatchError(self, other, "different key types")
        if self.prototype != other.prototype:
            raise MergeMismatchError(self, other, "different prototype statistics")
        for key, stat in other.groups.items():
            if key in self.groups:
                self.groups[key].check_mergeable(stat)

    def _merge(self, other: "GroupBy"):
        for key, stat in other.groups.items():
            if key in self.groups:
                self.groups[key]._merge(stat)
            else:
                self.groups[key] = stat.copy()
        self.n += other.n

    def value(self) -> Dict[Any, Any]:
        """Value of every group's statistic, keyed by group."""
        return {key: stat.value() for key, stat in self.groups.items()}

    def keys(self):
        return self.groups.keys()

    def items(self):
        return self.groups.items()

    def __getitem__(self, key) -> OnlineStat:
        return self.groups[key]

    def __contains__(self, key) -> bool:
        return key in self.groups

    def __len__(self) -> int:
        return len(self.groups)
