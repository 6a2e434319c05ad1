# streamstats/domain/stats/entities/count_map.py
from typing import Any, Dict, Iterable, Optional

import numpy as np

from .online_stat import OnlineStat


class CountMap(OnlineStat):
    """
    Map each distinct value to its number of occurrences.

    Keys keep the order in which they were first seen.

    Example:
        o = CountMap().fit([1, 2, 2, 3])
        o.probs()      # array([0.25, 0.5, 0.25])
        o.pdf(4)       # 0.0
    """
    _config_fields = ("input_type",)

    def __init__(self, input_type: type = object, counts: Optional[Dict[Any, int]] = None):
        super().__init__()
        self.input_type = input_type
        self.counts: Dict[Any, int] = {}
        if counts:
            self.counts.update(counts)
            self.n = sum(self.counts.values())

    def _check(self, y):
        hash(y)
        return y

    def _fit(self, y):
        self.counts[y] = self.counts.get(y, 0) + 1
        self.n += 1

    def _merge(self, other: "CountMap"):
        for key, count in other.counts.items():
            self.counts[key] = self.counts.get(key, 0) + count
        self.n += other.n

    def value(self) -> Dict[Any, int]:
        return dict(self.counts)

    def probs(self, keys: Optional[Iterable] = None) -> np.ndarray:
        """
        Relative frequencies for the given keys.

        Args:
            keys: Keys in the desired output order (defaults to all seen keys)

        Returns:
            Array of probabilities normalised over `keys`; all zeros if none of
            the keys has been seen
        """
        if keys is None:
            keys = self.counts.keys()
        out = np.array([self.counts.get(k, 0) for k in keys], dtype=float)
        total = out.sum()
        return out if total == 0 else out / total

    def pdf(self, y) -> float:
        if y not in self.counts:
            return 0.0
        return self.counts[y] / self.n

    def keys(self):
        return self.counts.keys()

    def values(self):
        return self.counts.values()

    def nkeys(self) -> int:
        return len(self.counts)

    def __getitem__(self, y) -> int:
        return self.counts[y]
