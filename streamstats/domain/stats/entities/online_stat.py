# streamstats/domain/stats/entities/online_stat.py
import copy
from abc import ABC, abstractmethod
from typing import Any, Iterable, Tuple

import numpy as np

from .errors import MergeMismatchError


def smooth(a, b, gamma: float):
    """Weighted average a*(1-gamma) + b*gamma, written as an update of a."""
    return a + gamma * (b - a)


def bessel(n: int) -> float:
    """Bessel correction factor n/(n-1)."""
    return n / (n - 1)


def state_equal(a: Any, b: Any) -> bool:
    """
    Compare two pieces of accumulator state.

    numpy arrays are compared element-wise, containers recursively. Everything
    else falls back to ==, so callables compare by identity.
    """
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        if not (isinstance(a, np.ndarray) and isinstance(b, np.ndarray)):
            return False
        return a.shape == b.shape and bool(np.array_equal(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        if list(a.keys()) != list(b.keys()):
            return False
        return all(state_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(state_equal(x, y) for x, y in zip(a, b))
    return bool(a == b)


class OnlineStat(ABC):
    """
    Base class for all online statistics.

    A statistic owns an accumulator that is mutated in place by `update` (one
    observation) and `merge` (another statistic's accumulator). Subclasses
    implement `_fit`, `_merge` and `value`. Both mutators validate before
    they write, so a call that raises leaves the statistic untouched.

    An observation goes through `_check` first, which raises if the
    observation cannot be fitted and otherwise returns it in the form
    `_fit` consumes (a float, an array, one prepared value per component).
    `_check` must not change any state; `_fit` must not raise.
    """

    # Declared type of a single observation; composites use it to check that
    # their components can share one observation.
    input_type: type = object

    # Attributes that must be equal for two instances to be mergeable.
    _config_fields: Tuple[str, ...] = ()

    def __init__(self):
        self.n = 0

    def update(self, y) -> "OnlineStat":
        """
        Update the statistic with a single observation.

        Args:
            y: One observation of the statistic's input type

        Returns:
            self, to allow chaining
        """
        self._fit(self._check(y))
        return self

    def fit(self, data: Iterable) -> "OnlineStat":
        """
        Update the statistic with every observation of an iterable, in order.

        Args:
            data: Iterable of observations

        Returns:
            self
        """
        for y in data:
            self._fit(self._check(y))
        return self

    def merge(self, other: "OnlineStat") -> "OnlineStat":
        """
        Merge another statistic into this one.

        The result is what `self` would hold had it also seen every observation
        `other` has seen. `other` is never modified.

        Args:
            other: Statistic of the same type and configuration

        Returns:
            self

        Raises:
            MergeMismatchError: If the statistics have different types or configurations
            ValueError: If a statistic is merged with itself
        """
        if other is self:
            raise ValueError(f"Cannot merge a {type(self).__name__} with itself")
        self.check_mergeable(other)
        self._merge(other)
        return self

    def check_mergeable(self, other: "OnlineStat"):
        """
        Raise MergeMismatchError unless `other` can be merged into this statistic.
        """
        if type(other) is not type(self):
            raise MergeMismatchError(self, other, "different statistic types")
        for name in self._config_fields:
            if not state_equal(getattr(self, name), getattr(other, name)):
                raise MergeMismatchError(self, other, f"different {name}")

    def observation_count(self) -> int:
        """Number of observations the statistic has seen."""
        return self.n

    def copy(self) -> "OnlineStat":
        """Independent deep copy of the statistic."""
        return copy.deepcopy(self)

    def _check(self, y):
        return y

    @abstractmethod
    def _fit(self, y):
        pass

    @abstractmethod
    def _merge(self, other: "OnlineStat"):
        pass

    @abstractmethod
    def value(self):
        """Current summary of the accumulated observations."""
        pass

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return state_equal(vars(self), vars(other))

    __hash__ = None

    def __rmul__(self, k: int):
        """`k * stat` builds a Group of k independent copies of `stat`."""
        if not isinstance(k, int) or isinstance(k, bool):
            return NotImplemented
        from streamstats.domain.collections.entities.group import Group
        return Group(*[self.copy() for _ in range(k)])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.observation_count()}, value={self.value()!r})"
