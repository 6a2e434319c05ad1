# streamstats/domain/stats/entities/cov_matrix.py
from collections.abc import Iterable
from typing import Optional

import numpy as np

from .errors import MergeMismatchError
from .online_stat import OnlineStat, bessel, smooth
from .weights import EqualWeight


class CovMatrix(OnlineStat):
    """
    Covariance / correlation matrix of `p` variables.

    Keeps the running average of x x' (`A`) and of x (`b`); the covariance
    is A - b b'. If `p` is 0 the matrix stays unallocated (`A is None`) until
    the first observation fixes its dimension.

    Example:
        o = CovMatrix().fit(np.random.randn(100, 4))
        o.cov()
        o.cor()
    """
    input_type = Iterable
    _config_fields = ("weight",)

    def __init__(self, p: int = 0, weight=None):
        super().__init__()
        if p < 0:
            raise ValueError(f"CovMatrix dimension must be non-negative, got {p}")
        self.weight = weight if weight is not None else EqualWeight()
        self.A: Optional[np.ndarray] = None
        self.b: Optional[np.ndarray] = None
        if p > 0:
            self._allocate(p)

    def _allocate(self, p: int):
        self.A = np.zeros((p, p))
        self.b = np.zeros(p)

    def nvars(self) -> int:
        return 0 if self.b is None else self.b.shape[0]

    def _check(self, y):
        x = np.asarray(y, dtype=float).ravel()
        if self.A is not None and x.shape[0] != self.nvars():
            raise ValueError(f"Expected an observation of length {self.nvars()}, got {x.shape[0]}")
        return x

    def _fit(self, x):
        if self.A is None:
            self._allocate(x.shape[0])
        gamma = self.weight(self.n + 1)
        self.b = smooth(self.b, x, gamma)
        self.A = smooth(self.A, np.outer(x, x), gamma)
        self.n += 1

    def check_mergeable(self, other: "CovMatrix"):
        super().check_mergeable(other)
        if self.A is not None and other.A is not None and self.nvars() != other.nvars():
            raise MergeMismatchError(
                self, other, f"different dimensions ({self.nvars()} vs {other.nvars()})"
            )

    def _merge(self, other: "CovMatrix"):
        if other.n == 0:
            return
        if self.A is None or self.n == 0:
            self.A = other.A.copy()
            self.b = other.b.copy()
            self.n = other.n
            return
        self.n += other.n
        gamma = other.n / self.n
        self.A = smooth(self.A, other.A, gamma)
        self.b = smooth(self.b, other.b, gamma)

    def value(self, corrected: bool = True) -> np.ndarray:
        """
        Covariance matrix.

        Args:
            corrected: Apply the Bessel correction n/(n-1) when n > 1

        Returns:
            Symmetric p x p array (empty if nothing has been observed)
        """
        if self.A is None:
            return np.zeros((0, 0))
        out = self.A - np.outer(self.b, self.b)
        out = (out + out.T) / 2.0
        if corrected and self.n > 1:
            out *= bessel(self.n)
        return out

    def cov(self, corrected: bool = True) -> np.ndarray:
        return self.value(corrected=corrected)

    def cor(self, corrected: bool = True) -> np.ndarray:
        """Correlation matrix: the covariance scaled by 1/sqrt of its diagonal on both sides."""
        out = self.value(corrected=corrected)
        with np.errstate(divide="ignore", invalid="ignore"):
            v = 1.0 / np.sqrt(np.diag(out))
        return out * v[:, None] * v[None, :]

    def mean(self) -> np.ndarray:
        return np.zeros(0) if self.b is None else self.b.copy()

    def var(self, corrected: bool = True) -> np.ndarray:
        return np.diag(self.value(corrected=corrected)).copy()
