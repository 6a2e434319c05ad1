# streamstats/domain/stats/entities/weights.py
from dataclasses import dataclass
from typing import Any, Callable, Dict


@dataclass(frozen=True)
class EqualWeight:
    """
    Every observation has the same influence: w(n) = 1/n.

    With this weight every smoothed statistic is a plain running average.
    """
    def __call__(self, n: int) -> float:
        return 1.0 / n


@dataclass(frozen=True)
class ExponentialWeight:
    """
    Exponentially weighted: the first observation gets weight 1, the rest `lam`.
    """
    lam: float = 0.1

    def __post_init__(self):
        if not 0.0 < self.lam <= 1.0:
            raise ValueError(f"ExponentialWeight lam must be in (0, 1], got {self.lam}")

    def __call__(self, n: int) -> float:
        return 1.0 if n == 1 else self.lam


@dataclass(frozen=True)
class LearningRate:
    """Decreasing weight w(n) = 1/n^r."""
    r: float = 0.6

    def __post_init__(self):
        if not 0.0 < self.r <= 1.0:
            raise ValueError(f"LearningRate r must be in (0, 1], got {self.r}")

    def __call__(self, n: int) -> float:
        return 1.0 / n ** self.r


@dataclass(frozen=True)
class HarmonicWeight:
    """w(n) = a / (a + n - 1)."""
    a: float = 10.0

    def __post_init__(self):
        if self.a <= 0:
            raise ValueError(f"HarmonicWeight a must be positive, got {self.a}")

    def __call__(self, n: int) -> float:
        return self.a / (self.a + n - 1)


@dataclass(frozen=True)
class Bounded:
    """Wraps another weight so it never drops below `lam`."""
    weight: Callable[[int], float]
    lam: float

    def __post_init__(self):
        if not 0.0 < self.lam <= 1.0:
            raise ValueError(f"Bounded lam must be in (0, 1], got {self.lam}")

    def __call__(self, n: int) -> float:
        return max(self.lam, self.weight(n))


_WEIGHT_TYPES = {
    "equal": EqualWeight,
    "exponential": ExponentialWeight,
    "learning_rate": LearningRate,
    "harmonic": HarmonicWeight,
}


def create_weight(config: Dict[str, Any]):
    """
    Create a weight function from a configuration dictionary.

    Args:
        config: Dictionary with a 'type' key and the weight's parameters,
            e.g. {"type": "exponential", "lam": 0.05}. A "bounded" weight takes
            a nested "weight" config and a "lam" floor.

    Returns:
        Weight function instance

    Raises:
        ValueError: If the weight type is unknown
    """
    params = dict(config)
    weight_type = str(params.pop("type", "equal")).lower()

    if weight_type == "bounded":
        inner = create_weight(params.get("weight", {"type": "equal"}))
        return Bounded(inner, params["lam"])

    if weight_type not in _WEIGHT_TYPES:
        raise ValueError(f"Unknown weight type: {weight_type}")

    return _WEIGHT_TYPES[weight_type](**params)
