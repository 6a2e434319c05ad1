# streamstats/domain/stats/factories/stat_factory.py
import logging
import math
import numbers
from typing import Any, Callable, Dict, List, Optional

from streamstats.domain.collections.entities.ft_series import FTSeries, identity, keep_all
from streamstats.domain.collections.entities.group import Group
from streamstats.domain.collections.entities.group_by import GroupBy
from streamstats.domain.collections.entities.series import Series
from streamstats.domain.stats.entities.count_map import CountMap
from streamstats.domain.stats.entities.counter import Counter
from streamstats.domain.stats.entities.cov_matrix import CovMatrix
from streamstats.domain.stats.entities.extrema import Extrema
from streamstats.domain.stats.entities.mean import Mean
from streamstats.domain.stats.entities.moments import Moments
from streamstats.domain.stats.entities.online_stat import OnlineStat
from streamstats.domain.stats.entities.sum import Sum
from streamstats.domain.stats.entities.variance import Variance
from streamstats.domain.stats.entities.weights import create_weight


def is_finite(y) -> bool:
    return isinstance(y, numbers.Real) and math.isfinite(y)


def is_positive(y) -> bool:
    return y > 0


def is_non_negative(y) -> bool:
    return y >= 0


DTYPES = {"float": float, "int": int}
KEY_TYPES = {"int": int, "str": str, "float": float, "object": object}
FILTERS: Dict[str, Callable[[Any], bool]] = {
    "keep_all": keep_all,
    "finite": is_finite,
    "positive": is_positive,
    "non_negative": is_non_negative,
}
TRANSFORMS: Dict[str, Callable[[Any], Any]] = {
    "identity": identity,
    "abs": abs,
    "float": float,
}


class StatFactory:
    """
    Factory for creating statistics from configuration dictionaries.

    A configuration names the statistic with its 'type' and carries its
    parameters; composite types nest the configurations of their components:

        {"type": "series", "stats": [{"type": "mean"},
                                     {"type": "variance", "weight": {"type": "exponential", "lam": 0.05}}]}
    """
    def __init__(self):
        """Initialize the statistic factory."""
        self.logger = logging.getLogger("domain.stats.factory")
        self._builders = {
            "counter": self._create_counter,
            "extrema": self._create_extrema,
            "sum": self._create_sum,
            "mean": self._create_mean,
            "variance": self._create_variance,
            "moments": self._create_moments,
            "cov_matrix": self._create_cov_matrix,
            "count_map": self._create_count_map,
            "group": self._create_group,
            "series": self._create_series,
            "ft_series": self._create_ft_series,
            "group_by": self._create_group_by,
        }

    def create_stat(self, config: Dict[str, Any]) -> OnlineStat:
        """
        Create a statistic from a configuration dictionary.

        Args:
            config: Statistic configuration with a 'type' key

        Returns:
            New statistic with an empty accumulator

        Raises:
            ValueError: If the type or one of the named parameters is unknown
        """
        stat_type = str(config.get("type", "")).lower()
        builder = self._builders.get(stat_type)
        if builder is None:
            self.logger.error(f"Unknown statistic type: {stat_type!r}")
            raise ValueError(f"Unknown statistic type: {stat_type!r}")

        stat = builder(config)
        self.logger.debug(f"Created {type(stat).__name__} from config type '{stat_type}'")
        return stat

    def create_stat_from_file(self, config_loader, file_path: str) -> OnlineStat:
        """
        Create a statistic from a configuration file.

        Args:
            config_loader: Configuration loader instance
            file_path: Path to a YAML file holding a statistic configuration,
                either at the top level or under a 'statistic' key

        Returns:
            New statistic
        """
        self.logger.info(f"Creating statistic from file: {file_path}")
        config = config_loader.load_file(file_path)
        return self.create_stat(config.get("statistic", config))

    @staticmethod
    def get_available_types() -> List[str]:
        return [
            "counter", "extrema", "sum", "mean", "variance", "moments", "cov_matrix",
            "count_map", "group", "series", "ft_series", "group_by",
        ]

    def _lookup(self, table: Dict[str, Any], name: str, what: str):
        if name not in table:
            self.logger.error(f"Unknown {what}: {name!r}")
            raise ValueError(f"Unknown {what}: {name!r} (expected one of {sorted(table)})")
        return table[name]

    def _weight(self, config: Dict[str, Any]):
        weight_config = config.get("weight")
        return create_weight(weight_config) if weight_config else None

    def _components(self, config: Dict[str, Any]):
        stats = config.get("stats")
        if not stats:
            raise ValueError(f"'{config.get('type')}' needs a non-empty 'stats' entry")
        if isinstance(stats, dict):
            return [], {name: self.create_stat(c) for name, c in stats.items()}
        return [self.create_stat(c) for c in stats], {}

    def _create_counter(self, config):
        return Counter()

    def _create_extrema(self, config):
        return Extrema(self._lookup(DTYPES, config.get("dtype", "float"), "dtype"))

    def _create_sum(self, config):
        return Sum(self._lookup(DTYPES, config.get("dtype", "float"), "dtype"))

    def _create_mean(self, config):
        return Mean(weight=self._weight(config))

    def _create_variance(self, config):
        return Variance(weight=self._weight(config))

    def _create_moments(self, config):
        return Moments(weight=self._weight(config))

    def _create_cov_matrix(self, config):
        return CovMatrix(config.get("p", 0), weight=self._weight(config))

    def _create_count_map(self, config):
        return CountMap()

    def _create_group(self, config):
        stats, named = self._components(config)
        return Group(*stats, **named)

    def _create_series(self, config):
        stats, named = self._components(config)
        return Series(*stats, **named)

    def _create_ft_series(self, config):
        stats, named = self._components(config)
        filter_fn = self._lookup(FILTERS, config.get("filter", "keep_all"), "filter")
        transform_fn = self._lookup(TRANSFORMS, config.get("transform", "identity"), "transform")
        return FTSeries(*stats, filter=filter_fn, transform=transform_fn, **named)

    def _create_group_by(self, config):
        key_type = self._lookup(KEY_TYPES, config.get("key_type", "object"), "key type")
        if "stat" not in config:
            raise ValueError("'group_by' needs a 'stat' entry")
        return GroupBy(key_type, self.create_stat(config["stat"]))
