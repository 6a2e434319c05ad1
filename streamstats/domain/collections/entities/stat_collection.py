# streamstats/domain/collections/entities/stat_collection.py
from typing import Dict, Iterable, List, Optional

from streamstats.domain.stats.entities.errors import IncompatibleInputError, MergeMismatchError
from streamstats.domain.stats.entities.online_stat import OnlineStat


def common_input_type(input_types: Iterable[type], composite_name: str = "collection") -> type:
    """
    Most specific of several declared input types.

    Args:
        input_types: Declared input types of the components
        composite_name: Name used in the error message

    Returns:
        The type that is a subtype of every other one

    Raises:
        IncompatibleInputError: If no such type exists
    """
    input_types = list(input_types)
    for candidate in input_types:
        if all(issubclass(candidate, other) for other in input_types):
            return candidate
    raise IncompatibleInputError(composite_name, input_types)


def check_input(stat: OnlineStat, y):
    """Raise TypeError if `y` is not an instance of the statistic's declared input type."""
    if not isinstance(y, stat.input_type):
        raise TypeError(
            f"{type(stat).__name__} expects {stat.input_type.__name__} observations, "
            f"got {type(y).__name__}"
        )


class StatCollection(OnlineStat):
    """
    Base class for fixed, ordered collections of statistics.

    Components are given either positionally or by keyword (named
    collection), never both. The collection's observation count is the count
    of its first component.
    """
    def __init__(self, *stats: OnlineStat, **named_stats: OnlineStat):
        super().__init__()
        if stats and named_stats:
            raise ValueError(f"{type(self).__name__} takes positional or named stats, not both")

        self.names: Optional[List[str]] = list(named_stats) if named_stats else None
        self.stats: List[OnlineStat] = list(named_stats.values()) if named_stats else list(stats)

        if not self.stats:
            raise ValueError(f"{type(self).__name__} needs at least one statistic")
        for stat in self.stats:
            if not isinstance(stat, OnlineStat):
                raise TypeError(f"{type(self).__name__} components must be OnlineStat, got {type(stat).__name__}")

    def observation_count(self) -> int:
        return self.stats[0].observation_count()

    def value(self):
        """Component values, as a tuple or, for a named collection, a dict."""
        if self.names is not None:
            return {name: stat.value() for name, stat in zip(self.names, self.stats)}
        return tuple(stat.value() for stat in self.stats)

    def check_mergeable(self, other: "StatCollection"):
        super().check_mergeable(other)
        if len(self.stats) != len(other.stats):
            raise MergeMismatchError(
                self, other, f"different number of stats ({len(self.stats)} vs {len(other.stats)})"
            )
        if self.names != other.names:
            raise MergeMismatchError(self, other, "different stat names")
        for mine, theirs in zip(self.stats, other.stats):
            mine.check_mergeable(theirs)

    def _merge(self, other: "StatCollection"):
        for mine, theirs in zip(self.stats, other.stats):
            mine._merge(theirs)

    def as_dict(self) -> Dict[str, OnlineStat]:
        if self.names is None:
            return {str(i): stat for i, stat in enumerate(self.stats)}
        return dict(zip(self.names, self.stats))

    def __getitem__(self, index):
        if isinstance(index, str):
            if self.names is None or index not in self.names:
                raise KeyError(index)
            return self.stats[self.names.index(index)]
        return self.stats[index]

    def __len__(self) -> int:
        return len(self.stats)

    def __iter__(self):
        return iter(self.stats)
