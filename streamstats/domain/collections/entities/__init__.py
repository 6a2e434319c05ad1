# streamstats/domain/collections/entities/__init__.py
"""
Composite statistics built only from the OnlineStat contract:
Group, Series, FTSeries and GroupBy.
"""

from .stat_collection import StatCollection, common_input_type
from .group import Group
from .series import Series
from .ft_series import FTSeries, keep_all, identity
from .group_by import GroupBy

__all__ = [
    'StatCollection',
    'common_input_type',
    'Group',
    'Series',
    'FTSeries',
    'keep_all',
    'identity',
    'GroupBy',
]
