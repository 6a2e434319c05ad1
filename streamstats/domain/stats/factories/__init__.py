# streamstats/domain/stats/factories/__init__.py
from .stat_factory import StatFactory

__all__ = ['StatFactory']
