"""
Statistic

This package derives aggregate statistics over the logged dives.
"""

from divelog.statistic.aggregator import DiveStatistic, compute_statistic
from divelog.statistic.service import StatisticsService

__all__ = ["DiveStatistic", "StatisticsService", "compute_statistic"]
