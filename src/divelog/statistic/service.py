import logging

from divelog.dive.repository import DiveRepository
from divelog.statistic.aggregator import DiveStatistic, compute_statistic

logger = logging.getLogger(__name__)


class StatisticsService:
    """
    Computes dive statistics from the current contents of the store.
    Nothing is cached; every call reads the store again.
    """

    def __init__(self, repository: DiveRepository):
        self.repository = repository

    def get_dive_statistic(self) -> DiveStatistic:
        inputs = self.repository.get_statistic_inputs()
        statistic = compute_statistic(
            inputs["total_number_of_dives"],
            inputs["durations_in_minutes"],
            inputs["depths_in_meters"],
        )
        logger.debug("Computed statistics over %d dives", statistic.total_number_of_dives)
        return statistic
