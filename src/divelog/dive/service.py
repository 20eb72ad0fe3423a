import logging
from datetime import date
from typing import List

from divelog.dive.models import BatchUpdateResult, Dive
from divelog.dive.repository import DiveRepository

logger = logging.getLogger(__name__)


class DiveService:
    """
    Dive use cases on top of a DiveRepository.

    Repository errors (NotFoundError, PersistenceError) propagate unchanged.
    """

    def __init__(self, repository: DiveRepository):
        self.repository = repository

    def create_dive(self, dive: Dive) -> Dive:
        created = self.repository.save(dive)
        logger.info("Logged dive %s at %s on %s", created.id, created.location, created.date)
        return created

    def list_dives(self, dive_date: date = None, location: str = None) -> List[Dive]:
        """List dives, optionally filtered by date and/or location."""
        if dive_date is not None and location is not None:
            return self.repository.get_dives_from_date_and_location(dive_date, location)
        if dive_date is not None:
            return self.repository.get_dives_from_date(dive_date)
        if location is not None:
            return self.repository.get_dives_from_location(location)
        return self.repository.get_all_dives()

    def get_dive(self, dive_id: int) -> Dive:
        return self.repository.get_dive_from_id(dive_id)

    def update_dive(self, dive_id: int, dive: Dive) -> Dive:
        updated = self.repository.update_dive_from_id(dive_id, dive)
        logger.info("Updated dive %s", dive_id)
        return updated

    def update_dives(self, dives: List[Dive]) -> BatchUpdateResult:
        result = self.repository.update_multiple_dives(dives)
        if result.complete:
            logger.info("Updated %d dives", result.rows_changed)
        else:
            logger.warning(
                "Updated %d of %d dives; unmatched ids: %s",
                result.rows_changed,
                len(dives),
                [d.id for d in result.unmatched],
            )
        return result

    def delete_dive(self, dive_id: int) -> Dive:
        deleted = self.repository.delete_dive_from_id(dive_id)
        logger.info("Deleted dive %s", dive_id)
        return deleted

    def delete_all_dives(self) -> List[Dive]:
        deleted = self.repository.delete_all_dives()
        logger.info("Deleted all %d dives", len(deleted))
        return deleted
