import logging
from dataclasses import replace
from datetime import date
from typing import List

from divelog import db
from divelog.dive.models import DATA_FIELDS, DIVE_FIELDS, TABLE_NAME, BatchUpdateResult, Dive
from divelog.errors import NotFoundError

logger = logging.getLogger(__name__)

_COLUMNS = ", ".join(f.column for f in DIVE_FIELDS)
_SELECT = f"SELECT {_COLUMNS} FROM {TABLE_NAME}"
_INSERT = (
    f"INSERT INTO {TABLE_NAME} ({', '.join(f.column for f in DATA_FIELDS)}) "
    f"VALUES ({', '.join(f'%({f.attribute})s' for f in DATA_FIELDS)}) "
    f"RETURNING {_COLUMNS}"
)
_UPDATE = (
    f"UPDATE {TABLE_NAME} SET {', '.join(f'{f.column} = %({f.attribute})s' for f in DATA_FIELDS)} "
    f"WHERE d_id = %(id)s"
)


class DiveRepository:
    """
    Repository for dive data access.
    Encapsulates all SQL and queries for the dives table.

    Mutations return what the table holds afterwards (RETURNING or a
    re-read), never the object that was passed in.
    """

    def save(self, dive: Dive) -> Dive:
        """Insert a dive and return it with its new id. Any id on the input is ignored."""
        row = db.fetch_one(_INSERT, dive.to_params())
        logger.debug("Inserted dive %s", row["d_id"])
        return Dive.from_row(row)

    def get_all_dives(self) -> List[Dive]:
        """List all dives in insertion order."""
        return self._find(f"{_SELECT} ORDER BY d_id")

    def get_dives_from_date(self, dive_date: date) -> List[Dive]:
        """Get all dives made on a given date."""
        return self._find(f"{_SELECT} WHERE d_date = %s ORDER BY d_id", (dive_date,))

    def get_dives_from_location(self, location: str) -> List[Dive]:
        """Get all dives made at a given location."""
        return self._find(f"{_SELECT} WHERE d_location = %s ORDER BY d_id", (location,))

    def get_dives_from_date_and_location(self, dive_date: date, location: str) -> List[Dive]:
        """Get all dives made at a given location on a given date."""
        return self._find(
            f"{_SELECT} WHERE d_date = %s AND d_location = %s ORDER BY d_id",
            (dive_date, location),
        )

    def get_dive_from_id(self, dive_id: int) -> Dive:
        """
        Get a dive by its ID.

        Raises:
            NotFoundError: if no dive has this id
        """
        row = db.fetch_one(f"{_SELECT} WHERE d_id = %s", (dive_id,))
        if row is None:
            raise NotFoundError(dive_id)
        return Dive.from_row(row)

    def delete_all_dives(self) -> List[Dive]:
        """Delete every dive, returning the dives that existed just before."""
        rows = db.fetch_all(f"DELETE FROM {TABLE_NAME} RETURNING {_COLUMNS}")
        return sorted((Dive.from_row(row) for row in rows), key=lambda d: d.id)

    def delete_dive_from_id(self, dive_id: int) -> Dive:
        """
        Delete a dive by its ID and return it.

        The row is locked and read before it is removed, in one transaction.

        Raises:
            NotFoundError: if no dive has this id
        """
        with db.get_cursor() as cur:
            cur.execute(f"{_SELECT} WHERE d_id = %s FOR UPDATE", (dive_id,))
            row = cur.fetchone()
            if row is None:
                raise NotFoundError(dive_id)
            cur.execute(f"DELETE FROM {TABLE_NAME} WHERE d_id = %s", (dive_id,))
        return Dive.from_row(row)

    def update_multiple_dives(self, dives: List[Dive]) -> BatchUpdateResult:
        """
        Replace every field but the id of each dive, matched by its own id.

        The whole batch runs in one transaction: if the database fails on
        any item, no item is updated. Items without an id, or whose id is
        not in the table, are reported as unmatched.
        """
        result = BatchUpdateResult()
        with db.get_cursor() as cur:
            for dive in dives:
                if dive.id is None:
                    result.unmatched.append(dive)
                    continue
                cur.execute(f"{_UPDATE} RETURNING {_COLUMNS}", dive.to_params())
                row = cur.fetchone()
                if row is None:
                    result.unmatched.append(dive)
                else:
                    result.updated.append(Dive.from_row(row))
        return result

    def update_dive_from_id(self, dive_id: int, dive: Dive) -> Dive:
        """
        Replace every field of a dive, then re-read it.

        Raises:
            NotFoundError: if no dive has this id
        """
        db.execute(_UPDATE, replace(dive, id=dive_id).to_params())
        return self.get_dive_from_id(dive_id)

    def get_statistic_inputs(self) -> dict:
        """
        Get the dive count, every duration and every max depth.

        One statement, so all three describe the same state of the table.
        Returns a dict with total_number_of_dives, durations_in_minutes
        and depths_in_meters.
        """
        return db.fetch_one(
            f"""
            SELECT
                count(*) AS total_number_of_dives,
                coalesce(array_agg(d_duration_in_minutes ORDER BY d_id), '{{}}') AS durations_in_minutes,
                coalesce(array_agg(d_max_depth_in_meters ORDER BY d_id), '{{}}') AS depths_in_meters
            FROM {TABLE_NAME}
            """
        )

    def _find(self, query: str, params: tuple = None) -> List[Dive]:
        return [Dive.from_row(row) for row in db.fetch_all(query, params)]
