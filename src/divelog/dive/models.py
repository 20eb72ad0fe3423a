"""
Dive entity and its mapping onto the dives table.

DIVE_FIELDS is the single source of truth for how a Dive attribute is
named on the wire (JSON) and in the database. The repository builds its
SQL from it and rows are converted through it; nothing is bound by
introspection.
"""

import math
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Any, List, NamedTuple, Optional

from divelog.errors import InvalidDiveError

TABLE_NAME = "dives"

# Upper bound of a PostgreSQL INTEGER column
MAX_DURATION_IN_MINUTES = 2**31 - 1


class FieldMapping(NamedTuple):
    attribute: str
    json_key: str
    column: str


DIVE_FIELDS = (
    FieldMapping("id", "id", "d_id"),
    FieldMapping("date", "date", "d_date"),
    FieldMapping("location", "location", "d_location"),
    FieldMapping("duration_in_minutes", "durationInMinutes", "d_duration_in_minutes"),
    FieldMapping("max_depth_in_meters", "maxDepthInMeters", "d_max_depth_in_meters"),
    FieldMapping("water_conditions", "waterConditions", "d_water_conditions"),
    FieldMapping("performed_safety_stop", "performedSafetyStop", "d_performed_safety_stop"),
)

# Every field except the store-assigned id
DATA_FIELDS = tuple(f for f in DIVE_FIELDS if f.attribute != "id")


@dataclass
class Dive:
    date: Date
    location: str
    duration_in_minutes: int
    max_depth_in_meters: float
    water_conditions: str
    performed_safety_stop: bool
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict) -> "Dive":
        """Build a Dive from a database row keyed by column name."""
        return cls(**{f.attribute: row[f.column] for f in DIVE_FIELDS})

    def to_params(self) -> dict:
        """Named query parameters (%(attribute)s) for every field."""
        return {f.attribute: getattr(self, f.attribute) for f in DIVE_FIELDS}

    def to_json(self) -> dict:
        data = {f.json_key: getattr(self, f.attribute) for f in DIVE_FIELDS}
        data["date"] = self.date.isoformat()
        return data

    @classmethod
    def from_json(cls, data: Any) -> "Dive":
        """
        Parse a dive from a decoded JSON request body.

        The id is optional and kept when present; callers decide whether
        it means anything (create ignores it, batch update matches on it).

        Raises:
            InvalidDiveError: if a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidDiveError("Dive must be a JSON object")

        missing = [f.json_key for f in DATA_FIELDS if data.get(f.json_key) is None]
        if missing:
            raise InvalidDiveError(f"Missing dive fields: {', '.join(missing)}")

        dive_id = data.get("id")
        if dive_id is not None and not _is_int(dive_id):
            raise InvalidDiveError("id must be an integer")

        return cls(
            id=dive_id,
            date=parse_date(data["date"]),
            location=_require_str(data, "location"),
            duration_in_minutes=_parse_duration(data["durationInMinutes"]),
            max_depth_in_meters=_parse_depth(data["maxDepthInMeters"]),
            water_conditions=_require_str(data, "waterConditions"),
            performed_safety_stop=_parse_bool(data["performedSafetyStop"]),
        )


@dataclass
class BatchUpdateResult:
    """Outcome of a batch update, item by item."""

    updated: List[Dive] = field(default_factory=list)
    unmatched: List[Dive] = field(default_factory=list)

    @property
    def rows_changed(self) -> int:
        return len(self.updated)

    @property
    def complete(self) -> bool:
        return not self.unmatched

    def to_json(self) -> dict:
        return {
            "updated": [d.to_json() for d in self.updated],
            "unmatched": [d.to_json() for d in self.unmatched],
            "rowsChanged": self.rows_changed,
            "complete": self.complete,
        }


def _is_int(value: Any) -> bool:
    # bool is a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


def parse_date(value: Any) -> Date:
    """Parse an ISO date (YYYY-MM-DD), raising InvalidDiveError on bad input."""
    if isinstance(value, Date):
        return value
    if not isinstance(value, str):
        raise InvalidDiveError("date must be an ISO date string (YYYY-MM-DD)")
    try:
        return Date.fromisoformat(value)
    except ValueError:
        raise InvalidDiveError(f"Invalid date: {value!r}") from None


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise InvalidDiveError(f"{key} must be a string")
    return value


def _parse_duration(value: Any) -> int:
    if not _is_int(value):
        raise InvalidDiveError("durationInMinutes must be an integer")
    if value < 0:
        raise InvalidDiveError("durationInMinutes must not be negative")
    if value > MAX_DURATION_IN_MINUTES:
        raise InvalidDiveError(f"durationInMinutes must not exceed {MAX_DURATION_IN_MINUTES}")
    return value


def _parse_depth(value: Any) -> float:
    if not (_is_int(value) or isinstance(value, float)):
        raise InvalidDiveError("maxDepthInMeters must be a number")
    try:
        depth = float(value)
    except OverflowError:
        # int too large for a float
        depth = math.inf
    if not math.isfinite(depth):
        raise InvalidDiveError("maxDepthInMeters must be a finite number")
    if depth < 0:
        raise InvalidDiveError("maxDepthInMeters must not be negative")
    return depth


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidDiveError("performedSafetyStop must be a boolean")
    return value
