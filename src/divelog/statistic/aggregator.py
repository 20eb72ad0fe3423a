"""
Dive statistics.

compute_statistic() turns the dive count, every dive duration and every
dive max depth into a DiveStatistic. It does no I/O; the caller is
responsible for reading all three inputs from the same state of the store.

With no dives, the totals are 0 and the average, minimum and maximum
are None ("no data"), serialized as null.
"""

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class DiveStatistic:
    total_number_of_dives: int
    total_time_underwater_in_minutes: int
    average_time_underwater_in_minutes: Optional[float]
    max_depth_in_meters: Optional[float]
    min_depth_in_meters: Optional[float]

    def to_json(self) -> dict:
        return {
            "totalNumberOfDives": self.total_number_of_dives,
            "totalTimeUnderwaterInMinutes": self.total_time_underwater_in_minutes,
            "averageTimeUnderwaterInMinutes": self.average_time_underwater_in_minutes,
            "maxDepthInMeters": self.max_depth_in_meters,
            "minDepthInMeters": self.min_depth_in_meters,
        }


def compute_statistic(
    total_number_of_dives: int,
    durations_in_minutes: Sequence[int],
    depths_in_meters: Sequence[float],
) -> DiveStatistic:
    """
    Build a DiveStatistic from raw per-dive values.

    Args:
        total_number_of_dives: Number of dives in the store
        durations_in_minutes: Duration of every dive
        depths_in_meters: Max depth of every dive

    Raises:
        ValueError: if the count is negative or does not match the sequences
    """
    if total_number_of_dives < 0:
        raise ValueError(f"Dive count cannot be negative: {total_number_of_dives}")
    if len(durations_in_minutes) != total_number_of_dives or len(depths_in_meters) != total_number_of_dives:
        raise ValueError(
            f"Expected {total_number_of_dives} durations and depths, got "
            f"{len(durations_in_minutes)} durations and {len(depths_in_meters)} depths"
        )

    total_time = sum(durations_in_minutes)

    if total_number_of_dives == 0:
        return DiveStatistic(
            total_number_of_dives=0,
            total_time_underwater_in_minutes=total_time,
            average_time_underwater_in_minutes=None,
            max_depth_in_meters=None,
            min_depth_in_meters=None,
        )

    return DiveStatistic(
        total_number_of_dives=total_number_of_dives,
        total_time_underwater_in_minutes=total_time,
        average_time_underwater_in_minutes=total_time / total_number_of_dives,
        max_depth_in_meters=float(max(depths_in_meters)),
        min_depth_in_meters=float(min(depths_in_meters)),
    )
