"""Seed sample dives into the database."""
from datetime import date

from divelog.dive import Dive, DiveRepository

SAMPLE_DIVES = [
    Dive(date(2024, 3, 2), "Blue Hole, Dahab", 42, 29.5, "calm, 26C, 30m visibility", True),
    Dive(date(2024, 3, 2), "Canyon, Dahab", 38, 24.0, "light current", True),
    Dive(date(2024, 6, 15), "Silfra, Iceland", 35, 18.0, "2C, 100m visibility", False),
    Dive(date(2024, 9, 21), "Shark Point, Phuket", 51, 22.3, "surge, 28C", True),
]


def main():
    dives_repo = DiveRepository()

    existing = {(d.date, d.location) for d in dives_repo.get_all_dives()}
    for dive in SAMPLE_DIVES:
        if (dive.date, dive.location) in existing:
            print(f"Skipping {dive.location} on {dive.date} - already exists")
            continue

        result = dives_repo.save(dive)
        print(f"Created: {result.location} on {result.date} (id={result.id})")


if __name__ == "__main__":
    main()
