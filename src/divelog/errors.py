"""Exceptions for divelog."""


class DiveLogError(Exception):
    """Base exception for divelog errors."""

    pass


class NotFoundError(DiveLogError):
    """Raised when no dive exists for a given id."""

    def __init__(self, dive_id):
        self.dive_id = dive_id
        super().__init__(f"Dive {dive_id} not found")


class PersistenceError(DiveLogError):
    """Raised when the database rejects a read or write."""

    pass


class InvalidDiveError(DiveLogError, ValueError):
    """Raised when dive data from a client cannot be turned into a Dive."""

    pass
