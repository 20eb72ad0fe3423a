"""Divelog: a record keeper for scuba dive logs."""

__version__ = "0.1.0"
