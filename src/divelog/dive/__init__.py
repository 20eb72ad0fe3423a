"""
Dive

This package provides the dive entity, its repository and its service.
"""

from divelog.dive.models import BatchUpdateResult, Dive
from divelog.dive.repository import DiveRepository
from divelog.dive.service import DiveService

__all__ = ["BatchUpdateResult", "Dive", "DiveRepository", "DiveService"]
