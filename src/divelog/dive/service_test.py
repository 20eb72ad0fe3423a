"""
Unit tests for DiveService against a mocked repository.

Run with: pytest src/divelog/dive/service_test.py -v
"""
from dataclasses import replace
from datetime import date

import pytest

from divelog.dive.models import BatchUpdateResult
from divelog.dive.service import DiveService
from divelog.errors import NotFoundError, PersistenceError


class TestCreateDive:
    """Tests for DiveService.create_dive()"""

    def test_create_returns_saved_dive(self, mock_repository, make_dive):
        dive = make_dive()
        saved = replace(dive, id=1)
        mock_repository.save.return_value = saved
        service = DiveService(mock_repository)

        result = service.create_dive(dive)

        mock_repository.save.assert_called_once_with(dive)
        assert result is saved

    def test_create_propagates_persistence_error(self, mock_repository, make_dive):
        mock_repository.save.side_effect = PersistenceError("connection lost")
        service = DiveService(mock_repository)

        with pytest.raises(PersistenceError, match="connection lost"):
            service.create_dive(make_dive())


class TestListDives:
    """Tests for DiveService.list_dives()"""

    def test_no_filter_lists_all(self, mock_repository):
        mock_repository.get_all_dives.return_value = []
        service = DiveService(mock_repository)

        assert service.list_dives() == []
        mock_repository.get_all_dives.assert_called_once_with()

    def test_date_filter(self, mock_repository):
        service = DiveService(mock_repository)

        service.list_dives(dive_date=date(2024, 5, 1))

        mock_repository.get_dives_from_date.assert_called_once_with(date(2024, 5, 1))
        mock_repository.get_all_dives.assert_not_called()

    def test_location_filter(self, mock_repository):
        service = DiveService(mock_repository)

        service.list_dives(location="Canyon")

        mock_repository.get_dives_from_location.assert_called_once_with("Canyon")

    def test_date_and_location_filter(self, mock_repository):
        service = DiveService(mock_repository)

        service.list_dives(dive_date=date(2024, 5, 1), location="Canyon")

        mock_repository.get_dives_from_date_and_location.assert_called_once_with(
            date(2024, 5, 1), "Canyon"
        )
        mock_repository.get_dives_from_date.assert_not_called()
        mock_repository.get_dives_from_location.assert_not_called()


class TestGetDive:
    """Tests for DiveService.get_dive()"""

    def test_get_dive(self, mock_repository, make_dive):
        dive = make_dive(id=5)
        mock_repository.get_dive_from_id.return_value = dive
        service = DiveService(mock_repository)

        assert service.get_dive(5) is dive
        mock_repository.get_dive_from_id.assert_called_once_with(5)

    def test_get_dive_not_found(self, mock_repository):
        mock_repository.get_dive_from_id.side_effect = NotFoundError(5)
        service = DiveService(mock_repository)

        with pytest.raises(NotFoundError) as exc_info:
            service.get_dive(5)

        assert exc_info.value.dive_id == 5


class TestUpdates:
    """Tests for DiveService.update_dive() and update_dives()"""

    def test_update_dive_returns_repository_state(self, mock_repository, make_dive):
        stored = make_dive(id=2, location="Stored")
        mock_repository.update_dive_from_id.return_value = stored
        service = DiveService(mock_repository)

        result = service.update_dive(2, make_dive(location="Requested"))

        assert result is stored

    def test_update_dives_returns_batch_result(self, mock_repository, make_dive):
        matched = make_dive(id=1)
        missing = make_dive(id=42)
        batch = BatchUpdateResult(updated=[matched], unmatched=[missing])
        mock_repository.update_multiple_dives.return_value = batch
        service = DiveService(mock_repository)

        result = service.update_dives([matched, missing])

        mock_repository.update_multiple_dives.assert_called_once_with([matched, missing])
        assert result.rows_changed == 1
        assert result.complete is False


class TestDeletes:
    """Tests for DiveService.delete_dive() and delete_all_dives()"""

    def test_delete_dive(self, mock_repository, make_dive):
        dive = make_dive(id=3)
        mock_repository.delete_dive_from_id.return_value = dive
        service = DiveService(mock_repository)

        assert service.delete_dive(3) is dive

    def test_delete_dive_not_found(self, mock_repository):
        mock_repository.delete_dive_from_id.side_effect = NotFoundError(3)
        service = DiveService(mock_repository)

        with pytest.raises(NotFoundError):
            service.delete_dive(3)

    def test_delete_all_dives(self, mock_repository, make_dive):
        dives = [make_dive(id=1), make_dive(id=2)]
        mock_repository.delete_all_dives.return_value = dives
        service = DiveService(mock_repository)

        assert service.delete_all_dives() == dives
