"""
Unit tests for AuditRecorder domain service.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from app.domain.models.audit_log import AuditAction
from app.domain.models.base import StorageError
from app.domain.services.audit_recorder import AuditRecorder
from app.domain.services.clock import DeterministicClock
from app.infrastructure.repositories.memory import InMemoryStore, InMemoryAuditLogRepository


class TestAuditRecorder:
    """Test cases for AuditRecorder."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clock = DeterministicClock(datetime(2024, 3, 20, 9, 0, 0, tzinfo=timezone.utc))
        self.repository = InMemoryAuditLogRepository(InMemoryStore())
        self.recorder = AuditRecorder(self.repository, self.clock)

    @pytest.mark.asyncio
    async def test_record_assigns_id_and_timestamp(self):
        """Test the clock, not the caller, sets the timestamp."""
        log = await self.recorder.record(1, 2, AuditAction.CREATE, None, {"id": 1})

        assert log.id == 1
        assert log.timestamp == self.clock.now()
        assert log.user_id == 2
        assert log.new_value == {"id": 1}

    @pytest.mark.asyncio
    async def test_snapshots_are_stored_verbatim(self):
        """Test snapshot content is not inspected."""
        odd = {"anything": ["goes", 1]}

        log = await self.recorder.record(1, 2, AuditAction.UPDATE, odd, {})

        assert log.previous_value == odd
        assert log.new_value == {}

    @pytest.mark.asyncio
    async def test_logs_are_returned_oldest_first(self):
        """Test ordering by timestamp, then by ID."""
        await self.recorder.record(1, 1, AuditAction.CREATE, None, {"n": 1})
        self.clock.advance(5)
        await self.recorder.record(1, 1, AuditAction.UPDATE, {"n": 1}, {"n": 2})
        await self.recorder.record(1, 1, AuditAction.UPDATE, {"n": 2}, {"n": 3})
        await self.recorder.record(2, 1, AuditAction.CREATE, None, {"n": 9})

        logs = await self.recorder.get_logs_for_entry(1)

        assert [log.new_value["n"] for log in logs] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_no_logs(self):
        """Test an unknown entry has an empty trail."""
        assert await self.recorder.get_logs_for_entry(123) == []

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self):
        """Test write failures reach the caller."""
        repository = AsyncMock()
        repository.insert.side_effect = StorageError("down")
        recorder = AuditRecorder(repository, self.clock)

        with pytest.raises(StorageError):
            await recorder.record(1, 1, AuditAction.DELETE, {"id": 1}, None)
