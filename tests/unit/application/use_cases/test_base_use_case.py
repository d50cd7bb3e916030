"""
Unit tests for base use case patterns.
"""

import pytest
from pydantic import Field

from app.application.dto.base_dto import RequestDTO
from app.application.use_cases.base_use_case import (
    UseCaseResult, BaseUseCase, PaginatedQueryUseCase, parse_request
)
from app.domain.models.base import ValidationError, EntityNotFoundError, StorageError


class TestUseCaseResult:
    """Test cases for UseCaseResult."""

    def test_success_result(self):
        """Test creating successful result."""
        result = UseCaseResult.success_result({"id": 1})

        assert result.success is True
        assert result.data == {"id": 1}
        assert result.error is None
        assert result.error_code is None

    def test_error_result(self):
        """Test creating error result."""
        result = UseCaseResult.error_result("Something went wrong", "TEST_ERROR")

        assert result.success is False
        assert result.data is None
        assert result.error == "Something went wrong"
        assert result.error_code == "TEST_ERROR"

    def test_error_result_with_metadata(self):
        metadata = {"attempt": 1}
        result = UseCaseResult.error_result("Error", "ERR_001", metadata)

        assert result.metadata == metadata

    def test_from_validation_error_keeps_field(self):
        result = UseCaseResult.from_exception(ValidationError("bad hours", "hours"))

        assert result.error_code == "VALIDATION_ERROR"
        assert result.metadata == {"field": "hours"}

    def test_from_not_found(self):
        result = UseCaseResult.from_exception(EntityNotFoundError("TimeEntry", 3))

        assert result.error == "TimeEntry with id 3 not found"
        assert result.error_code == "ENTITY_NOT_FOUND"
        assert result.metadata is None


class SampleDTO(RequestDTO):
    """Small DTO for parse_request tests."""

    name: str = Field(min_length=1)
    size: int = Field(default=1, gt=0)


class TestParseRequest:
    """Test cases for parse_request."""

    def test_dict_is_validated(self):
        dto = parse_request(SampleDTO, {"name": "a", "size": "3"})

        assert dto.size == 3

    def test_dto_instance_is_passed_through(self):
        dto = SampleDTO(name="a")

        assert parse_request(SampleDTO, dto) is dto

    def test_pydantic_error_becomes_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_request(SampleDTO, {"name": "a", "size": 0})

        assert exc_info.value.field == "size"
        assert exc_info.value.message.startswith("size:")

    def test_none_means_empty_request(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_request(SampleDTO, None)

        assert exc_info.value.field == "name"


class RaisingUseCase(BaseUseCase[Exception, str]):
    """Use case that raises whatever it is given."""

    async def _execute_business_logic(self, request: Exception) -> str:
        if request is None:
            return "ok"
        raise request


class TestBaseUseCase:
    """Test cases for BaseUseCase error handling."""

    def setup_method(self):
        """Set up test fixtures."""
        self.use_case = RaisingUseCase()

    @pytest.mark.asyncio
    async def test_success_has_timing_metadata(self):
        result = await self.use_case.execute(None)

        assert result.success is True
        assert result.data == "ok"
        assert result.metadata["execution_time_seconds"] >= 0
        assert "executed_at" in result.metadata

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc,code", [
        (ValidationError("bad"), "VALIDATION_ERROR"),
        (EntityNotFoundError("TimeEntry", 1), "ENTITY_NOT_FOUND"),
        (StorageError("down", "commit"), "STORAGE_ERROR"),
    ])
    async def test_domain_errors_become_results(self, exc, code):
        """Test each domain failure kind maps to its error code."""
        result = await self.use_case.execute(exc)

        assert result.success is False
        assert result.error_code == code
        assert result.metadata["exception_type"] == type(exc).__name__

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        with pytest.raises(KeyError):
            await self.use_case.execute(KeyError("missing"))


class PageSizeUseCase(PaginatedQueryUseCase[int, int]):
    async def _validate_request(self, request: int) -> int:
        self._check_page_size(request)
        return request

    async def _execute_business_logic(self, request: int) -> int:
        return request


class TestPaginatedQueryUseCase:
    """Test cases for page size limits."""

    def test_defaults_come_from_settings(self):
        use_case = PageSizeUseCase()

        assert use_case.default_page_size == 20
        assert use_case.max_page_size == 100

    @pytest.mark.asyncio
    async def test_page_size_over_limit(self):
        result = await PageSizeUseCase(max_page_size=5).execute(6)

        assert result.error_code == "VALIDATION_ERROR"
        assert result.metadata["field"] == "page_size"

    @pytest.mark.asyncio
    async def test_page_size_at_limit(self):
        result = await PageSizeUseCase(max_page_size=5).execute(5)

        assert result.success is True
