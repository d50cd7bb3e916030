"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic, Type
from dataclasses import dataclass
from datetime import datetime, timezone

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.config import settings
from app.domain.models.base import DomainException, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')
D = TypeVar('D', bound=BaseModel)


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: DomainException) -> "UseCaseResult[T]":
        """Create error result from a domain exception."""
        result = cls.error_result(exc.message, exc.code)
        field = getattr(exc, "field", None)
        if field:
            result.metadata = {"field": field}
        return result


def parse_request(dto_class: Type[D], request: Any) -> D:
    """
    Validate a request into a DTO.
    Pydantic failures become the domain ValidationError.
    """
    if isinstance(request, dto_class):
        return request
    if isinstance(request, BaseModel):
        request = request.model_dump(exclude_unset=True)
    try:
        return dto_class.model_validate(request or {})
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Provides common structure and error handling.

    Only domain exceptions are turned into error results; anything else
    propagates to the caller unchanged.
    """

    def __init__(self):
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = datetime.now(timezone.utc)

        try:
            # Validate input
            request = await self._validate_request(request)

            # Execute business logic
            result = await self._execute_business_logic(request)

        except DomainException as exc:
            self.execution_end = datetime.now(timezone.utc)
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            log = logger.error if exc.code == "STORAGE_ERROR" else logger.info
            log(f"{type(self).__name__} failed with {exc.code}: {exc.message}")

            error_result = UseCaseResult.from_exception(exc)
            error_result.metadata = {
                **(error_result.metadata or {}),
                "execution_time_seconds": execution_time,
                "failed_at": self.execution_end.isoformat(),
                "exception_type": type(exc).__name__
            }
            return error_result

        self.execution_end = datetime.now(timezone.utc)
        execution_time = (self.execution_end - self.execution_start).total_seconds()

        return UseCaseResult.success_result(
            result,
            metadata={
                "execution_time_seconds": execution_time,
                "executed_at": self.execution_end.isoformat()
            }
        )

    async def _validate_request(self, request: T) -> Any:
        """
        Validate the request and return the value to execute with.
        Override in subclasses if needed.
        """
        return request

    @abstractmethod
    async def _execute_business_logic(self, request: Any) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    The unit of work used by the domain service owns the transaction.
    """
    pass


class PaginatedQueryUseCase(QueryUseCase[T, R]):
    """
    Base class for paginated query use cases.
    """

    def __init__(
        self,
        default_page_size: Optional[int] = None,
        max_page_size: Optional[int] = None
    ):
        super().__init__()
        self.default_page_size = default_page_size or settings.default_page_size
        self.max_page_size = max_page_size or settings.max_page_size

    def _check_page_size(self, page_size: int) -> None:
        if page_size > self.max_page_size:
            raise ValidationError(f"Page size cannot exceed {self.max_page_size}", "page_size")
        if page_size < 1:
            raise ValidationError("Page size must be positive", "page_size")
