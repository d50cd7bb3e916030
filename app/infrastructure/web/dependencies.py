"""
FastAPI dependencies for the web layer.
Builds a unit of work per request and turns use case results into HTTP responses.
"""

from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status

from app.config import settings
from app.application.use_cases.base_use_case import UseCaseResult
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.clock import Clock, SystemClock
from app.domain.services.time_entry_service import TimeEntryService
from app.domain.services.aggregation_service import AggregationService
from app.infrastructure.db.database import SessionLocal
from app.infrastructure.repositories.memory import InMemoryStore, InMemoryUnitOfWork
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork


ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "STORAGE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
}


@lru_cache()
def get_memory_store() -> InMemoryStore:
    """Process-wide store for the memory backend."""
    return InMemoryStore()


def get_unit_of_work() -> UnitOfWork:
    """Dependency to get a fresh unit of work for the configured backend."""
    if settings.storage_backend == "memory":
        return InMemoryUnitOfWork(get_memory_store())
    return SQLAlchemyUnitOfWork(SessionLocal)


def get_clock() -> Clock:
    """Dependency to get the clock."""
    return SystemClock()


def get_time_entry_service(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> TimeEntryService:
    """Dependency to get the time entry mutation service."""
    return TimeEntryService(uow, clock)


def get_aggregation_service(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
) -> AggregationService:
    """Dependency to get the reporting service."""
    return AggregationService(uow)


def unwrap(result: UseCaseResult) -> Any:
    """Return the result data or raise the matching HTTPException."""
    if result.success:
        return result.data

    raise HTTPException(
        status_code=ERROR_STATUS_CODES.get(result.error_code, status.HTTP_400_BAD_REQUEST),
        detail={
            "code": result.error_code,
            "message": result.error,
            **({"field": result.metadata["field"]} if result.metadata and "field" in result.metadata else {}),
        },
    )
