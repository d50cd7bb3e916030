"""
Infrastructure layer for the team time tracking service.

This layer contains the implementation details behind the domain ports:
- Database (SQLAlchemy, Alembic migrations)
- In-memory storage for tests and local runs
- Web API (FastAPI routers, dependencies and middleware)

The infrastructure layer implements interfaces defined in the domain layer,
following the Dependency Inversion Principle of Clean Architecture.
"""
