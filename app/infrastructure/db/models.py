"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text,
    Numeric, Date, Index, CheckConstraint
)
from sqlalchemy.sql import func

from app.infrastructure.db.database import Base


class TimeEntryModel(Base):
    """Time entry table"""
    __tablename__ = 'time_entries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    client_id = Column(Integer, nullable=False)
    project_id = Column(Integer, nullable=False)

    date = Column(Date, nullable=False)
    # Cached from date on every write
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)

    hours = Column(Numeric(5, 2), nullable=False)
    description = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    # Constraints and indexes
    __table_args__ = (
        Index('idx_time_entries_user_date', 'user_id', 'date'),
        Index('idx_time_entries_client', 'client_id'),
        Index('idx_time_entries_project', 'project_id'),
        Index('idx_time_entries_year_month', 'year', 'month'),
        Index('idx_time_entries_year_week', 'year', 'week'),
        CheckConstraint('hours > 0 AND hours <= 24', name='time_entry_hours_range'),
        CheckConstraint('month BETWEEN 1 AND 12', name='time_entry_month_range'),
        CheckConstraint('week BETWEEN 1 AND 53', name='time_entry_week_range'),
    )

    def __repr__(self):
        return f"<TimeEntryModel(id={self.id}, user_id={self.user_id}, date={self.date}, hours={self.hours})>"


class AuditLogModel(Base):
    """Audit log table. time_entry_id is not a foreign key: logs outlive entries."""
    __tablename__ = 'audit_logs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    time_entry_id = Column(Integer, nullable=False)
    user_id = Column(Integer, nullable=False)
    action = Column(String(20), nullable=False)

    # JSON snapshots of the entry
    previous_value = Column(Text)
    new_value = Column(Text)

    timestamp = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_audit_logs_time_entry', 'time_entry_id', 'timestamp'),
        CheckConstraint("action IN ('create', 'update', 'delete')", name='audit_log_valid_action'),
    )

    def __repr__(self):
        return f"<AuditLogModel(id={self.id}, time_entry_id={self.time_entry_id}, action={self.action})>"


def create_all_tables(engine):
    """Create all tables in the database"""
    Base.metadata.create_all(bind=engine)
