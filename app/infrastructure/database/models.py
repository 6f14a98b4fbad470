# app/infrastructure/database/models.py

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, BigInteger, Column, Date, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from app.infrastructure.database.session import AuditBase, Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BaseModel(Base):
    __abstract__ = True

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow, nullable=True)


class ProjectModel(BaseModel):
    __tablename__ = "projects"

    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    deadline = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, index=True)


class DeveloperModel(BaseModel):
    __tablename__ = "developers"

    name = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    skills = Column(String(500), nullable=True)


class TaskModel(BaseModel):
    __tablename__ = "tasks"

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, index=True)
    due_date = Column(Date, nullable=True, index=True)
    project_id = Column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    developer_id = Column(
        Uuid, ForeignKey("developers.id", ondelete="SET NULL"), nullable=True, index=True
    )


class AuditLogModel(AuditBase):
    """Schema-less audit document: fixed lookup columns plus a JSON payload. Insert and delete only."""

    __tablename__ = "audit_logs"

    # Insertion order; breaks ties between equal timestamps. SQLite only autoincrements INTEGER keys.
    seq = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))
    action_type = Column(String(10), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False, index=True)
    entity_id = Column(String(64), nullable=False, index=True)
    actor_name = Column(String(100), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    payload = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)
