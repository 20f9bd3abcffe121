"""
Database Table Definitions.

This module defines the SQL schema using SQLModel.
We use the 'DBModel' suffix to distinguish these persistence models
from the domain models (Guide, IncidentUpdate).
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests and local runs)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GuideDBModel(SQLModel, table=True):
    """
    Persistence model for Guides.
    Maps 1-to-1 with the 'guides' table.
    """

    __tablename__ = "guides"

    name: str = Field(primary_key=True)

    # Steps are stored as the row mappings they were loaded from.
    rows: List[Dict[str, Any]] = Field(sa_column=Column(JSONType, nullable=False))

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class IncidentUpdateDBModel(SQLModel, table=True):
    """
    Persistence model for incident updates (append-only).
    Maps 1-to-1 with the 'incident_updates' table.
    """

    __tablename__ = "incident_updates"

    record_id: Optional[int] = Field(default=None, primary_key=True)
    incident_id: str = Field(index=True)
    title: str = ""
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    verdict: str = Field(default="", sa_column=Column(Text, nullable=False))
    logs: List[str] = Field(sa_column=Column(JSONType, nullable=False))
    ts: datetime = Field(default_factory=_utcnow)
