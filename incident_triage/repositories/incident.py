"""
Incident Update Store.

Append-only record of verdicts posted against incidents. The store is
owned by whoever constructs it (the API composition root, or a test) and
injected where needed; there is no module-level list.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy import func, select as sa_select
from sqlmodel import Session, select

from ..state.models import IncidentUpdate
from ..infrastructure.database.tables import IncidentUpdateDBModel
from ..infrastructure.database import connection

logger = logging.getLogger(__name__)

# Only the tail of a run log is kept with an update
MAX_LOG_LINES = 2000


class IncidentUpdateStore(ABC):
    """
    Defines how the application records incident updates.
    Records are never modified or removed once appended.
    """

    @abstractmethod
    def append(self, update: IncidentUpdate) -> int:
        """Appends a record. Returns the number of records stored."""
        pass

    @abstractmethod
    def list_updates(self) -> List[IncidentUpdate]:
        """All records, oldest first."""
        pass


class InMemoryIncidentUpdateStore(IncidentUpdateStore):
    """
    Uses an in-memory list for testing/dev purposes.
    """

    def __init__(self):
        self._updates: List[IncidentUpdate] = []
        self._lock = threading.Lock()

    def append(self, update: IncidentUpdate) -> int:
        record = update.model_copy(update={"logs": update.logs[-MAX_LOG_LINES:]})
        with self._lock:
            self._updates.append(record)
            count = len(self._updates)
        logger.info(f"Recorded update for incident {update.id} ({count} total)")
        return count

    def list_updates(self) -> List[IncidentUpdate]:
        with self._lock:
            return list(self._updates)


class DatabaseIncidentUpdateStore(IncidentUpdateStore):
    """
    Appends to the 'incident_updates' table.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or connection.engine

    def append(self, update: IncidentUpdate) -> int:
        with Session(self.engine) as db:
            db.add(IncidentUpdateDBModel(
                incident_id=update.id,
                title=update.title,
                description=update.description,
                verdict=update.verdict,
                logs=update.logs[-MAX_LOG_LINES:],
                ts=update.ts,
            ))
            db.commit()
            count = db.scalar(sa_select(func.count()).select_from(IncidentUpdateDBModel))
        logger.info(f"Recorded update for incident {update.id} ({count} total)")
        return count

    def list_updates(self) -> List[IncidentUpdate]:
        with Session(self.engine) as db:
            statement = select(IncidentUpdateDBModel).order_by(IncidentUpdateDBModel.record_id)
            return [
                IncidentUpdate(
                    id=row.incident_id,
                    title=row.title,
                    description=row.description,
                    verdict=row.verdict,
                    logs=row.logs,
                    ts=row.ts,
                )
                for row in db.exec(statement).all()
            ]
