from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ..domain.models import Guide
from ..domain.loader import guide_to_rows, load_guide
from ..exceptions import GuideNotFoundError
from ..infrastructure.database.tables import GuideDBModel
from ..infrastructure.database import connection


# The Interface
class GuideRepository(ABC):
    """
    Defines how the application accesses Guide definitions.
    Guides are immutable once stored; saving a guide under an existing
    name replaces it for future runs without touching runs in progress.
    """

    @abstractmethod
    def get_guide(self, name: str) -> Guide:
        """
        Retrieves a guide by name.
        Raises GuideNotFoundError if not found.
        """
        pass

    @abstractmethod
    def save_guide(self, guide: Guide):
        """Stores (or replaces) a guide under its name."""
        pass

    @abstractmethod
    def list_names(self) -> List[str]:
        """Names of all stored guides, sorted."""
        pass


class InMemoryGuideRepository(GuideRepository):
    """
    Keeps guides in a dictionary for testing/dev purposes.
    """

    def __init__(self, guides: Optional[Iterable[Guide]] = None):
        # Index for O(1) lookup
        self._index: Dict[str, Guide] = {}
        for guide in guides or ():
            self.save_guide(guide)

    def get_guide(self, name: str) -> Guide:
        if name not in self._index:
            raise GuideNotFoundError(f"Guide '{name}' not found.")
        return self._index[name]

    def save_guide(self, guide: Guide):
        self._index[guide.name] = guide

    def list_names(self) -> List[str]:
        return sorted(self._index)


class DatabaseGuideRepository(GuideRepository):
    """
    Reads from and writes to the 'guides' table (rows as JSON).
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or connection.engine

    def get_guide(self, name: str) -> Guide:
        with Session(self.engine) as db:
            statement = select(GuideDBModel).where(GuideDBModel.name == name)
            result = db.exec(statement).first()

            if not result:
                raise GuideNotFoundError(f"Guide '{name}' not found in database.")

            # Deserialize JSON rows -> Guide
            return load_guide(result.rows, name=result.name)

    def save_guide(self, guide: Guide):
        rows = guide_to_rows(guide)
        with Session(self.engine) as db:
            statement = select(GuideDBModel).where(GuideDBModel.name == guide.name)
            existing = db.exec(statement).first()

            if existing:
                existing.rows = rows
                existing.updated_at = datetime.now(timezone.utc)
                db.add(existing)
            else:
                db.add(GuideDBModel(name=guide.name, rows=rows))
            db.commit()

    def list_names(self) -> List[str]:
        with Session(self.engine) as db:
            statement = select(GuideDBModel.name).order_by(GuideDBModel.name)
            return list(db.exec(statement).all())
