"""
Domain Layer - Static Data Models

Defines the core domain model representing the static structure of
incident runbooks: Guides and Steps, plus the tabular loader.
"""

from incident_triage.domain.models import (
    Guide,
    Step,
)
from incident_triage.domain.loader import guide_to_rows, load_guide, rows_from_csv

__all__ = [
    "Guide",
    "Step",
    "guide_to_rows",
    "load_guide",
    "rows_from_csv",
]
