"""
Guide Loader.

Turns already-tabular input (one mapping per spreadsheet row) into a Guide.
Column names follow the spreadsheet headers (camelCase); snake_case aliases
are accepted as well so that JSON payloads can use either.
"""

import csv
import io
import logging
from typing import Any, Iterable, List, Mapping, Optional

from .models import Guide, Step

logger = logging.getLogger(__name__)

# Step attribute -> accepted column names
COLUMNS = {
    "id": ("id",),
    "description": ("description",),
    "command": ("command",),
    "expect_pattern": ("expectPattern", "expect_pattern"),
    "next_on_match": ("nextOnMatch", "next_on_match"),
    "next_on_no_match": ("nextOnNoMatch", "next_on_no_match"),
}


def _cell(row: Mapping[str, Any], attribute: str) -> Optional[str]:
    """Read a cell as a stripped string. Blank cells become None."""
    for column in COLUMNS[attribute]:
        value = row.get(column)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def step_from_row(row: Mapping[str, Any], position: int) -> Step:
    """
    Build a Step from a single row.

    Args:
        row: Mapping of column name to cell value.
        position: 1-based row position, used when the id cell is blank.
    """
    return Step(
        id=_cell(row, "id") or str(position),
        description=_cell(row, "description") or "",
        command=_cell(row, "command"),
        expect_pattern=_cell(row, "expect_pattern"),
        next_on_match=_cell(row, "next_on_match"),
        next_on_no_match=_cell(row, "next_on_no_match"),
    )


def load_guide(rows: Iterable[Mapping[str, Any]], name: str = "Guide") -> Guide:
    """
    Build a Guide from tabular rows.

    Raises:
        DuplicateStepIdError: Two rows resolve to the same id (explicit or
            positional). Guides are rejected rather than silently overwritten.
    """
    steps = [step_from_row(row, position) for position, row in enumerate(rows, start=1)]
    guide = Guide(name=name or "Guide", steps=steps)
    logger.debug(f"Loaded guide '{guide.name}' with {len(guide)} steps")
    return guide


def rows_from_csv(text: str) -> List[dict]:
    """Parse CSV text with a header row into row mappings for load_guide()."""
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    return [dict(row) for row in reader]


def guide_to_rows(guide: Guide) -> List[dict]:
    """Inverse of load_guide(): one camelCase row per step, blanks omitted."""
    rows = []
    for step in guide.steps:
        row = {
            "id": step.id,
            "description": step.description,
            "command": step.command,
            "expectPattern": step.expect_pattern,
            "nextOnMatch": step.next_on_match,
            "nextOnNoMatch": step.next_on_no_match,
        }
        rows.append({key: value for key, value in row.items() if value})
    return rows
