"""
Delimited table encoding.

Tables use ";" between cells and "\n" between rows. Cells that a
spreadsheet would evaluate as formulas are neutralized with a leading
apostrophe.
"""
from typing import Callable, Iterable, List, Sequence, TypeVar

from patient_export.config.export_settings import (
    CSV_FIELD_DELIMITER,
    CSV_ROW_DELIMITER,
    FORMULA_PREFIXES,
)
from patient_export.core.exceptions import ValidationError

T = TypeVar("T")

_QUOTE_TRIGGERS = (CSV_FIELD_DELIMITER, CSV_ROW_DELIMITER, '"')


def encode_field(raw: str) -> str:
    """Escape a single cell.

    Args:
        raw: Cell text

    Returns:
        Cell text safe to place between delimiters
    """
    if raw.startswith(FORMULA_PREFIXES):
        raw = "'" + raw
    if any(trigger in raw for trigger in _QUOTE_TRIGGERS):
        return '"' + raw.replace('"', '""') + '"'
    return raw


def encode_row(cells: Iterable[str]) -> str:
    return CSV_FIELD_DELIMITER.join(encode_field(cell) for cell in cells)


def build_table(
    headers: Sequence[str],
    records: Iterable[T],
    project: Callable[[T], List[str]],
) -> bytes:
    """Build one complete table (header row plus one row per record).

    Row order follows the iteration order of records.

    Args:
        headers: Column names
        records: Records to project
        project: Maps a record to exactly len(headers) cells in header order

    Returns:
        UTF-8 encoded table

    Raises:
        ValidationError: If a projection returns the wrong number of cells
    """
    lines = [encode_row(headers)]
    for record in records:
        cells = project(record)
        if len(cells) != len(headers):
            raise ValidationError(
                f"Projection returned {len(cells)} cells for {len(headers)} columns"
            )
        lines.append(encode_row(cells))
    return CSV_ROW_DELIMITER.join(lines).encode("utf-8")
