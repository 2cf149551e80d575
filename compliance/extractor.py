"""Turn a raw sheet grid into normalized student records."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from compliance import UNKNOWN_NAME, FieldValue, StudentRecord, cell_text

log = logging.getLogger(__name__)

ID_HEADER_MARKER = 'id no'
# A column is the name column if its header contains any of these
NAME_HEADER_MARKERS = ('full name', 'name')

# Outcomes of extract_sheet
RECORDS = 'RECORDS'
NO_HEADER = 'NO_HEADER'
NO_ID_COLUMN = 'NO_ID_COLUMN'


@dataclass
class SheetExtraction:
    """Result of extracting one sheet."""

    outcome: str    # RECORDS, NO_HEADER, NO_ID_COLUMN
    records: list[StudentRecord] = field(default_factory=list)
    header_row: Optional[int] = None


def _cell(row: Sequence[Any], index: int) -> Any:
    """Return the cell at index, or None if the row is too short."""
    if index < 0 or index >= len(row):
        return None
    return row[index]


def find_header_row(grid: Sequence[Sequence[Any]]) -> Optional[int]:
    """Find the first row carrying an "ID No" header cell.

    Args:
        grid: Rows of raw cell values.

    Returns:
        0-based index of the header row, or None if there is none.
    """
    for index, row in enumerate(grid):
        if any(ID_HEADER_MARKER in cell_text(cell).lower() for cell in row):
            return index
    return None


def _find_column(headers: list[str], markers: Sequence[str]) -> Optional[int]:
    for index, header in enumerate(headers):
        lowered = header.lower()
        if any(marker in lowered for marker in markers):
            return index
    return None


def resolve_columns(header_row: Sequence[Any]) -> tuple[list[str], Optional[int], Optional[int]]:
    """Resolve header texts plus the id and name column positions.

    Duplicate matches resolve to the first matching column, so with
    ``Name`` before ``Full Name`` the ``Name`` column is used.

    Returns:
        Tuple (headers, id_index, name_index); indices are None if absent.
    """
    headers = [cell_text(h).strip() for h in header_row]
    id_index = _find_column(headers, (ID_HEADER_MARKER,))
    name_index = _find_column(headers, NAME_HEADER_MARKERS)
    return headers, id_index, name_index


def extract_sheet(
    grid: Sequence[Sequence[Any]],
    sheet_name: str,
    file_name: str,
) -> SheetExtraction:
    """Extract student records from one sheet.

    A sheet without an "ID No" header, or whose header row has no usable
    id column, is a valid sheet without roster data. Header detection and
    column resolution use the same marker, so a detected header row always
    has an id column and NO_ID_COLUMN is never produced by find_header_row
    as it stands. The outcome is kept so callers handle both empty cases.

    Args:
        grid: Rows of raw cell values, row 0 being the first sheet row.
        sheet_name: Name of the sheet.
        file_name: Name of the document the sheet belongs to.

    Returns:
        SheetExtraction with the outcome and the records in row order.
    """
    header_index = find_header_row(grid)
    if header_index is None:
        log.debug("No header row in sheet %s of %s", sheet_name, file_name)
        return SheetExtraction(NO_HEADER)

    headers, id_index, name_index = resolve_columns(grid[header_index])
    if id_index is None:
        log.debug("No id column in sheet %s of %s", sheet_name, file_name)
        return SheetExtraction(NO_ID_COLUMN, header_row=header_index)

    records: list[StudentRecord] = []
    for row_index in range(header_index + 1, len(grid)):
        row = grid[row_index]
        student_id = cell_text(_cell(row, id_index)).strip()
        if not student_id:
            continue

        name_cell = _cell(row, name_index) if name_index is not None else None
        full_name = UNKNOWN_NAME if name_cell is None else cell_text(name_cell)

        extra_fields = {}
        for col, header in enumerate(headers):
            if not header or col in (id_index, name_index):
                continue
            value = _cell(row, col)
            if value is None:
                continue
            extra_fields[header] = FieldValue.from_cell(value)

        records.append(StudentRecord(
            id=student_id,
            full_name=full_name,
            source_sheet=sheet_name,
            source_file=file_name,
            row_number=row_index + 1,
            extra_fields=extra_fields,
        ))

    log.debug("%d records in sheet %s of %s", len(records), sheet_name, file_name)
    return SheetExtraction(RECORDS, records, header_index)


def extract_students(
    grid: Sequence[Sequence[Any]],
    sheet_name: str,
    file_name: str,
) -> list[StudentRecord]:
    """Extract student records from one sheet, dropping the outcome."""
    return extract_sheet(grid, sheet_name, file_name).records
