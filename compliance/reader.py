"""Spreadsheet reader: decode roster documents and parse all their sheets."""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from openpyxl import load_workbook

from compliance import ParseError, StudentRecord
from compliance.extractor import extract_students

log = logging.getLogger(__name__)

LEGACY_SUFFIXES = {'.xls'}

Grid = list[list[Any]]


@dataclass
class RosterDocument:
    """A decoded spreadsheet: sheet grids in document order."""

    file_name: str
    sheets: dict[str, Grid] = field(default_factory=dict)


def _read_openpyxl_sheets(data: Union[Path, io.BytesIO]) -> dict[str, Grid]:
    workbook = load_workbook(data, read_only=True, data_only=True)
    try:
        return {
            ws.title: [list(values) for values in ws.iter_rows(values_only=True)]
            for ws in workbook.worksheets
        }
    finally:
        workbook.close()


def _read_xlrd_sheets(content: bytes) -> dict[str, Grid]:
    """Read a legacy .xls workbook (requires the excel-legacy extra)."""
    import xlrd

    book = xlrd.open_workbook(file_contents=content)
    empty_types = (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK)
    sheets: dict[str, Grid] = {}
    for sheet in book.sheets():
        sheets[sheet.name] = [
            [None if cell.ctype in empty_types else cell.value for cell in row]
            for row in sheet.get_rows()
        ]
    return sheets


def read_workbook(
    source: Union[str, Path, bytes],
    file_name: Optional[str] = None,
) -> RosterDocument:
    """Decode a spreadsheet document into sheet grids.

    Args:
        source: Path to the file, or the raw file content (e.g. an upload).
        file_name: Name used for provenance and errors. Defaults to the
            file name of ``source`` when it is a path.

    Returns:
        RosterDocument with one grid per sheet.

    Raises:
        ParseError: If the document cannot be read or decoded.
    """
    if isinstance(source, (bytes, bytearray)):
        name = file_name or 'upload.xlsx'
    else:
        source = Path(source)
        name = file_name or source.name

    try:
        content = bytes(source) if isinstance(source, (bytes, bytearray)) else source.read_bytes()
        if Path(name).suffix.lower() in LEGACY_SUFFIXES:
            sheets = _read_xlrd_sheets(content)
        else:
            sheets = _read_openpyxl_sheets(io.BytesIO(content))
    except Exception as exc:
        raise ParseError(name, exc) from exc

    log.debug("%d sheets decoded from %s", len(sheets), name)
    return RosterDocument(file_name=name, sheets=sheets)


def parse_roster(document: RosterDocument, file_name: Optional[str] = None) -> list[StudentRecord]:
    """Extract the student records of every sheet of a document.

    Sheets are processed in document order and their records concatenated.
    Sheets without roster data contribute nothing.

    Args:
        document: Decoded spreadsheet document.
        file_name: Source file name for the records. Defaults to the
            document's own file name.

    Returns:
        Flat list of StudentRecord objects.
    """
    name = file_name or document.file_name
    students: list[StudentRecord] = []
    for sheet_name, grid in document.sheets.items():
        students.extend(extract_students(grid, sheet_name, name))

    log.info("%d students read from %s", len(students), name)
    return students


def read_roster(path: Union[str, Path]) -> list[StudentRecord]:
    """Read and parse a roster file in one step.

    Raises:
        ParseError: If the file cannot be read or decoded.
    """
    document = read_workbook(path)
    return parse_roster(document)
