"""Core module for roster-compliance-checker."""

import datetime
from dataclasses import dataclass, field
from typing import Any, Union

ILLEGAL = 'ILLEGAL'
CONFLICT = 'CONFLICT'

UNKNOWN_NAME = 'Unknown'


def cell_text(value: Any) -> str:
    """Coerce a raw cell value to the text a spreadsheet would display.

    Args:
        value: Raw cell value (str, number, date, bool or None).

    Returns:
        Text form of the value; empty string for blank cells.
    """
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


class ParseError(Exception):
    """Raised when a roster document cannot be read or decoded."""

    def __init__(self, file_name: str, cause: BaseException):
        super().__init__(f"Could not parse {file_name}: {cause}")
        self.file_name = file_name
        self.cause = cause


class MissingInput(Exception):
    """Raised when one of the two roster files is not available."""

    def __init__(self, label: str, path=None):
        super().__init__(f"{label} roster file is missing: {path or '(not given)'}")
        self.label = label
        self.path = path


@dataclass(frozen=True)
class FieldValue:
    """A raw cell value kept for an extra (non id/name) column."""

    kind: str                             # TEXT, NUMBER, EMPTY
    value: Union[str, int, float, None] = None

    TEXT = 'TEXT'
    NUMBER = 'NUMBER'
    EMPTY = 'EMPTY'

    @classmethod
    def from_cell(cls, value) -> 'FieldValue':
        """Tag a raw spreadsheet cell value."""
        if value is None:
            return cls(cls.EMPTY)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls(cls.NUMBER, value)
        text = cell_text(value)
        if not text.strip():
            return cls(cls.EMPTY)
        return cls(cls.TEXT, text)


@dataclass(frozen=True)
class StudentRecord:
    """Represents one student row from a roster sheet."""

    id: str
    full_name: str
    source_sheet: str
    source_file: str
    row_number: int       # 1-based, as shown by a spreadsheet program
    extra_fields: dict[str, FieldValue] = field(default_factory=dict)

    @property
    def location(self) -> str:
        """Human readable provenance, e.g. ``[Sheet1] Row 4``."""
        return f"[{self.source_sheet}] Row {self.row_number}"


@dataclass
class MatchRecord:
    """A student id found in both Group A and Group B."""

    id: str
    name_a: str
    name_b: str
    locations_a: list[str] = field(default_factory=list)
    locations_b: list[str] = field(default_factory=list)
    status: str = CONFLICT    # ILLEGAL, CONFLICT
