"""Shared test fixtures."""

from pathlib import Path

import pytest
from openpyxl import Workbook


def write_workbook(path: Path, sheets: dict) -> Path:
    """Write a workbook with one sheet per entry of ``sheets`` (name -> rows)."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def make_workbook(tmp_path):
    """Factory writing .xlsx files into a temporary directory."""
    def _make(name: str, sheets: dict) -> Path:
        return write_workbook(tmp_path / name, sheets)
    return _make


@pytest.fixture
def cafe_path(make_workbook) -> Path:
    """Group A roster: a cover sheet plus two class sheets."""
    return make_workbook('cafe.xlsx', {
        'Cover': [
            ['Cafe meal registrations'],
            ['Term 1'],
        ],
        'Grade 9': [
            ['School roster'],
            ['No', 'ID No', 'Full Name', 'Class'],
            [1, 'S100', 'Ann Lee', '9A'],
            [2, 'S101', 'Bob Stone', '9A'],
            [None, None, 'Section B'],
            [3, 'S102', 'Cara Diaz Lopez', '9B'],
        ],
        'Grade 10': [
            ['No', 'Student ID No', 'Student Name', 'Class'],
            [1, 's100', 'Ann Lee', '10A'],
            [2, 'S200', 'Dan Wu', '10A'],
        ],
    })


@pytest.fixture
def bank_path(make_workbook) -> Path:
    """Group B roster with one sheet."""
    return make_workbook('bank.xlsx', {
        'Allowance': [
            ['ID No', 'Name', 'Amount'],
            ['S100', 'ann lee smith', 250],
            ['S102', 'Carla Diaz', 250],
            ['S999', 'Eve Park', 100],
        ],
    })


@pytest.fixture
def corrupt_path(tmp_path) -> Path:
    """A file with an .xlsx suffix that is not a workbook."""
    path = tmp_path / 'broken.xlsx'
    path.write_bytes(b'this is not a spreadsheet')
    return path
