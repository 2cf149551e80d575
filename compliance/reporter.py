"""Report generation for reconciliation results (XLSX, CSV, HTML, summary)."""

import csv
import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from compliance import CONFLICT, ILLEGAL, MatchRecord, StudentRecord

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

DEFAULT_REPORT_NAME = 'compliance_report.xlsx'
REPORT_SHEET_TITLE = 'Compliance Report'

REPORT_COLUMNS = [
    'ID No',
    'Status',
    'Name (Cafe)',
    'Name (Bank)',
    'Found in Group A (Cafe)',
    'Found in Group B (Bank)',
]

STATUS_FILLS = {
    ILLEGAL: PatternFill('solid', fgColor='FFC7CE'),
    CONFLICT: PatternFill('solid', fgColor='FFEB9C'),
}


def _match_to_row(match: MatchRecord) -> dict:
    """Convert a MatchRecord to a flat dict keyed by report column."""
    return {
        'ID No': match.id,
        'Status': match.status,
        'Name (Cafe)': match.name_a,
        'Name (Bank)': match.name_b,
        'Found in Group A (Cafe)': '; '.join(match.locations_a),
        'Found in Group B (Bank)': '; '.join(match.locations_b),
    }


def build_report(matches: list[MatchRecord]) -> list[dict]:
    """Project match records into flat report rows, keeping their order."""
    return [_match_to_row(m) for m in matches]


def write_xlsx_report(matches: list[MatchRecord], output_path: Path) -> None:
    """Write match results as a single-sheet Excel report.

    Args:
        matches: Reconciliation results.
        output_path: Path for the output .xlsx file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    ws = wb.active
    ws.title = REPORT_SHEET_TITLE
    ws.append(REPORT_COLUMNS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = 'A2'

    widths = [len(c) + 2 for c in REPORT_COLUMNS]
    status_col = REPORT_COLUMNS.index('Status') + 1
    for row in build_report(matches):
        values = [row[c] for c in REPORT_COLUMNS]
        ws.append(values)
        fill = STATUS_FILLS.get(row['Status'])
        if fill is not None:
            ws.cell(ws.max_row, status_col).fill = fill
        for i, value in enumerate(values):
            widths[i] = max(widths[i], min(60, len(str(value)) + 2))

    for i, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(i)].width = width

    wb.save(output_path)
    log.info("Excel report written: %s (%d rows)", output_path, len(matches))


def write_csv_report(matches: list[MatchRecord], output_path: Path) -> None:
    """Write match results as a CSV report (UTF-8 with BOM for Excel).

    Args:
        matches: Reconciliation results.
        output_path: Path for the output CSV file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8-sig') as f:
        writer = csv.DictWriter(f, fieldnames=REPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(build_report(matches))

    log.info("CSV report written: %s (%d rows)", output_path, len(matches))


def compute_stats(
    matches: list[MatchRecord],
    roster_a: Optional[list[StudentRecord]] = None,
    roster_b: Optional[list[StudentRecord]] = None,
) -> dict:
    """Compute summary statistics for a reconciliation run."""
    return {
        'students_a': len(roster_a or []),
        'students_b': len(roster_b or []),
        'matches': len(matches),
        'illegal': sum(1 for m in matches if m.status == ILLEGAL),
        'conflict': sum(1 for m in matches if m.status == CONFLICT),
    }


def write_html_report(
    matches: list[MatchRecord],
    output_path: Path,
    roster_a: Optional[list[StudentRecord]] = None,
    roster_b: Optional[list[StudentRecord]] = None,
    title: str = '',
) -> None:
    """Write match results as an HTML report using Jinja2.

    Args:
        matches: Reconciliation results.
        output_path: Path for the output HTML file.
        roster_a: Group A students, for the summary counts.
        roster_b: Group B students, for the summary counts.
        title: Extra text for the report title.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    html = template.render(
        title=title,
        rows=build_report(matches),
        stats=compute_stats(matches, roster_a, roster_b),
        columns=REPORT_COLUMNS,
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML report written: %s", output_path)


def print_summary(
    matches: list[MatchRecord],
    roster_a: Optional[list[StudentRecord]] = None,
    roster_b: Optional[list[StudentRecord]] = None,
) -> None:
    """Print a summary of the reconciliation to stdout."""
    stats = compute_stats(matches, roster_a, roster_b)

    print("\n=== Compliance Report ===")
    print(f"Students in Group A (Cafe):  {stats['students_a']:>5}")
    print(f"Students in Group B (Bank):  {stats['students_b']:>5}")
    print("---")
    print(f"Found in both groups:        {stats['matches']:>5}")
    print(f"  - ILLEGAL (names match):   {stats['illegal']:>5}")
    print(f"  - CONFLICT (names differ): {stats['conflict']:>5}")
    if not matches:
        print("No Group A student was found in Group B.")
    print()
