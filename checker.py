"""roster-compliance-checker – CLI to find Group A students also listed in Group B."""

import argparse
import logging
import sys
from pathlib import Path

from compliance import MissingInput, ParseError
from compliance.pipeline import check_compliance
from compliance.reporter import (
    DEFAULT_REPORT_NAME,
    print_summary,
    write_csv_report,
    write_html_report,
    write_xlsx_report,
)

log = logging.getLogger('checker')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Cross-check two student rosters for students listed in both.',
        prog='checker.py',
    )
    parser.add_argument(
        '--group-a', type=Path,
        help='Roster of Group A (Cafe), .xlsx or .xls',
    )
    parser.add_argument(
        '--group-b', type=Path,
        help='Roster of Group B (Bank/Cash), .xlsx or .xls',
    )
    parser.add_argument(
        '--output', type=Path, default=Path(DEFAULT_REPORT_NAME),
        help=f'Path for the Excel report (default: {DEFAULT_REPORT_NAME})',
    )
    parser.add_argument(
        '--html', action='store_true',
        help='Also write an HTML report next to the Excel report',
    )
    parser.add_argument(
        '--csv', action='store_true',
        help='Also write a CSV report next to the Excel report',
    )
    parser.add_argument(
        '--summary', action='store_true',
        help='Print a summary to stdout',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Enable debug logging',
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        result = check_compliance(args.group_a, args.group_b)
    except MissingInput as exc:
        parser.error(str(exc))
    except ParseError as exc:
        log.error("Error processing %s, please check the file format: %s", exc.file_name, exc.cause)
        return 1

    write_xlsx_report(result.matches, args.output)

    if args.html:
        write_html_report(
            result.matches, args.output.with_suffix('.html'),
            result.roster_a, result.roster_b,
        )

    if args.csv:
        write_csv_report(result.matches, args.output.with_suffix('.csv'))

    if args.summary:
        print_summary(result.matches, result.roster_a, result.roster_b)

    return 0


if __name__ == '__main__':
    sys.exit(main())
