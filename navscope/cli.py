#!/usr/bin/env python3
"""
navscope CLI — analyse a fund valuation spreadsheet, inspect column detection, or run the API server.

USAGE:
  navscope analyze nav_history.xlsx                      # Detected columns, trailing + monthly returns
  navscope analyze nav_history.xlsx --json               # Full report as JSON
  navscope analyze nav_history.csv --excel out.xlsx      # Styled workbook export

  navscope detect nav_history.xlsx                       # Per-column date/numeric scores

  navscope serve                                         # Start API server
  navscope serve --port 8000 --reload
"""
from __future__ import annotations

import argparse
import json
import os
import sys

from navscope import __version__
from navscope.config import MONTH_LABELS, TRAILING_LABELS
from navscope.analytics.common import fmt_pct
from navscope.data.detect import ColumnDetectionError
from navscope.data.loader import SpreadsheetError, read_rows
from navscope.reports.performance_report import (
    analyze_rows, detection_report, generate_excel, generate_json,
)


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def _load(path: str) -> list[dict]:
    try:
        rows = read_rows(path)
    except SpreadsheetError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        sys.exit(1)
    return rows


def cmd_analyze(args):
    """Run the full pipeline on one spreadsheet."""
    rows = _load(args.file)

    try:
        analysis = analyze_rows(rows)
    except ColumnDetectionError as exc:
        print(f"  {exc}", file=sys.stderr)
        missing = ", ".join(exc.selection.missing())
        print(f"  Missing: {missing}. Run `navscope detect {args.file}` for column scores.", file=sys.stderr)
        sys.exit(2)

    if args.json:
        print(json.dumps(generate_json(analysis), indent=2))
        if args.excel:
            # stdout stays pure JSON
            out = generate_excel(analysis, args.excel)
            print(f"Workbook saved to: {out}", file=sys.stderr)
        return

    _banner("NAVSCOPE — FUND PERFORMANCE")
    s = analysis.summary
    print(f"\n  Date column:  {analysis.selection.date_column}")
    print(f"  Value column: {analysis.selection.value_column}")
    print(f"  Rows: {analysis.source_rows:,} read → {s['data_points']:,} points")
    if s["data_points"]:
        print(f"  Range: {s['first_date']} to {s['last_date']}")
        print(f"  Since inception: {fmt_pct(s['since_inception'])}  |  Max drawdown: {s['max_drawdown']:.1f}%")

    print("\nTRAILING RETURNS\n")
    print("".join(f"{label:>8}" for label in TRAILING_LABELS))
    print("".join(f"{fmt_pct(analysis.trailing[label]):>8}" for label in TRAILING_LABELS))

    if analysis.grid:
        print("\nMONTHLY RETURNS\n")
        print(f"{'Year':<6}" + "".join(f"{m:>8}" for m in MONTH_LABELS) + f"{'YTD':>9}")
        for row in analysis.grid:
            cells = "".join(f"{fmt_pct(r):>8}" for r in row.months)
            print(f"{row.year:<6}{cells}{fmt_pct(row.ytd):>9}")

    if args.excel:
        out = generate_excel(analysis, args.excel)
        print(f"\nWorkbook saved to: {out}")
    print()


def cmd_detect(args):
    """Print the column detection scores for one spreadsheet."""
    rows = _load(args.file)
    report = detection_report(rows)

    _banner("NAVSCOPE — COLUMN DETECTION")
    print(f"\n  Sample: {report['sample_size']:,} of {len(rows):,} rows  |  threshold {report['threshold']:.0%}\n")
    print(f"{'Column':<32}{'Dates':>8}{'Numbers':>10}")
    for s in report["scores"]:
        marks = []
        if s["column"] == report["date_column"]:
            marks.append("date")
        if s["column"] == report["value_column"]:
            marks.append("value")
        tag = f"  ← {' + '.join(marks)}" if marks else ""
        print(f"{s['column'][:30]:<32}{s['date_count']:>8}{s['num_count']:>10}{tag}")

    if not report["complete"]:
        missing = [role for role in ("date", "value") if report[f"{role}_column"] is None]
        print(f"\n  Detection incomplete — no usable {' / '.join(missing)} column")
    print()


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting navscope API on port {args.port}...")
    uvicorn.run("navscope.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="navscope",
        description="navscope — fund valuation spreadsheet analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # analyze subcommand
    analyze_parser = subparsers.add_parser("analyze", help="Analyse a spreadsheet")
    analyze_parser.add_argument("file", help=".xlsx, .xlsm, .csv or .csv.gz file")
    analyze_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    analyze_parser.add_argument("--excel", metavar="OUT", help="Write a styled .xlsx report")
    analyze_parser.set_defaults(func=cmd_analyze)

    # detect subcommand
    detect_parser = subparsers.add_parser("detect", help="Show column detection scores")
    detect_parser.add_argument("file", help=".xlsx, .xlsm, .csv or .csv.gz file")
    detect_parser.set_defaults(func=cmd_detect)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
