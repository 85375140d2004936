#!/usr/bin/env python3
"""
Boston Crime Analytics CLI - console tables, Excel workbook, JSON export, API server.

USAGE:
  python -m crime_analytics.cli report                       # Print every summary table
  python -m crime_analytics.cli excel                        # Write the Excel workbook
  python -m crime_analytics.cli excel --district B2 --codes 3115 3831
  python -m crime_analytics.cli export                       # Write JSON files to exports/
  python -m crime_analytics.cli export --output ./dist
  python -m crime_analytics.cli district B2 3115 3831        # Year → count for one district
  python -m crime_analytics.cli serve --port 8000            # Start API server

  --inbox <folder> on any data command reads the yearly CSVs from another folder.
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path

from crime_analytics.config import EXPORTS_FOLDER, INBOX_FOLDER, REPORTS_FOLDER
from crime_analytics.data.errors import MalformedSourceError
from crime_analytics.data.store import DataStore


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  BOSTON CRIME ANALYTICS - {title}")
    print("=" * 70)


def _load(args) -> DataStore:
    return DataStore().load(Path(args.inbox))


def _write_json(path: Path, data):
    """Write sanitised JSON to path, creating parent dirs."""
    from crime_analytics.analytics.common import sanitize_for_json
    path.parent.mkdir(parents=True, exist_ok=True)
    clean = sanitize_for_json(data)
    with open(path, "w") as f:
        json.dump(clean, f, indent=2, default=str)


def cmd_report(args):
    """Print every summary table and chart series."""
    from crime_analytics.reports.crime_report import print_summary
    _banner("REPORT")
    store = _load(args)
    print_summary(store)


def cmd_excel(args):
    """Write the styled workbook."""
    from crime_analytics.reports.crime_report import generate_excel
    _banner("EXCEL REPORT")
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")
    store = _load(args)

    output = Path(args.output) if args.output else REPORTS_FOLDER / "Boston_Crime_Report.xlsx"
    path = generate_excel(store, output, args.district, args.codes)
    print(f"\n  Report saved to: {path}")
    print("=" * 70 + "\n")


def cmd_export(args):
    """Write the full report plus one JSON file per summary and chart."""
    from crime_analytics.reports.crime_report import generate_json
    _banner("JSON EXPORT")
    store = _load(args)

    out = Path(args.output)
    data = generate_json(store)
    _write_json(out / "report.json", data)
    _write_json(out / "quality.json", data["quality"])
    for name, summary in data["summaries"].items():
        _write_json(out / "summaries" / f"{name}.json", summary)
    for name, chart in data["charts"].items():
        _write_json(out / "charts" / f"{name}.json", chart)

    n = 2 + len(data["summaries"]) + len(data["charts"])
    print(f"\n  {n} files written to: {out.resolve()}\n")


def cmd_district(args):
    """Yearly counts for one district and a set of offense codes."""
    from crime_analytics.analytics.summaries import district_summary
    from crime_analytics.reports.crime_report import format_summary
    store = _load(args)
    try:
        summary = district_summary(store.df, args.district, args.codes,
                                   known_districts=store.districts())
    except ValueError as exc:
        print(f"  {exc}")
        print(f"  Districts: {', '.join(str(d) for d in store.districts())}")
        sys.exit(2)
    print()
    print(format_summary(summary))
    print()


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Boston Crime Analytics API on port {args.port}...")
    uvicorn.run("crime_analytics.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Boston Crime Analytics - incident reports 2018-2022",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    def data_command(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--inbox", default=str(INBOX_FOLDER), help=f"Yearly CSV folder (default {INBOX_FOLDER})")
        return sub

    # report subcommand
    report_parser = data_command("report", "Print every summary table")
    report_parser.set_defaults(func=cmd_report)

    # excel subcommand
    excel_parser = data_command("excel", "Write the Excel workbook")
    excel_parser.add_argument("--output", help="Workbook path (default reports/Boston_Crime_Report.xlsx)")
    excel_parser.add_argument("--district", help="Add a district query sheet for this district")
    excel_parser.add_argument("--codes", nargs="*", help="Offense codes for the district sheet")
    excel_parser.set_defaults(func=cmd_excel)

    # export subcommand
    export_parser = data_command("export", "Write JSON files")
    export_parser.add_argument("--output", default=str(EXPORTS_FOLDER), help=f"Output directory (default {EXPORTS_FOLDER})")
    export_parser.set_defaults(func=cmd_export)

    # district subcommand
    district_parser = data_command("district", "Year → count for one district and offense codes")
    district_parser.add_argument("district", help="District code, e.g. B2")
    district_parser.add_argument("codes", nargs="+", help="Offense code(s)")
    district_parser.set_defaults(func=cmd_district)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except MalformedSourceError as exc:
        print(f"\n  Load aborted: {exc}\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
