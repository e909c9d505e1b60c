#!/usr/bin/env python3
"""
Crash Explorer CLI — summary tables, Excel export, and the API server.

USAGE:
  python -m crashviz.cli summary Month                     # Summary grouped by month
  python -m crashviz.cli summary Region --filter South     # Filter on the group variable
  python -m crashviz.cli summary State --filter-var Month --filter January --filter July

  python -m crashviz.cli export Region                     # Excel workbook under reports/
  python -m crashviz.cli export Day --output ./day.xlsx

  python -m crashviz.cli choices                           # Selector choice lists

  python -m crashviz.cli serve                             # Start API server
  python -m crashviz.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from crashviz.config import DATA_DIR, REPORTS_DIR
from crashviz.data.store import CrashStore
from crashviz.data.schemas import PRIMARY_CHOICES, CrashDataError
from crashviz.analytics.summary import summary
from crashviz.analytics.viewmodel import all_choices


_GROUP_NAMES = [v.value for v in PRIMARY_CHOICES]


def _load(args) -> CrashStore:
    return CrashStore.from_files(Path(args.data_dir))


def cmd_summary(args):
    """Print a summary table."""
    store = _load(args)
    result = summary(store, args.group, args.filter, filter_var=args.filter_var)

    print(f"\nSUMMARY BY {result['group'].upper()}  ({result['total']:,} rows)\n")
    print(f"{'Group':<32}{'Count':>10}{'Mean Veh':>10}{'Share':>9}")
    print("-" * 61)
    for r in result["rows"]:
        mean = f"{r['mean_vehicles']:.2f}" if r["mean_vehicles"] is not None else "-"
        name = r["value"] if r["value"] is not None else "(missing)"
        print(f"{name[:30]:<32}{r['count']:>10,}{mean:>10}{r['proportion']:>9.1%}")


def cmd_export(args):
    """Write the summary workbook."""
    from crashviz.reports import summary_report

    store = _load(args)
    out = Path(args.output) if args.output else REPORTS_DIR / f"Crash_Summary_{args.group}.xlsx"
    path = summary_report.generate_excel(store, out, args.group, args.filter)
    print(f"  Saved: {path}")


def cmd_choices(args):
    for kind, names in all_choices().items():
        print(f"{kind:<10} {', '.join(names)}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    os.environ["CRASH_DATA_DIR"] = str(Path(args.data_dir).resolve())
    print(f"\nStarting Crash Explorer API on port {args.port}...")
    uvicorn.run("crashviz.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Crash Explorer — traffic-accident dataset explorer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", default=str(DATA_DIR), help="Folder holding the source CSVs")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    summary_parser = subparsers.add_parser("summary", help="Print a group-by summary table")
    summary_parser.add_argument("group", choices=_GROUP_NAMES, help="Group variable")
    summary_parser.add_argument("--filter", action="append", default=[], help="Keep rows with this value (repeatable)")
    summary_parser.add_argument("--filter-var", default=None, help="Variable the filters apply to (default: group)")
    summary_parser.set_defaults(func=cmd_summary)

    export_parser = subparsers.add_parser("export", help="Export the summary table to Excel")
    export_parser.add_argument("group", choices=_GROUP_NAMES, help="Group variable")
    export_parser.add_argument("--filter", action="append", default=[], help="Keep rows with this value (repeatable)")
    export_parser.add_argument("--output", default=None, help="Output .xlsx path")
    export_parser.set_defaults(func=cmd_export)

    choices_parser = subparsers.add_parser("choices", help="List selector choices")
    choices_parser.set_defaults(func=cmd_choices)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except CrashDataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
