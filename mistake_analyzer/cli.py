# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to log mistakes and see
#   pattern insights. This is how users interact with the system.
#
# COMMANDS:
# ---------
# 1. Log a mistake (category is detected automatically):
#    mistake-analyzer add "Forgot to test the edge case" --severity high
#    mistake-analyzer add "Started late" --severity low --date 2024-01-15 --resolution "Start earlier"
#
# 2. Edit or remove a mistake:
#    mistake-analyzer update MST-1A2B3C4D --severity medium
#    mistake-analyzer delete MST-1A2B3C4D --yes
#
# 3. Show all mistakes:
#    mistake-analyzer list [--json]
#
# 4. Show pattern insights and the prevention suggestion:
#    mistake-analyzer report [--json]
#
# 5. Try the classifier without saving:
#    mistake-analyzer classify "The code crashed with a syntax error" --explain
#
# Global option: --data-file PATH overrides MISTAKES_DATA_FILE.
#
# EXIT CODES:
# -----------
#   0 success, 1 validation/file error, 2 usage error (argparse)
#
# ==============================================

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import date
from typing import List, Optional

from mistake_analyzer import __version__
from mistake_analyzer.config import get_config
from mistake_analyzer.errors import FileOperationError, InvalidMistakeError
from mistake_analyzer.analysis.category import display_name
from mistake_analyzer.records.mistake import Mistake, Severity, format_date
from mistake_analyzer.track_and_analyze import TrackAndAnalyze

logger = logging.getLogger(__name__)

DESCRIPTION_WIDTH = 40
RESOLUTION_WIDTH = 30


def truncate(text: Optional[str], max_length: int) -> str:
    """Shorten text for table cells, marking the cut with '...'."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def format_table(mistakes: List[Mistake]) -> str:
    """Render mistakes as a plain-text table."""
    headers = ["ID", "Description", "Category", "Severity", "Date", "Resolution"]
    rows = [
        [
            mistake.id,
            truncate(mistake.description, DESCRIPTION_WIDTH),
            display_name(mistake.category),
            mistake.severity.display_name,
            format_date(mistake.date),
            truncate(mistake.resolution, RESOLUTION_WIDTH),
        ]
        for mistake in mistakes
    ]

    widths = [len(header) for header in headers]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def render(cells: List[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [render(headers), render(["-" * width for width in widths])]
    lines.extend(render(row) for row in rows)
    return "\n".join(lines)


# ======================================
# Command handlers
# ======================================
def cmd_add(app: TrackAndAnalyze, args: argparse.Namespace) -> int:
    mistake = app.add_mistake(
        args.description,
        args.severity,
        args.date or format_date(date.today()),
        args.resolution or "",
    )
    print(f"✓ Mistake added successfully! ({mistake.id})")
    print(f"  Detected category: {display_name(mistake.category)}")
    return 0


def cmd_update(app: TrackAndAnalyze, args: argparse.Namespace) -> int:
    mistake = app.update_mistake(
        args.id,
        description=args.description,
        severity=args.severity,
        mistake_date=args.date,
        resolution=args.resolution,
    )
    print(f"✓ Mistake updated successfully! ({mistake.id})")
    print(f"  Category: {display_name(mistake.category)}")
    return 0


def cmd_delete(app: TrackAndAnalyze, args: argparse.Namespace) -> int:
    if app.find(args.id) is None:
        raise InvalidMistakeError(f"Mistake not found with ID: {args.id}", "id")

    if not args.yes:
        answer = input(f"Are you sure you want to delete {args.id}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled.")
            return 0

    app.delete_mistake(args.id)
    print(f"✓ Mistake deleted successfully! ({args.id})")
    return 0


def cmd_list(app: TrackAndAnalyze, args: argparse.Namespace) -> int:
    mistakes = app.list_mistakes()
    if args.json:
        print(json.dumps([mistake.to_dict() for mistake in mistakes], indent=2, ensure_ascii=False))
        return 0

    if not mistakes:
        print("No mistakes recorded yet.")
        return 0

    print(format_table(mistakes))
    print(f"\n📈 Total Mistakes: {len(mistakes)}")
    return 0


def cmd_report(app: TrackAndAnalyze, args: argparse.Namespace) -> int:
    insights = app.insights()
    if args.json:
        print(json.dumps(insights.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print("🔍 Pattern Insights")
    print(insights.report.rstrip("\n"))
    print()
    print("💡 Prevention Suggestion")
    if insights.most_frequent is not None:
        print(f"Most Frequent: {display_name(insights.most_frequent)}")
        print(f"→ {insights.suggestion}")
    else:
        print("No patterns detected yet")
        print("Add more mistakes to see suggestions")
    print(f"\n📈 Total Mistakes: {insights.total}")
    return 0


def cmd_classify(app: TrackAndAnalyze, args: argparse.Namespace) -> int:
    category = app.classify(args.description)
    print(f"Category: {display_name(category)}")
    print(f"Suggestion: {app.suggestion(category)}")

    if args.explain:
        matches = app.explain(args.description)
        if not matches:
            print("No keywords matched.")
        for matched_category, keywords in matches.items():
            print(f"  {display_name(matched_category)} ({len(keywords)}): {', '.join(keywords)}")
    return 0


# ======================================
# Parser
# ======================================
def build_parser() -> argparse.ArgumentParser:
    severity_choices = [severity.name.lower() for severity in Severity]

    parser = argparse.ArgumentParser(
        prog="mistake-analyzer",
        description="Track, analyze, and learn from your mistakes."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--data-file",
        help="Path to the mistakes data file (default: MISTAKES_DATA_FILE or mistakes_data.txt).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Log a new mistake.")
    add.add_argument("description", help="What happened.")
    add.add_argument("--severity", "-s", required=True, type=str.lower, choices=severity_choices)
    add.add_argument("--date", "-d", help="Date in YYYY-MM-DD (default: today).")
    add.add_argument("--resolution", "-r", help="Resolution or lesson learned.")
    add.set_defaults(handler=cmd_add)

    update = subparsers.add_parser("update", help="Edit an existing mistake.")
    update.add_argument("id", help="Mistake id, e.g. MST-1A2B3C4D.")
    update.add_argument("--description")
    update.add_argument("--severity", "-s", type=str.lower, choices=severity_choices)
    update.add_argument("--date", "-d")
    update.add_argument("--resolution", "-r", help='Use "" to clear.')
    update.set_defaults(handler=cmd_update)

    delete = subparsers.add_parser("delete", help="Delete a mistake.")
    delete.add_argument("id")
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation.")
    delete.set_defaults(handler=cmd_delete)

    list_cmd = subparsers.add_parser("list", help="Show all recorded mistakes.")
    list_cmd.add_argument("--json", action="store_true")
    list_cmd.set_defaults(handler=cmd_list)

    report = subparsers.add_parser("report", help="Show pattern insights.")
    report.add_argument("--json", action="store_true")
    report.set_defaults(handler=cmd_report)

    classify = subparsers.add_parser("classify", help="Detect the category of a description without saving.")
    classify.add_argument("description")
    classify.add_argument("--explain", action="store_true", help="Show the matched keywords.")
    classify.set_defaults(handler=cmd_classify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
        logging.basicConfig(
            level=getattr(logging, config.log_level, logging.WARNING),
            format="%(levelname)s %(name)s: %(message)s",
        )

        if args.data_file:
            config = replace(config, storage=replace(config.storage, data_file=args.data_file))

        app = TrackAndAnalyze(config)
        return args.handler(app, args)
    except InvalidMistakeError as exc:
        print(f"✗ {exc.user_message}", file=sys.stderr)
        return 1
    except (FileOperationError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"✗ {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
