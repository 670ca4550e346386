#!/usr/bin/env python3
"""
Transcript Task Extractor
Reads a speech transcript, finds action items ("need to", "should",
"todo", "task") and resolves any date/time mentioned with them.
"""

import sys
import json
import argparse
import logging
from datetime import datetime
from pathlib import Path

from taskengine.calendar import request_calendar_events
from taskengine.config import load_config
from taskengine.core import process_transcript
from taskengine.markdown import append_tasks_to_daily_file


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 datetime: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract dated tasks from a speech transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s meeting.txt
  %(prog)s meeting.txt --now 2024-03-10T08:00 --json
  cat meeting.txt | %(prog)s --calendar
  %(prog)s meeting.txt --tasks-dir ./vault/Tasks
        """
    )

    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="Transcript text file (default: read stdin)"
    )

    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Baseline for relative dates, ISO-8601 (default: current time)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print tasks as JSON instead of the text summary"
    )

    parser.add_argument(
        "--calendar",
        action="store_true",
        help="Also print the calendar event requests for the tasks"
    )

    parser.add_argument(
        "--tasks-dir",
        type=Path,
        default=None,
        help="Append tasks to the daily task file in this folder (default: TASKS_DIR)"
    )

    parser.add_argument(
        "--no-tasks",
        action="store_true",
        help="Don't write a daily task file, even when TASKS_DIR is set"
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Environment file to load settings from (default: .env)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging"
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.env_file)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logger = logging.getLogger("extract_tasks")

    if args.input is not None:
        if not args.input.exists():
            print(f"❌ Error: File not found: {args.input}", file=sys.stderr)
            return 1
        text = args.input.read_text(encoding="utf-8")
        source = args.input.name
    else:
        text = sys.stdin.read()
        source = "stdin"

    result = process_transcript(text, now=args.now, config=config)

    events = []
    if args.calendar:
        request_calendar_events(
            result.tasks, events.append, now=result.extracted_at, duration=config.event_duration
        )

    if args.json:
        output = {
            "extracted_at": result.extracted_at.isoformat(),
            "tasks": [t.to_dict() for t in result.tasks],
        }
        if args.calendar:
            output["calendar_events"] = [e.to_dict() for e in events]
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(result.summary, end="")
        if args.calendar:
            print(f"=== CALENDAR REQUESTS ({len(events)}) ===")
            for event in events:
                print(f"- {event.title}: {event.start:%Y-%m-%d %H:%M} → {event.end:%H:%M}")

    tasks_dir = None if args.no_tasks else (args.tasks_dir or config.tasks_dir)
    if tasks_dir is not None:
        task_file = append_tasks_to_daily_file(
            result.tasks, tasks_dir, source, for_date=result.extracted_at.date()
        )
        if task_file:
            logger.info(f"Tasks written to {task_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
