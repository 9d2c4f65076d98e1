#!/usr/bin/env python3
"""Print the conference timetable to the terminal"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from services.rendering import apply_filter, render_schedule
from services.schedule import ScheduleLayout, build_schedule
from services.talk_store import TalkDataError, load_talks


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the conference schedule")
    parser.add_argument("--talks", type=Path, help="Talk data file (default: configured file)")
    parser.add_argument("--search", default="", help="Only show talks with a matching category")
    parser.add_argument(
        "--date",
        type=lambda value: datetime.strptime(value, "%Y-%m-%d").date(),
        help="Schedule day (YYYY-MM-DD, default: today)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    talks_path = args.talks or settings.talks_path

    try:
        talks = load_talks(talks_path)
    except TalkDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    entries = build_schedule(
        talks, day=args.date or date.today(), layout=ScheduleLayout.from_settings(settings)
    )
    nodes = apply_filter(render_schedule(entries), talks, args.search)

    for node in nodes:
        if not node.hidden:
            print(f"{node.entry.time_range}  {node.entry.label}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
