"""Terminal renderer for the timezone wave."""
from __future__ import annotations

import argparse
import sys
import time
from datetime import datetime
from typing import Sequence

from nyewave.config.settings import get_settings
from nyewave.core.engine import CountdownEngine
from nyewave.core.formatting import format_in_zone, format_offset, format_utc, heading
from nyewave.core.view import STATUS_DONE, STATUS_NEXT, ViewState, info_caption, progress_caption
from nyewave.tasks.service import build_engine
from nyewave.utils.logging import setup_logging
from nyewave.utils.time_utils import FixedClock

_MARKERS = {STATUS_DONE: " ", STATUS_NEXT: ">"}


def _parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value!r}") from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show when every timezone reaches the next New Year")
    parser.add_argument("--filter", default="", help="Case-insensitive zone substring")
    parser.add_argument("--dedupe", action="store_true", default=None, help="Group zones crossing together")
    parser.add_argument("--now", type=_parse_instant, default=None, help="Render as of this UTC instant")
    parser.add_argument("--limit", type=int, default=0, help="Only print this many rows, starting at the next one")
    parser.add_argument("--watch", action="store_true", help="Re-render every tick until interrupted")
    return parser.parse_args(argv)


def render_text(state: ViewState, reference_timezone: str, limit: int = 0) -> str:
    lines = [heading(state.target_year), progress_caption(state).rstrip(), info_caption(state), ""]
    if state.is_empty:
        lines.append("No matching timezones.")
        return "\n".join(lines)

    start = 0
    stop = len(state.rows)
    if limit > 0:
        start = min(state.next_index or 0, max(stop - limit, 0))
        stop = min(start + limit, stop)

    for index in range(start, stop):
        row = state.rows[index]
        status = state.status(index)
        countdown = "passed" if status == STATUS_DONE else f"in {state.countdown(row)}"
        lines.append(
            f"{_MARKERS.get(status, ' ')} {index + 1}. {row.label}  "
            f"{format_offset(row.offset_minutes)} • {format_utc(row.instant)} • "
            f"{format_in_zone(row.instant, reference_timezone)}  {countdown}"
        )
        if row.detail:
            lines.append(f"      {row.detail}")
    return "\n".join(lines)


def _render_once(engine: CountdownEngine, args: argparse.Namespace, dedupe: bool, reference_timezone: str) -> None:
    state = engine.derive(filter_text=args.filter, dedupe=dedupe)
    print(render_text(state, reference_timezone, args.limit))


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        settings = get_settings()
        setup_logging(level=settings.log_level)
        dedupe = settings.default_dedupe if args.dedupe is None else args.dedupe
        clock = FixedClock(args.now) if args.now is not None else None
        engine = build_engine(settings, clock)
        _render_once(engine, args, dedupe, settings.reference_timezone)
        while args.watch:
            time.sleep(settings.tick_seconds)
            if clock is not None:
                clock.advance(seconds=settings.tick_seconds)
            print("\033[2J\033[H", end="")
            _render_once(engine, args, dedupe, settings.reference_timezone)
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
