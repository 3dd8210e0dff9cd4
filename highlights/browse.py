# highlights/browse.py
# Terminal view of the timeline card: pick a year, fetch its highlights
# through the running service, print them as JSON.
#
#   python -m highlights.browse --year 1969
#   python -m highlights.browse --steps -3      # three years before 2025

from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any

from highlights.client import FetchState, HighlightsFeed
from highlights.timeline import END_YEAR, START_YEAR, YearNavigator


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Show the highlights of one year.")
    p.add_argument("--base-url", default="http://127.0.0.1:8000")
    p.add_argument("--year", type=int, default=END_YEAR, help=f"{START_YEAR}..{END_YEAR}")
    p.add_argument(
        "--steps", type=int, default=0, help="move this many years from --year (negative = back)"
    )
    return p.parse_args(argv)


async def browse(args: argparse.Namespace, feed: HighlightsFeed | None = None) -> dict[str, Any]:
    feed = feed or HighlightsFeed(args.base_url)
    nav = YearNavigator(initial=args.year)
    step = nav.next if args.steps > 0 else nav.prev
    for _ in range(abs(args.steps)):
        if not step():
            break

    snap = await feed.request_items_for_year(nav.year)
    out: dict[str, Any] = {"year": snap.year, "state": snap.state.value, "items": list(snap.items)}
    if snap.state is FetchState.ERROR:
        out["message"] = "No data available for this year."
    elif not snap.items:
        out["message"] = "No highlights found."
    return out


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    out = asyncio.run(browse(args))
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 1 if out["state"] == FetchState.ERROR.value else 0


if __name__ == "__main__":
    raise SystemExit(main())
