from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from litcal.core.errors import LitcalError
from litcal.core.logger import setup_logger
from litcal.core.settings import settings


def _parse_ymd(s: str) -> date:
    try:
        y, m, d = map(int, s.split("-"))
        return date(y, m, d)
    except ValueError as e:
        raise LitcalError(f"Invalid date '{s}', expected YYYY-MM-DD") from e


def cmd_list(argv: list[str]) -> int:
    import litcal

    p = argparse.ArgumentParser(prog="litcal list", description="List registered calendars")
    p.parse_args(argv)

    for name in litcal.list_calendars():
        info = litcal.calendar_info(name)
        print(f"{name:8s} {info['display_name']}  ({info['feasts']} feasts, {info['seasons']} seasons)")
    return 0


def cmd_year(argv: list[str]) -> int:
    import litcal

    p = argparse.ArgumentParser(prog="litcal year", description="Generate one liturgical year")
    p.add_argument("calendar", help="calendar name, see `litcal list`")
    p.add_argument("year", type=int, help="liturgical year (begins on the first Sunday of Advent of year-1)")
    p.add_argument("--format", choices=["csv", "json"], default="csv")
    p.add_argument("--output", "-o", default=None, help="write to this file instead of stdout")
    args = p.parse_args(argv)

    cal = litcal.generate_year(args.year, calendar=args.calendar)
    text = cal.to_csv() if args.format == "csv" else cal.to_json() + "\n"
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Wrote {len(cal)} days to {args.output}")
    else:
        sys.stdout.write(text)
    return 0


def cmd_day(argv: list[str]) -> int:
    import litcal

    p = argparse.ArgumentParser(prog="litcal day", description="Show the observance of one civil date")
    p.add_argument("calendar")
    p.add_argument("date", help="YYYY-MM-DD")
    args = p.parse_args(argv)

    d = _parse_ymd(args.date)
    day = litcal.day_info(d, calendar=args.calendar)
    if day is None:
        raise LitcalError(f"No data for date: {d.isoformat()}")

    print(f"{day.date.isoformat()}  {day.day_in_season}")
    print(f"  {day.day.desc} [{day.day_rank}] ({day.day.color})")
    for c in day.commemorations:
        print(f"  commemoration: {c.desc} [{c.rank}]")
    return 0


def cmd_feast(argv: list[str]) -> int:
    import litcal

    p = argparse.ArgumentParser(prog="litcal feast", description="Show one feast by exact name")
    p.add_argument("calendar")
    p.add_argument("name", nargs="+")
    args = p.parse_args(argv)

    feast, rank = litcal.feast_info(" ".join(args.name), calendar=args.calendar)
    print(str(feast))
    print(f"  date:  {feast.date_rule}")
    print(f"  rank:  {rank}")
    print(f"  color: {feast.color}")
    return 0


def cmd_search(argv: list[str]) -> int:
    import litcal

    p = argparse.ArgumentParser(prog="litcal search", description="Fuzzy search for feasts")
    p.add_argument("calendar")
    p.add_argument("query", nargs="+")
    p.add_argument("--limit", type=int, default=6)
    args = p.parse_args(argv)

    hits = litcal.search_feasts(" ".join(args.query), calendar=args.calendar, limit=args.limit)
    if not hits:
        print("No matches.")
        return 0
    for h in hits:
        print(f"{h['score']:.3f}  {h['name']}  [{h['rank']}]  {h['date']}")
    return 0


def cmd_serve(argv: list[str]) -> int:
    import uvicorn

    from litcal.web.app import create_app

    p = argparse.ArgumentParser(prog="litcal serve", description="Run the HTTP API")
    p.add_argument("--host", default=settings.host)
    p.add_argument("--port", type=int, default=settings.port)
    args = p.parse_args(argv)

    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


_COMMANDS = {
    "list": cmd_list,
    "year": cmd_year,
    "day": cmd_day,
    "feast": cmd_feast,
    "search": cmd_search,
    "serve": cmd_serve,
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="litcal", description="Roman liturgical calendar generator.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List registered calendars")
    sub.add_parser("year", help="Generate one liturgical year as CSV or JSON")
    sub.add_parser("day", help="Show the observance of one civil date")
    sub.add_parser("feast", help="Show one feast by exact name")
    sub.add_parser("search", help="Fuzzy search for feasts")
    sub.add_parser("serve", help="Run the HTTP API with uvicorn")

    args, rest = p.parse_known_args(argv)

    setup_logger(level=settings.log_level, log_file=settings.log_file)

    fn = _COMMANDS.get(args.cmd)
    if fn is None:
        raise RuntimeError("unreachable")
    try:
        return fn(rest)
    except LitcalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
