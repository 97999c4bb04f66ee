"""servertiming CLI."""
from __future__ import annotations

import argparse
import sys

from . import locator as _locator
from .core.errors import ConfigurationError
from .registry import TimingRegistry


def _cmd_locate(args: argparse.Namespace) -> int:
    loc = _locator.PathListLocator(args.candidate) if args.candidate else _locator.locator_from_env()
    for cand in loc.candidates:
        mark = "ok" if _locator.is_writable_file(cand) else "--"
        print(f"[{mark}] {cand}")
    chosen = loc.locate()
    if chosen is None:
        print("No writable log file found; log() calls will be no-ops.")
        return 1
    print(f"Selected: {chosen}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    try:
        TimingRegistry(locator=_locator.PathListLocator(())).set_log_file(args.path)
    except ConfigurationError as e:
        print(f"Rejected: {e}")
        return 2
    print(f"OK: {args.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="servertiming", description="Server-Timing helper utilities")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("locate", help="Show which log file auto-discovery would select")
    sp.add_argument(
        "--candidate",
        action="append",
        default=None,
        help="Candidate path (repeatable, in order); defaults to SERVERTIMING_LOG_CANDIDATES or the platform list",
    )
    sp.set_defaults(func=_cmd_locate)

    sp = sub.add_parser("check", help="Validate a log file the way set_log_file does")
    sp.add_argument("path")
    sp.set_defaults(func=_cmd_check)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
