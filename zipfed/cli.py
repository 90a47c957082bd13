from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack
from typing import Any, Dict, List, Optional, TextIO

import requests
import yaml

from zipfed import config as config_mod
from zipfed.datasets.federal import fetch as federal_fetch
from zipfed.datasets.load import DIALECTS, ON_ERROR_SKIP, get_dialect, load_lines
from zipfed.errors import IoError, OpenError, ParseError, UsageError
from zipfed.export import export_store, state_filter
from zipfed.query import run_queries
from zipfed.store import ZipStore
from zipfed.summary import render_summary

logger = logging.getLogger("zipfed")

EXIT_OK = 0
EXIT_USAGE = -1
EXIT_OPEN_INPUT = -2
EXIT_OPEN_OUTPUT = -3
EXIT_PARSE = -4
EXIT_IO = -5

QUERY_PROMPT = "Enter the names of the cities whose zip codes you want to find (exact case, e.g. ADJUNTAS). Ctrl-D ends.\n"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        raise UsageError(message)


def _setup_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")


def _open(path: str, mode: str, role: str) -> TextIO:
    try:
        return open(path, mode, encoding="utf-8")
    except OSError as exc:
        raise OpenError(path, role, exc.strerror or str(exc)) from exc


def _load(args: argparse.Namespace, cfg: Dict[str, Any], fh: TextIO) -> ZipStore:
    dialect = get_dialect(args.dialect or cfg["load"]["dialect"])
    skip_header = bool(cfg["load"]["skip_header"]) and not args.no_header
    on_error = ON_ERROR_SKIP if args.skip_bad_records else cfg["load"]["on_error"]
    try:
        return load_lines(fh, dialect, skip_header=skip_header, on_error=on_error)
    except (OSError, UnicodeDecodeError) as exc:
        raise IoError(f"failed reading {args.input}: {exc}") from exc


def cmd_export(args: argparse.Namespace, cfg: Dict[str, Any]) -> int:
    predicate = state_filter(args.state or cfg["export"]["states"])
    with ExitStack() as stack:
        fin = stack.enter_context(_open(args.input, "r", "input"))
        fout = stack.enter_context(_open(args.output, "w", "output")) if args.output else sys.stdout
        store = _load(args, cfg, fin)
        if args.sort_by_city:
            store.sort_by_city()
        try:
            written = export_store(fout, store, predicate)
            fout.flush()
        except OSError as exc:
            raise IoError(f"failed writing {args.output or '<stdout>'}: {exc}") from exc
    if args.output:
        logger.info("Wrote %d records to %s", written, args.output)
    return EXIT_OK


def cmd_query(args: argparse.Namespace, cfg: Dict[str, Any]) -> int:
    with _open(args.input, "r", "input") as fin:
        store = _load(args, cfg, fin)
    store.sort_by_city()
    if sys.stdin.isatty():
        sys.stderr.write(QUERY_PROMPT)
    try:
        answered = run_queries(store, sys.stdin, sys.stdout)
    except (OSError, UnicodeDecodeError) as exc:
        raise IoError(f"query i/o failed: {exc}") from exc
    logger.info("Answered %d queries", answered)
    return EXIT_OK


def cmd_summary(args: argparse.Namespace, cfg: Dict[str, Any]) -> int:
    with _open(args.input, "r", "input") as fin:
        store = _load(args, cfg, fin)
    sys.stdout.write(render_summary(store, top=args.top))
    return EXIT_OK


def cmd_fetch(args: argparse.Namespace, cfg: Dict[str, Any]) -> int:
    try:
        path = federal_fetch.fetch(cfg, args.out)
    except ValueError as exc:
        raise UsageError(str(exc)) from exc
    except FileNotFoundError as exc:
        local_path = cfg["datasets"]["federal"].get("local_path")
        raise OpenError(local_path or exc.filename or "", "input", str(exc)) from exc
    except requests.RequestException as exc:
        raise IoError(f"download failed: {exc}") from exc
    except OSError as exc:
        raise IoError(f"fetch failed: {exc}") from exc
    sys.stdout.write(path + "\n")
    return EXIT_OK


def _add_load_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", help="ZIP code CSV to read")
    p.add_argument("--dialect", choices=sorted(DIALECTS), help="Input layout (default from config: federal)")
    p.add_argument("--no-header", action="store_true", help="Treat the first line as data")
    p.add_argument("--skip-bad-records", action="store_true", help="Log and skip unparseable lines instead of exiting")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="zipfed", description="Load, convert and query federal ZIP code CSV data.")
    parser.add_argument("--config", help="Path to config YAML")
    sub = parser.add_subparsers(dest="cmd", required=True)

    export_cmd = sub.add_parser("export", help="Re-serialize records as zip,TYPE,city,state,lat,lon lines.")
    _add_load_options(export_cmd)
    export_cmd.add_argument("output", nargs="?", help="Output file (default: stdout)")
    export_cmd.add_argument("--state", action="append", default=[], help="Only export this state (repeatable)")
    export_cmd.add_argument("--sort-by-city", action="store_true", help="Sort records by city before writing")
    export_cmd.set_defaults(func=cmd_export)

    query_cmd = sub.add_parser("query", help="Look up ZIP codes by exact city name read from stdin.")
    _add_load_options(query_cmd)
    query_cmd.set_defaults(func=cmd_query)

    summary_cmd = sub.add_parser("summary", help="Print record counts by type and state.")
    _add_load_options(summary_cmd)
    summary_cmd.add_argument("--top", type=int, default=10, help="Number of states to list (0 = all)")
    summary_cmd.set_defaults(func=cmd_summary)

    fetch_cmd = sub.add_parser("fetch", help="Download the federal ZIP code CSV into the raw cache.")
    fetch_cmd.add_argument("--out", help="Write here instead of the dated raw cache directory")
    fetch_cmd.set_defaults(func=cmd_fetch)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    _setup_logging()
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        try:
            cfg = config_mod.load_config(args.config)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise UsageError(f"bad config: {exc}") from exc
        return args.func(args, cfg)
    except UsageError as exc:
        logger.error("usage: %s", exc)
        return EXIT_USAGE
    except OpenError as exc:
        logger.error("%s - exiting", exc)
        return EXIT_OPEN_INPUT if exc.role == "input" else EXIT_OPEN_OUTPUT
    except ParseError as exc:
        logger.error("failed to process input record (%s) - exiting", exc)
        return EXIT_PARSE
    except IoError as exc:
        logger.error("%s", exc)
        return EXIT_IO


if __name__ == "__main__":
    raise SystemExit(main())
