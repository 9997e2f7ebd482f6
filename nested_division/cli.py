"""
nested-division command line.

Usage:
  nested-division build  [--data-dir D] [--output O] [--sink sql|sqlite] [--table T]
  nested-division verify [--data-dir D]

Settings not given on the command line come from the environment
(DIVISION_DATA_DIR, DIVISION_OUTPUT, DIVISION_SINK, DIVISION_TABLE, LOG_LEVEL).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import BuildConfig
from .errors import DivisionError
from .loader import load_dataset
from .pipeline import index_store, run_config

LOG = logging.getLogger("nested_division.cli")


def _config(args: argparse.Namespace) -> BuildConfig:
    return BuildConfig.from_env().override(
        data_dir=args.data_dir,
        output=getattr(args, "output", None),
        sink=getattr(args, "sink", None),
        table=getattr(args, "table", None),
        log_level=args.log_level,
    )


def cmd_build(args: argparse.Namespace) -> int:
    config = _config(args)
    result = run_config(config)
    print(
        f"{result.rows_emitted} rows, keys 1..{result.max_key}, "
        f"{len(result.forest)} provinces -> {config.output}"
    )
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    config = _config(args)
    result = index_store(load_dataset(config.data_dir))
    print(f"OK: {result.node_count} nodes, {len(result.forest)} provinces, keys 1..{result.max_key}")
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--data-dir", type=Path, help="Directory holding provinces/cities/areas/streets.json")
    p.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nested-division",
        description="Encode an administrative division dataset as a nested-set table.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    p = subparsers.add_parser("build", help="Build, index and emit the nested-set rows.")
    _add_common(p)
    p.add_argument("--output", type=Path, help="Output file (default: ./division.sql)")
    p.add_argument("--sink", choices=("sql", "sqlite"), help="Output format (default: sql)")
    p.add_argument("--table", help="Target table name (default: nested)")
    p.set_defaults(func=cmd_build)

    p = subparsers.add_parser("verify", help="Build and index without emitting; check invariants.")
    _add_common(p)
    p.set_defaults(func=cmd_verify)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = (args.log_level or BuildConfig.from_env().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        return args.func(args)
    except DivisionError as exc:
        LOG.error("%s: %s", type(exc).__name__, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
