"""roamer CLI: partition cluster capacity across a job's tasks and report it."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import NoReturn

from roamer._exceptions import AllocationError
from roamer.config import RoamerConfig, load_job
from roamer.logging_utils import configure_logging
from roamer.partition import partition
from roamer.report.bars import write

logger = logging.getLogger("roamer.cli")


class _Parser(argparse.ArgumentParser):
    """Shows the full help and exits with 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="roamer",
        description="Split cluster capacity across the tasks of a job using group weights.",
    )
    parser.add_argument("config", type=Path, help="Cluster config file (YAML or JSON)")
    parser.add_argument("job", type=Path, help="Job topology file (YAML or JSON)")
    parser.add_argument("--json", action="store_true", help="Print the allocation as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(getattr(logging, args.log_level))

    try:
        config = RoamerConfig.load(args.config)
        job = load_job(args.job)
        allocation = partition(job, config.weights, config.capacity)
    except FileNotFoundError as exc:
        print(f"{exc.filename}: No such file or directory", file=sys.stderr)
        return 1
    except AllocationError as exc:
        print(f"roamer: error: {exc}", file=sys.stderr)
        return 1

    logger.info(
        "Allocated %d tasks: compute %d/%d, memory %d/%d",
        len(allocation),
        allocation.total_compute,
        config.capacity.effective_compute,
        allocation.total_memory,
        config.capacity.effective_memory,
    )
    allocation.apply(job)
    if args.json:
        print(json.dumps(allocation.as_dict(), indent=2, sort_keys=True))
    else:
        write(job, config.capacity, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
