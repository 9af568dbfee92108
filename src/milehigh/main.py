"""MileHigh command-line replay tool.

Feeds recorded ticks through the planner and prints the decisions, one
JSON line per tick. Handy for reproducing a game from its tick log.

Typical usage:
    milehigh ticks.jsonl
    milehigh --config config/planner.yaml --events ticks.jsonl
    cat ticks.jsonl | python -m milehigh.main -
"""

import argparse
import json
import logging
import sys
from collections.abc import Iterator
from typing import TextIO

from milehigh.core.config import ConfigError, ConfigLoader, PlannerSettings
from milehigh.core.logging_system import LoggingError, initialize_logging
from milehigh.errors import ValidationError
from milehigh.planning.planner import Planner
from milehigh.world.snapshot import parse_tick_state

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="MileHigh - air traffic waypoint planner")

    parser.add_argument(
        "ticks",
        type=argparse.FileType("r", encoding="utf-8"),
        help="JSON-lines file with one tick document per line ('-' for stdin)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Planner configuration YAML (e.g., config/planner.yaml)",
    )

    parser.add_argument(
        "--logging-config",
        type=str,
        help="Logging configuration YAML (e.g., config/logging.yaml)",
    )

    parser.add_argument(
        "--events",
        action="store_true",
        help="Print full tick reports instead of bare waypoint lists",
    )

    return parser.parse_args(argv)


def read_ticks(stream: TextIO) -> Iterator[dict]:
    """Yield tick documents from a JSON-lines stream, skipping blank lines.

    Raises:
        ValidationError: If a line is not a JSON object.
    """
    for line_number, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            document = json.loads(line)
        except json.JSONDecodeError as e:
            raise ValidationError(f"line {line_number}: invalid JSON ({e})") from e
        if not isinstance(document, dict):
            raise ValidationError(f"line {line_number}: expected a JSON object")
        yield document


def load_settings(path: str | None) -> PlannerSettings:
    """Planner settings from a YAML file, defaults when no file is given."""
    if path is None:
        return PlannerSettings()
    return PlannerSettings.from_config(ConfigLoader.load(path))


def replay(planner: Planner, stream: TextIO, out: TextIO, events: bool = False) -> int:
    """Plan every tick of a stream and write one JSON line per tick.

    Returns:
        Number of ticks planned.
    """
    count = 0
    for document in read_ticks(stream):
        report = planner.plan_tick(parse_tick_state(document))
        payload = report.to_dict() if events else [d.to_dict() for d in report.decisions]
        out.write(json.dumps(payload) + "\n")
        count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    try:
        # An explicit logging config keeps its own log_dir.
        initialize_logging(args.logging_config, use_platform_dir=args.logging_config is None)

        planner = Planner(settings=load_settings(args.config))
        with args.ticks:
            count = replay(planner, args.ticks, sys.stdout, events=args.events)
    except (ValidationError, ConfigError, LoggingError) as e:
        logger.error("%s", e)
        return 1

    logger.info(
        "Replayed %d ticks, %d aircraft landed", count, planner.session.landed_count
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
