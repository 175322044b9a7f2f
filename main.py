"""
Channel Trend Engine — command line entry point.

Loads a channel snapshot (YAML or JSON) and prints the analysis as JSON:
  items:    list of video records (id, title, publishedAt, viewCount, ...)
  channel:  {subscriberCount, viewCount, videoCount}
  market:   optional {competitors, audience, trends, businessProfile}

Usage:
  python main.py snapshot.yaml
  python main.py snapshot.json --now 2025-06-01T12:00:00Z --output report.json
  python main.py snapshot.yaml --timeframe-hours 72
  python main.py snapshot.yaml --no-window
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from trend_engine import InvalidInputError, analyze, config

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure console logging with timestamps."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv=None):
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Channel Trend Engine — rising content, guaranteed topics and channel health"
    )
    parser.add_argument(
        "snapshot",
        help="Path to a YAML or JSON snapshot file",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Analysis clock as ISO 8601 (default: current UTC time)",
    )
    parser.add_argument(
        "--timeframe-hours",
        type=float,
        default=config.TREND_TIMEFRAME_HOURS,
        help="Only trend-analyse videos younger than this many hours (default 168)",
    )
    parser.add_argument(
        "--no-window",
        dest="timeframe_hours",
        action="store_const",
        const=None,
        help="Trend-analyse every video regardless of age",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the JSON result to this file instead of stdout",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=config.JSON_INDENT,
        help="JSON indent (default from JSON_INDENT, 2)",
    )
    return parser.parse_args(argv)


def load_snapshot(path: Path) -> dict:
    """Read a snapshot file. JSON is valid YAML, so one loader covers both."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise InvalidInputError(f"Snapshot '{path}' must be a mapping at the top level")
    if "items" not in data or "channel" not in data:
        raise InvalidInputError(f"Snapshot '{path}' needs 'items' and 'channel' sections")
    return data


def run(args) -> int:
    try:
        snapshot = load_snapshot(Path(args.snapshot))
        result = analyze(
            snapshot["items"],
            snapshot["channel"],
            market_signals=snapshot.get("market"),
            now=args.now,
            timeframe_hours=args.timeframe_hours,
        )
    except FileNotFoundError:
        logger.error(f"Snapshot not found: {args.snapshot}")
        return 1
    except yaml.YAMLError as e:
        logger.error(f"Could not parse snapshot {args.snapshot}: {e}")
        return 1
    except InvalidInputError as e:
        logger.error(f"Invalid snapshot: {e}")
        return 1

    payload = json.dumps(result.to_dict(), indent=args.indent, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Analysis written to {args.output}")
    else:
        sys.stdout.write(payload + "\n")

    health = result.channel_health_score
    logger.info(
        f"{len(result.rising_content)} rising videos, "
        f"{len(result.guaranteed_topics)} guaranteed topics, "
        f"health {health.overall}/100"
    )
    return 0


def main(argv=None):
    setup_logging()
    args = parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
