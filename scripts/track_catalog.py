# scripts/track_catalog.py
"""
Print where every tracked object is right now.
Usage:
    python -m scripts.track_catalog --group stations --limit 10
    python -m scripts.track_catalog --file starlink.tle
"""

import sys
import os
import argparse
import logging
from datetime import datetime, timezone

import pandas as pd
import requests

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from orbitscene.animation.frame import FrameState, advance_frame
from orbitscene.config import TrackerConfig
from orbitscene.data.tle import load_tracked_objects, parse_catalog
from orbitscene.logging_config import configure_logging

logger = logging.getLogger(__name__)


def snapshot_table(state: FrameState) -> pd.DataFrame:
    rows = []
    for obj, pos, result in zip(state.objects, state.positions, state.last_results):
        rows.append({
            "name": obj.name,
            "epoch": obj.epoch.strftime("%Y-%m-%d %H:%M:%S"),
            "status": "ok" if result.ok else result.reason,
            "x": pos[0],
            "y": pos[1],
            "z": pos[2],
        })
    return pd.DataFrame(rows, columns=["name", "epoch", "status", "x", "y", "z"])


def load_objects(args):
    """Build the config and tracked objects from the command line."""
    config = TrackerConfig.from_env().with_overrides(
        group=args.group, max_tracked=args.limit, century_pivot=args.pivot,
    )
    if not args.file:
        return config, load_tracked_objects(config)
    with open(args.file, "r") as f:
        text = f.read()
    return config, parse_catalog(text, max_tracked=config.max_tracked, century_pivot=config.century_pivot)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Propagate a TLE catalog to the current time.")
    parser.add_argument("--group", type=str, help="CelesTrak group name (default: starlink).")
    parser.add_argument("--limit", type=int, help="Maximum number of objects to track.")
    parser.add_argument("--pivot", type=int, help="Two-digit year pivot for epochs.")
    parser.add_argument("--file", type=str, help="Read the catalog from a local file instead of fetching.")
    parser.add_argument("--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    # RequestException is an OSError, so it has to be caught first
    try:
        config, objects = load_objects(args)
    except requests.RequestException as e:
        logger.error("Catalog fetch failed: %s", e)
        return 1
    except (OSError, ValueError) as e:
        logger.error("Could not load the catalog: %s", e)
        return 1

    now = datetime.now(timezone.utc)
    state = FrameState.from_objects(objects)
    advance_frame(state, now, 0.0, config)

    table = snapshot_table(state)
    print(f"\nPositions in body radii ({config.body_radius_km:g} km) at {now:%Y-%m-%d %H:%M:%S} UTC")
    print(table.to_string(index=False, float_format=lambda v: f"{v:8.4f}"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
