from __future__ import annotations
import logging
import math
import requests
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from orbitscene.config import DEFAULT_CENTURY_PIVOT, DEFAULT_MAX_TRACKED, TrackerConfig
from orbitscene.propagation.sgp4_propagator import TrackedObject, build_satrec

logger = logging.getLogger(__name__)

# Fixed column slices of TLE line 1
EPOCH_YEAR_COLS = slice(18, 20)
EPOCH_DAY_COLS = slice(20, 32)


def fetch_tle_text(url: str, timeout: float = 30) -> str:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    logger.info("Fetched %d bytes from %s", len(r.text), url)
    return r.text


def fetch_catalog(config: Optional[TrackerConfig] = None) -> str:
    config = config or TrackerConfig()
    return fetch_tle_text(config.catalog_query_url(), timeout=config.request_timeout_s)


def parse_tle_epoch(line1: str, century_pivot: int = DEFAULT_CENTURY_PIVOT) -> datetime:
    """
    Epoch of a TLE as a UTC datetime.

    Two-digit years below ``century_pivot`` land in the 2000s, the rest in
    the 1900s. The fractional day is split into hours, minutes and seconds,
    truncating at each step, so the result has whole-second resolution.
    Raises ValueError when the epoch columns are not numeric.
    """
    year = int(line1[EPOCH_YEAR_COLS])
    full_year = 2000 + year if year < century_pivot else 1900 + year
    day_of_year = float(line1[EPOCH_DAY_COLS])
    if not math.isfinite(day_of_year):
        raise ValueError(f"Invalid epoch day in TLE line: {line1!r}")

    epoch = datetime(full_year, 1, 1, tzinfo=timezone.utc)
    epoch += timedelta(days=math.floor(day_of_year) - 1)

    fractional_day = day_of_year % 1
    hours = math.floor(fractional_day * 24)
    minutes = math.floor((fractional_day * 24 - hours) * 60)
    seconds = math.floor(((fractional_day * 24 - hours) * 60 - minutes) * 60)
    return epoch.replace(hour=hours, minute=minutes, second=seconds)


def split_records(tle_text: str) -> List[Tuple[str, str, str]]:
    """
    Convert catalog text into a list of (name, line1, line2) tuples.
    Lines are taken three at a time; a trailing group of one or two lines
    is dropped.
    """
    lines = tle_text.rstrip().splitlines()
    records = []
    for i in range(0, len(lines) - 2, 3):
        records.append((lines[i].strip(), lines[i + 1].strip(), lines[i + 2].strip()))
    return records


def parse_catalog(
    tle_text: str,
    max_tracked: int = DEFAULT_MAX_TRACKED,
    century_pivot: int = DEFAULT_CENTURY_PIVOT,
    build: Callable[[str, str], object] = build_satrec,
) -> List[TrackedObject]:
    records = split_records(tle_text)
    # Only records that will be tracked get a Satrec and an epoch
    kept = records[:max_tracked]
    tracked = []
    for name, l1, l2 in kept:
        epoch = parse_tle_epoch(l1, century_pivot)
        tracked.append(TrackedObject(
            name=name,
            satrec=build(l1, l2),
            epoch=epoch,
            line1=l1,
            line2=l2,
        ))

    logger.info("Parsed %d element sets, tracking %d", len(records), len(tracked))
    if len(kept) < len(records):
        logger.debug("Dropped %d element sets beyond max_tracked=%d", len(records) - len(kept), max_tracked)
    return tracked


def load_tracked_objects(config: Optional[TrackerConfig] = None) -> List[TrackedObject]:
    config = config or TrackerConfig()
    return parse_catalog(
        fetch_catalog(config),
        max_tracked=config.max_tracked,
        century_pivot=config.century_pivot,
    )
