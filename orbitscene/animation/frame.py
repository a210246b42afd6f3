# orbitscene/animation/frame.py
"""
Per-frame update of the tracked-object scene.

All scene state lives in a FrameState that the caller owns and passes to
``advance_frame`` once per display refresh. Nothing here touches a renderer,
so the update can be driven from a Streamlit fragment, a script, or a test
with a fixed clock.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import numpy as np

from orbitscene.config import SIDEREAL_DAY_S, TrackerConfig
from orbitscene.propagation.sgp4_propagator import PropagationResult, TrackedObject, propagate_object

logger = logging.getLogger(__name__)


def rotation_increment(delta_s: float, sidereal_day_s: float = SIDEREAL_DAY_S) -> float:
    """Earth rotation angle [rad] covered in ``delta_s`` seconds."""
    return 2 * math.pi * delta_s / sidereal_day_s


@dataclass
class FrameState:
    objects: List[TrackedObject]
    positions: np.ndarray
    stale: np.ndarray
    earth_rotation: float = 0.0
    last_results: List[Optional[PropagationResult]] = field(default_factory=list)

    @classmethod
    def from_objects(cls, objects: Sequence[TrackedObject]) -> "FrameState":
        n = len(objects)
        return cls(
            objects=list(objects),
            # NaN until the first successful propagation
            positions=np.full((n, 3), np.nan),
            stale=np.zeros(n, dtype=bool),
            last_results=[None] * n,
        )


def advance_frame(
    state: FrameState,
    now: datetime,
    delta_s: float,
    config: Optional[TrackerConfig] = None,
) -> List[PropagationResult]:
    """
    Propagate every tracked object to ``now`` and spin the Earth by ``delta_s``.

    Successful results are written to ``state.positions`` in body radii.
    A failed result leaves that object's position exactly as it was and marks
    it stale; the failure is returned, not raised.
    """
    config = config or TrackerConfig()
    results = []
    for i, obj in enumerate(state.objects):
        result = propagate_object(obj, now)
        if result.ok:
            state.positions[i] = result.position_km / config.body_radius_km
            if state.stale[i]:
                logger.info("Propagation recovered for %s", obj.name)
            state.stale[i] = False
        else:
            if not state.stale[i]:
                logger.warning("Propagation failed for %s (sgp4 error %d: %s), keeping last position",
                               obj.name, result.error_code, result.reason)
            state.stale[i] = True
        results.append(result)

    state.last_results = results
    state.earth_rotation += rotation_increment(delta_s, config.sidereal_day_s)
    return results


class FrameClock:
    """Wall-clock seconds elapsed between successive ticks."""

    def __init__(self, time_fn: Callable[[], float] = time.monotonic):
        self._time_fn = time_fn
        self._last = time_fn()

    def tick(self) -> float:
        current = self._time_fn()
        delta = current - self._last
        self._last = current
        return delta
