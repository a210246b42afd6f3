# orbitscene/propagation/sgp4_propagator.py
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from sgp4.api import Satrec

MINUTES_PER_DAY = 1440.0

# Status codes returned by Satrec.sgp4
SGP4_ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Satellite has decayed",
    6: "Satellite has decayed (low altitude)",
}


def build_satrec(line1: str, line2: str) -> Satrec:
    return Satrec.twoline2rv(line1, line2)


@dataclass(frozen=True)
class TrackedObject:
    """
    One catalog entry ready for propagation.

    ``satrec`` is the handle returned by the sgp4 library; ``epoch`` is
    derived once from line 1 when the catalog is parsed.
    """
    name: str
    satrec: Any
    epoch: datetime
    line1: str = ""
    line2: str = ""

    def minutes_since_epoch(self, now: datetime) -> float:
        return (now - self.epoch).total_seconds() / 60.0


@dataclass(frozen=True)
class PropagationResult:
    error_code: int
    position_km: Optional[np.ndarray] = None
    velocity_kms: Optional[np.ndarray] = None

    @property
    def ok(self) -> bool:
        return self.error_code == 0

    @property
    def reason(self) -> Optional[str]:
        if self.ok:
            return None
        return SGP4_ERROR_CODES.get(self.error_code, f"Unknown error code {self.error_code}")


def propagate_minutes(sat, minutes: float) -> PropagationResult:
    """
    Propagate ``sat`` to ``minutes`` after its element-set epoch.

    Args:
        sat (Satrec): Satellite record (from build_satrec)
        minutes (float): Time since epoch in minutes

    Returns:
        PropagationResult: position [km] and velocity [km/s] on success,
        the sgp4 status code and no vectors otherwise
    """
    e, r, v = sat.sgp4(sat.jdsatepoch, sat.jdsatepochF + minutes / MINUTES_PER_DAY)
    if e != 0:
        return PropagationResult(error_code=int(e))
    return PropagationResult(
        error_code=0,
        position_km=np.array(r, dtype=float),
        velocity_kms=np.array(v, dtype=float),
    )


def propagate_object(obj: TrackedObject, now: datetime) -> PropagationResult:
    return propagate_minutes(obj.satrec, obj.minutes_since_epoch(now))
