"""Epoch/frame normalisation of star positions and proper motions."""

from __future__ import annotations

import logging
import math
from typing import Tuple, Union

import erfa
import numpy as np
from astropy.time import Time

from .entries import AngularPosition, KinematicState
from .textfields import atan2pi

logger = logging.getLogger(__name__)

EpochLike = Union[str, float, Time]


def pm_pa_to_pmra_pmdec(pm: float, pa: float, dec: float) -> Tuple[float, float]:
    """Total proper motion + position angle to (pm in R.A., pm in Dec.); radians.

    Diverges as cos(dec) goes to zero at the poles.
    """
    pmra = pm * math.sin(pa) / math.cos(dec)
    pmdec = pm * math.cos(pa)
    return pmra, pmdec


def pmra_pmdec_to_pm_pa(pmra: float, pmdec: float, dec: float) -> Tuple[float, float]:
    """Inverse of :func:`pm_pa_to_pmra_pmdec`; position angle in [0, 2π)."""
    pmra *= math.cos(dec)
    pm = math.sqrt(pmra * pmra + pmdec * pmdec)
    pa = atan2pi(pmra, pmdec)
    return pm, pa


def epoch_time(epoch: EpochLike) -> Time:
    """Turn "B1950", "J2000", a Julian year or a :class:`Time` into a TT epoch."""
    if isinstance(epoch, Time):
        return epoch.tt
    if isinstance(epoch, (int, float)):
        return Time(float(epoch), format="jyear", scale="tt")
    text = str(epoch).strip().upper()
    fmt = {"B": "byear", "J": "jyear"}.get(text[:1])
    try:
        year = float(text[1:] if fmt else text)
    except ValueError as exc:
        raise ValueError(f"unrecognised epoch {epoch!r}") from exc
    return Time(year, format=fmt or "jyear", scale="tt")


def _position_vector(lon: float, lat: float) -> np.ndarray:
    cos_lat = math.cos(lat)
    return np.array([cos_lat * math.cos(lon), cos_lat * math.sin(lon), math.sin(lat)])


def _velocity_vector(lon: float, lat: float, pm_lon: float, pm_lat: float) -> np.ndarray:
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    return np.array(
        [
            -pm_lon * cos_lat * sin_lon - pm_lat * sin_lat * cos_lon,
            pm_lon * cos_lat * cos_lon - pm_lat * sin_lat * sin_lon,
            pm_lat * cos_lat,
        ]
    )


def _to_spherical(position: np.ndarray) -> Tuple[float, float]:
    x, y, z = position
    return atan2pi(float(y), float(x)), math.atan2(float(z), math.hypot(float(x), float(y)))


def _to_spherical_rates(position: np.ndarray, velocity: np.ndarray) -> Tuple[float, float]:
    x, y, z = position
    vx, vy, vz = velocity
    rho2 = x * x + y * y
    r2 = rho2 + z * z
    with np.errstate(divide="ignore", invalid="ignore"):
        pm_lon = (x * vy - y * vx) / rho2
        pm_lat = (vz * rho2 - z * (x * vx + y * vy)) / (r2 * np.sqrt(rho2))
    return float(pm_lon), float(pm_lat)


class EpochTransform:
    """Precession (IAU 1976) plus linear space motion from one epoch to another.

    The rotation matrix is derived once per instance; position and proper
    motion are rotated by the same matrix; a proper motion with only one
    known component comes out unknown. Distance and radial velocity pass
    through unchanged.
    """

    def __init__(self, source: EpochLike, target: EpochLike = "J2000") -> None:
        self.source = epoch_time(source)
        self.target = epoch_time(target)
        # pmat76 rotates J2000 mean coordinates to the mean equator of date.
        to_source = np.asarray(erfa.pmat76(self.source.jd1, self.source.jd2))
        to_target = np.asarray(erfa.pmat76(self.target.jd1, self.target.jd2))
        self.matrix = to_target @ to_source.T
        self.years = float(self.target.jyear - self.source.jyear)
        logger.debug("precession J%.4f -> J%.4f over %.4f yr", self.source.jyear, self.target.jyear, self.years)

    def inverse(self) -> "EpochTransform":
        return EpochTransform(self.target, self.source)

    def apply(self, position: AngularPosition, motion: KinematicState) -> Tuple[AngularPosition, KinematicState]:
        vec = _position_vector(position.lon, position.lat)
        if not motion.has_proper_motion:
            # A single known component cannot be rotated into the new frame.
            lon, lat = _to_spherical(self.matrix @ vec)
            return AngularPosition(lon, lat, position.distance), KinematicState(None, None, motion.radial_velocity)
        vel = _velocity_vector(position.lon, position.lat, motion.pm_lon, motion.pm_lat)
        new_vec = self.matrix @ (vec + vel * self.years)
        new_vel = self.matrix @ vel
        lon, lat = _to_spherical(new_vec)
        pm_lon, pm_lat = _to_spherical_rates(new_vec, new_vel)
        return AngularPosition(lon, lat, position.distance), KinematicState(pm_lon, pm_lat, motion.radial_velocity)
