"""Stellar entries produced by the catalogue importers."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
import math
from typing import Dict, Iterable, List, Optional, Sequence

import astropy.units as u
from astropy.constants import c as _SPEED_OF_LIGHT
import numpy as np

from .identifiers import Catalog, Identifier, add_identifier, get_identifier, sort_identifiers

# Unknown quantities are carried as None throughout; NaN only appears in the
# numpy export below.

ARCSEC_PER_RAD = (1.0 * u.rad).to_value(u.arcsec)
LY_PER_PARSEC = (1.0 * u.pc).to_value(u.lyr)
LIGHT_KM_PER_SEC = _SPEED_OF_LIGHT.to_value(u.km / u.s)

STAR_DTYPE = np.dtype(
    [
        ("ra_deg", "<f8"),
        ("dec_deg", "<f8"),
        ("dist_ly", "<f8"),
        ("pmra_mas_yr", "<f8"),
        ("pmdec_mas_yr", "<f8"),
        ("rv_km_s", "<f8"),
        ("vmag", "<f4"),
        ("bmag", "<f4"),
    ]
)


class ObjectType(Enum):
    NONEXISTENT = "NO"
    STAR = "SS"


def type_to_code(object_type: ObjectType) -> str:
    return object_type.value


def code_to_type(code: str) -> ObjectType:
    try:
        return ObjectType(code.strip().upper())
    except ValueError:
        return ObjectType.NONEXISTENT


@dataclass
class AngularPosition:
    """Longitude/latitude in radians; distance in light years or None when unknown."""

    lon: float
    lat: float
    distance: Optional[float] = None


@dataclass
class KinematicState:
    """Proper motion in rad/yr (longitude rate, not scaled by cos(lat)) and radial velocity in units of c."""

    pm_lon: Optional[float] = None
    pm_lat: Optional[float] = None
    radial_velocity: Optional[float] = None

    @property
    def has_proper_motion(self) -> bool:
        return self.pm_lon is not None and self.pm_lat is not None


@dataclass
class StellarEntry:
    identifiers: List[Identifier] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    position: AngularPosition = field(default_factory=lambda: AngularPosition(0.0, 0.0))
    motion: KinematicState = field(default_factory=KinematicState)
    vmag: Optional[float] = None
    bmag: Optional[float] = None
    spectral_type: str = ""
    object_type: ObjectType = ObjectType.STAR

    def copy(self) -> "StellarEntry":
        return copy.deepcopy(self)

    def get_identifier(self, catalog: Catalog) -> Identifier:
        return get_identifier(self.identifiers, catalog)

    def add_identifier(self, ident: Identifier) -> bool:
        return add_identifier(ident, self.identifiers)

    def set_identifiers(self, idents: Iterable[Identifier]) -> None:
        unique: List[Identifier] = []
        for ident in idents:
            add_identifier(ident, unique)
        self.identifiers = sort_identifiers(unique)

    def sort_identifiers(self) -> None:
        self.identifiers = sort_identifiers(self.identifiers)

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""

    def to_dict(self) -> Dict[str, object]:
        pos = self.position
        motion = self.motion
        return {
            "identifiers": [str(ident) for ident in self.identifiers],
            "names": list(self.names),
            "type": type_to_code(self.object_type),
            "ra_deg": math.degrees(pos.lon),
            "dec_deg": math.degrees(pos.lat),
            "distance_ly": pos.distance,
            "pmra_mas_yr": None if motion.pm_lon is None else motion.pm_lon * ARCSEC_PER_RAD * 1000.0,
            "pmdec_mas_yr": None if motion.pm_lat is None else motion.pm_lat * ARCSEC_PER_RAD * 1000.0,
            "rv_km_s": None if motion.radial_velocity is None else motion.radial_velocity * LIGHT_KM_PER_SEC,
            "vmag": self.vmag,
            "bmag": self.bmag,
            "spectral_type": self.spectral_type,
        }


def _or_nan(value: Optional[float], scale: float = 1.0) -> float:
    return float("nan") if value is None else value * scale


def entries_to_array(entries: Sequence[StellarEntry]) -> np.ndarray:
    """Tabular view of *entries* with the dtype :data:`STAR_DTYPE` (unknowns become NaN)."""
    stars = np.zeros(len(entries), dtype=STAR_DTYPE)
    if not entries:
        return stars
    mas = ARCSEC_PER_RAD * 1000.0
    stars["ra_deg"] = np.degrees([entry.position.lon for entry in entries])
    stars["dec_deg"] = np.degrees([entry.position.lat for entry in entries])
    stars["dist_ly"] = [_or_nan(entry.position.distance) for entry in entries]
    stars["pmra_mas_yr"] = [_or_nan(entry.motion.pm_lon, mas) for entry in entries]
    stars["pmdec_mas_yr"] = [_or_nan(entry.motion.pm_lat, mas) for entry in entries]
    stars["rv_km_s"] = [_or_nan(entry.motion.radial_velocity, LIGHT_KM_PER_SEC) for entry in entries]
    stars["vmag"] = [_or_nan(entry.vmag) for entry in entries]
    stars["bmag"] = [_or_nan(entry.bmag) for entry in entries]
    return stars
