from __future__ import annotations

import math

import numpy as np
import pytest

from zestarcat.entries import (
    ARCSEC_PER_RAD,
    LIGHT_KM_PER_SEC,
    LY_PER_PARSEC,
    STAR_DTYPE,
    AngularPosition,
    KinematicState,
    ObjectType,
    StellarEntry,
    code_to_type,
    entries_to_array,
    type_to_code,
)
from zestarcat.identifiers import parse_identifier


def test_unit_constants():
    assert ARCSEC_PER_RAD == pytest.approx(206264.806)
    assert LY_PER_PARSEC == pytest.approx(3.26156, rel=1e-5)
    assert LIGHT_KM_PER_SEC == pytest.approx(299792.458)


def test_object_type_codes():
    assert type_to_code(ObjectType.STAR) == "SS"
    assert code_to_type(" ss") is ObjectType.STAR
    assert code_to_type("dv") is ObjectType.NONEXISTENT
    assert code_to_type("??") is ObjectType.NONEXISTENT


def test_set_identifiers_sorts_and_deduplicates():
    entry = StellarEntry()
    entry.set_identifiers(parse_identifier(text) for text in ("HIP 70890", "Gl 551", "GJ 551", "", "V645 Cen"))
    assert [str(ident) for ident in entry.identifiers] == ["V645 Cen", "GJ 551", "HIP 70890"]
    entry.names = ["Proxima Centauri"]
    assert entry.name == "Proxima Centauri"


def test_copy_is_deep():
    entry = StellarEntry(identifiers=[parse_identifier("GJ 1")], position=AngularPosition(1.0, 0.5))
    twin = entry.copy()
    twin.position.lon = 2.0
    twin.identifiers.append(parse_identifier("HD 225213"))
    assert entry.position.lon == 1.0
    assert len(entry.identifiers) == 1


def test_entries_to_array_marks_unknowns_as_nan():
    known = StellarEntry(
        position=AngularPosition(math.pi, -0.5 * math.pi, 4.24),
        motion=KinematicState(1.0 / ARCSEC_PER_RAD, -2.0 / ARCSEC_PER_RAD, 10.0 / LIGHT_KM_PER_SEC),
        vmag=11.05,
        bmag=13.02,
    )
    stars = entries_to_array([known, StellarEntry()])
    assert stars.dtype == STAR_DTYPE
    assert stars["ra_deg"][0] == pytest.approx(180.0)
    assert stars["dec_deg"][0] == pytest.approx(-90.0)
    assert stars["pmra_mas_yr"][0] == pytest.approx(1000.0)
    assert stars["pmdec_mas_yr"][0] == pytest.approx(-2000.0)
    assert stars["rv_km_s"][0] == pytest.approx(10.0)
    assert stars["vmag"][0] == pytest.approx(11.05, abs=1e-5)
    assert np.isnan(stars["dist_ly"][1])
    assert np.isnan(stars["vmag"][1])
    assert np.isnan(stars["rv_km_s"][1])
    assert entries_to_array([]).size == 0
