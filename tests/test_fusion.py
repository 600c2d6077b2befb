from __future__ import annotations

import logging

import pytest

from zestarcat.entries import AngularPosition, KinematicState, StellarEntry
from zestarcat.fusion import ASTROMETRY_POLICY, PHOTOMETRY_POLICY, fuse_entries, merge_entry
from zestarcat.identifiers import Catalog, parse_identifier
from zestarcat.objectmap import ObjectMap


def _entry(*idents: str, **kwargs) -> StellarEntry:
    entry = StellarEntry(**kwargs)
    for text in idents:
        entry.add_identifier(parse_identifier(text))
    entry.sort_identifiers()
    return entry


def test_object_map_keeps_last_entry_for_duplicate_identifier():
    first = _entry("GJ 551", vmag=1.0)
    second = _entry("GJ 551", vmag=2.0)
    other = _entry("GJ 15A")
    object_map = ObjectMap.build([first, None, other, second, _entry("HD 1")], Catalog.GJ)
    assert len(object_map) == 2
    assert object_map.slot(parse_identifier("GJ 551")) == 4
    assert object_map.lookup(parse_identifier("Gl 551")) is second
    assert object_map.slot(parse_identifier("GJ 1")) == 0
    assert object_map.lookup(parse_identifier("GJ 1")) is None
    assert parse_identifier("GJ 15 A") in object_map


def test_astrometry_merge_takes_reference_coordinates_and_keeps_radial_velocity():
    entry = _entry(
        "GJ 551",
        position=AngularPosition(3.7, -1.0, 4.3),
        motion=KinematicState(1e-5, 2e-5, -5.3e-5),
        vmag=11.05,
    )
    reference = _entry(
        "GJ 551",
        "HIP 70890",
        "V645 Cen",
        "HD 1",
        position=AngularPosition(3.76, -1.09, 4.24),
        motion=KinematicState(-1.8e-5, 3.7e-6, 9e-6),
        vmag=11.13,
    )
    merge_entry(entry, reference, ASTROMETRY_POLICY)
    assert (entry.position.lon, entry.position.lat) == (3.76, -1.09)
    assert entry.position.distance == 4.24
    assert (entry.motion.pm_lon, entry.motion.pm_lat) == (-1.8e-5, 3.7e-6)
    assert entry.motion.radial_velocity == -5.3e-5
    assert entry.vmag == 11.05
    assert [str(ident) for ident in entry.identifiers] == ["V645 Cen", "GJ 551", "HIP 70890"]


def test_astrometry_merge_distance_only_when_known_but_motion_always():
    entry = _entry("GJ 1", position=AngularPosition(0.1, 0.2, 14.2), motion=KinematicState(1e-6, 1e-6))
    reference = _entry("GJ 1", position=AngularPosition(0.11, 0.21))
    merge_entry(entry, reference, ASTROMETRY_POLICY)
    assert entry.position.distance == 14.2
    assert entry.motion.pm_lon is None
    assert entry.motion.pm_lat is None


def test_merge_leaves_reference_untouched():
    entry = _entry("GJ 1", position=AngularPosition(0.1, 0.2, 14.2))
    reference = _entry("GJ 1", "HIP 439", position=AngularPosition(0.11, 0.21, 14.0))
    before = reference.to_dict()
    merge_entry(entry, reference, ASTROMETRY_POLICY)
    entry.identifiers.append(parse_identifier("HD 225213"))
    assert reference.to_dict() == before


def test_photometry_merge_keeps_coordinates_and_adopts_known_values():
    entry = _entry(
        "GJ 551",
        "HIP 70890",
        position=AngularPosition(3.76, -1.09),
        motion=KinematicState(-1.8e-5, 3.7e-6),
        vmag=None,
    )
    reference = _entry(
        "HIP 70890",
        "Alp Cen",
        "HD 1",
        position=AngularPosition(3.7, -1.0, 4.24),
        motion=KinematicState(-1e-5, 1e-6, -7.3e-5),
        vmag=11.01,
        bmag=None,
    )
    merge_entry(entry, reference, PHOTOMETRY_POLICY)
    assert (entry.position.lon, entry.position.lat) == (3.76, -1.09)
    assert entry.position.distance == 4.24
    assert (entry.motion.pm_lon, entry.motion.pm_lat) == (-1.8e-5, 3.7e-6)
    assert entry.motion.radial_velocity == -7.3e-5
    assert entry.vmag == 11.01
    assert entry.bmag is None
    assert not entry.get_identifier(Catalog.HD)
    assert entry.get_identifier(Catalog.BAYER) == parse_identifier("Alp Cen")


def test_fuse_entries_counts_matches(caplog):
    references = [_entry("GJ 551", "HIP 70890", position=AngularPosition(3.76, -1.09, 4.24))]
    object_map = ObjectMap.build(references, Catalog.GJ)
    entries = [_entry("GJ 551"), _entry("GJ 9999"), _entry("HD 5")]
    with caplog.at_level(logging.INFO, logger="zestarcat.fusion"):
        matched = fuse_entries(entries, object_map, ASTROMETRY_POLICY)
    assert matched == 1
    assert entries[0].get_identifier(Catalog.HIP) == parse_identifier("HIP 70890")
    assert entries[0].position.distance == pytest.approx(4.24)
    assert not entries[1].get_identifier(Catalog.HIP)
    assert "1 of 3 entries matched" in caplog.text
