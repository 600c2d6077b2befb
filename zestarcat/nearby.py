"""Importers for the nearby-star catalogues (CNS3 and the Gliese accurate coordinates).

Typical order: import the accurate coordinates first (optionally against
Hipparcos entries), then CNS3 against the result::

    ac_stars: list[StellarEntry] = []
    import_gj_ac("gj_ac.dat", hip_stars, ac_stars)
    stars: list[StellarEntry] = []
    import_gj_cns3("catalog.dat", names, ac_stars, stars)
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .components import expand_components
from .entries import (
    ARCSEC_PER_RAD,
    LIGHT_KM_PER_SEC,
    LY_PER_PARSEC,
    AngularPosition,
    KinematicState,
    StellarEntry,
)
from .epochs import EpochLike, EpochTransform, pm_pa_to_pmra_pmdec
from .fusion import ASTROMETRY_POLICY, PHOTOMETRY_POLICY, fuse_entries, merge_entry
from .identifiers import Catalog, add_identifier, sort_identifiers
from .names import NameTable, apply_names, load_name_table
from .objectmap import ObjectMap
from .records import Cns3Record, GjAcRecord, parse_cns3_line, parse_gjac_line

logger = logging.getLogger(__name__)

# CNS3 lists 3803 lines; with multiples split and the Sun dropped it yields 3849 stars.
CNS3_EXPECTED_STARS = 3849
# The accurate-coordinates table has 4106 lines and 4266 single components.
GJAC_EXPECTED_STARS = 4266


def _open_catalog(path: Path | str) -> Optional[TextIO]:
    path = Path(path).expanduser()
    try:
        return path.open("r", encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("cannot open catalogue %s: %s", path, exc)
        return None


def cns3_entry(record: Cns3Record, transform: EpochTransform) -> StellarEntry:
    """Provisional J2000 entry for one CNS3 record (no GJ identifier yet)."""
    pm_lon = pm_lat = None
    if record.pm_arcsec is not None and record.pa_deg is not None:
        pm_lon, pm_lat = pm_pa_to_pmra_pmdec(record.pm_arcsec / ARCSEC_PER_RAD, math.radians(record.pa_deg), record.dec)

    position, motion = transform.apply(AngularPosition(record.ra, record.dec), KinematicState(pm_lon, pm_lat))

    if record.parallax_mas > 1.0:
        position.distance = 1000.0 * LY_PER_PARSEC / record.parallax_mas
    if record.rv_km_s is not None:
        motion.radial_velocity = record.rv_km_s / LIGHT_KM_PER_SEC

    bmag = None
    if record.b_v is not None and record.vmag is not None:
        bmag = record.b_v + record.vmag

    return StellarEntry(
        identifiers=sort_identifiers(record.identifiers),
        position=position,
        motion=motion,
        vmag=record.vmag,
        bmag=bmag,
        spectral_type=record.spectral_type,
    )


def gjac_entry(record: GjAcRecord) -> StellarEntry:
    """Provisional J2000 entry for one accurate-coordinates record."""
    pm_lon = None
    if record.pmra_cosdec_arcsec is not None:
        pm_lon = record.pmra_cosdec_arcsec / ARCSEC_PER_RAD / math.cos(record.dec)
    pm_lat = None
    if record.pmdec_arcsec is not None:
        pm_lat = record.pmdec_arcsec / ARCSEC_PER_RAD

    idents = []
    add_identifier(record.hip, idents)
    return StellarEntry(
        identifiers=idents,
        position=AngularPosition(record.ra, record.dec),
        motion=KinematicState(pm_lon, pm_lat),
    )


def import_gj_ac(path: Path | str, hip_entries: Sequence[StellarEntry], out: List[StellarEntry]) -> int:
    """Import the Gliese accurate coordinates, appending single components to *out*.

    Distance, radial velocity, magnitudes and Bayer/Flamsteed/variable-star
    identifiers come from the Hipparcos entry with the same HIP number.
    Returns the number of entries appended (0 if the file cannot be opened).
    """
    handle = _open_catalog(path)
    if handle is None:
        return 0

    hip_map = ObjectMap.build(hip_entries, Catalog.HIP)
    count = 0
    rejected = 0
    matched = 0
    with handle:
        for line in handle:
            record = parse_gjac_line(line.rstrip("\r\n"))
            if record is None:
                rejected += 1
                continue
            entry = gjac_entry(record)
            reference = hip_map.lookup(record.hip)
            if reference is not None:
                merge_entry(entry, reference, PHOTOMETRY_POLICY)
                matched += 1
            count += expand_components(entry, record.gj, record.components, out)

    logger.info(
        "GJ AC %s: %d star(s) imported (%d line(s) skipped, %d Hipparcos match(es))",
        Path(path).name,
        count,
        rejected,
        matched,
    )
    return count


def import_gj_cns3(
    path: Path | str,
    name_table: NameTable,
    ac_entries: Sequence[StellarEntry],
    out: List[StellarEntry],
    transform: Optional[EpochTransform] = None,
) -> int:
    """Import CNS3, precess it to J2000 and merge accurate GJ astrometry.

    Each component entry is cross-matched by GJ identifier against
    *ac_entries*; on a match its position, proper motion, known distance and
    HIP/Bayer/Flamsteed/variable identifiers are taken from there while radial
    velocity and magnitudes stay from CNS3. Common names are then resolved
    from *name_table*. Returns the number of entries appended.
    """
    handle = _open_catalog(path)
    if handle is None:
        return 0

    new_entries: List[StellarEntry] = []
    count = 0
    rejected = 0
    with handle:
        if transform is None:
            transform = EpochTransform("B1950", "J2000")
        for line in handle:
            record = parse_cns3_line(line.rstrip("\r\n"))
            if record is None:
                rejected += 1
                continue
            entry = cns3_entry(record, transform)
            count += expand_components(entry, record.gj, record.components, new_entries)

    ac_map = ObjectMap.build(ac_entries, Catalog.GJ)
    fuse_entries(new_entries, ac_map, ASTROMETRY_POLICY)
    named = sum(1 for entry in new_entries if apply_names(entry, name_table))
    out.extend(new_entries)

    logger.info(
        "CNS3 %s: %d star(s) imported (%d line(s) skipped, %d named)",
        Path(path).name,
        count,
        rejected,
        named,
    )
    return count


@dataclass
class NearbyCatalog:
    ac_stars: List[StellarEntry] = field(default_factory=list)
    stars: List[StellarEntry] = field(default_factory=list)
    ac_count: int = 0
    cns3_count: int = 0


def build_nearby_catalog(
    cns3_path: Path | str,
    gjac_path: Path | str,
    *,
    names_path: Path | str | None = None,
    hip_entries: Sequence[StellarEntry] = (),
    source_epoch: EpochLike = "B1950",
    target_epoch: EpochLike = "J2000",
) -> NearbyCatalog:
    """Run both importers in order and return the fused catalogue."""
    catalog = NearbyCatalog()
    names = load_name_table(names_path) if names_path else {}
    catalog.ac_count = import_gj_ac(gjac_path, hip_entries, catalog.ac_stars)
    transform = EpochTransform(source_epoch, target_epoch)
    catalog.cns3_count = import_gj_cns3(cns3_path, names, catalog.ac_stars, catalog.stars, transform)
    for label, count, expected in (
        ("GJ AC", catalog.ac_count, GJAC_EXPECTED_STARS),
        ("CNS3", catalog.cns3_count, CNS3_EXPECTED_STARS),
    ):
        if count and count != expected:
            logger.warning("%s produced %d star(s); the full catalogue gives %d", label, count, expected)
    return catalog
