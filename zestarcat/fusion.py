"""Field-level merge of provisional entries with a reference catalogue."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Tuple

from .entries import AngularPosition, KinematicState, StellarEntry
from .identifiers import Catalog, add_identifier, sort_identifiers
from .objectmap import ObjectMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergePolicy:
    """Which quantities the reference catalogue is authoritative for."""

    name: str
    position: bool = False
    proper_motion: bool = False
    distance: bool = False
    radial_velocity: bool = False
    magnitudes: bool = False
    identifier_catalogs: Tuple[Catalog, ...] = ()


# CNS3 against the Gliese accurate coordinates: astrometry and cross-ids come
# from the reference, radial velocity and photometry stay with CNS3.
ASTROMETRY_POLICY = MergePolicy(
    name="astrometry",
    position=True,
    proper_motion=True,
    distance=True,
    identifier_catalogs=(Catalog.HIP, Catalog.BAYER, Catalog.FLAMSTEED, Catalog.GCVS),
)

# Gliese accurate coordinates against Hipparcos: distance, radial velocity
# and magnitudes come from Hipparcos, the coordinates stay.
PHOTOMETRY_POLICY = MergePolicy(
    name="photometry",
    distance=True,
    radial_velocity=True,
    magnitudes=True,
    identifier_catalogs=(Catalog.BAYER, Catalog.FLAMSTEED, Catalog.GCVS),
)


def merge_entry(entry: StellarEntry, reference: StellarEntry, policy: MergePolicy) -> None:
    """Overwrite *entry* in place from *reference* according to *policy*.

    Distance, radial velocity and magnitudes are only taken when the
    reference actually knows them. *reference* is never modified.
    """
    pos = entry.position
    ref_pos = reference.position
    lon, lat = (ref_pos.lon, ref_pos.lat) if policy.position else (pos.lon, pos.lat)
    distance = pos.distance
    if policy.distance and ref_pos.distance is not None:
        distance = ref_pos.distance

    motion = entry.motion
    ref_motion = reference.motion
    pm_lon, pm_lat = motion.pm_lon, motion.pm_lat
    if policy.proper_motion:
        pm_lon, pm_lat = ref_motion.pm_lon, ref_motion.pm_lat
    radial_velocity = motion.radial_velocity
    if policy.radial_velocity and ref_motion.radial_velocity is not None:
        radial_velocity = ref_motion.radial_velocity

    entry.position = AngularPosition(lon, lat, distance)
    entry.motion = KinematicState(pm_lon, pm_lat, radial_velocity)

    if policy.magnitudes:
        if reference.vmag is not None:
            entry.vmag = reference.vmag
        if reference.bmag is not None:
            entry.bmag = reference.bmag

    idents = list(entry.identifiers)
    for catalog in policy.identifier_catalogs:
        add_identifier(reference.get_identifier(catalog), idents)
    entry.identifiers = sort_identifiers(idents)


def fuse_entries(entries: Iterable[StellarEntry], object_map: ObjectMap, policy: MergePolicy) -> int:
    """Cross-match each entry by its identifier in ``object_map.catalog`` and merge matches.

    Returns the number of entries that found a reference.
    """
    matched = 0
    total = 0
    for entry in entries:
        total += 1
        reference = object_map.lookup(entry.get_identifier(object_map.catalog))
        if reference is None:
            continue
        merge_entry(entry, reference, policy)
        matched += 1
    logger.info(
        "%s merge via %s: %d of %d entries matched",
        policy.name,
        object_map.catalog.name,
        matched,
        total,
    )
    return matched
