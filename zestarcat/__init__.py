"""
Top-level package for the zestarcat nearby-star catalogue fusion.

Parses the CNS3 and Gliese accurate-coordinate catalogues, brings them to
J2000, splits multiple-star lines and merges them into one entry list.
"""

from .entries import AngularPosition, KinematicState, ObjectType, StellarEntry, entries_to_array
from .epochs import EpochTransform, pm_pa_to_pmra_pmdec, pmra_pmdec_to_pm_pa
from .fusion import ASTROMETRY_POLICY, PHOTOMETRY_POLICY, MergePolicy, fuse_entries, merge_entry
from .identifiers import Catalog, Identifier, parse_identifier
from .names import apply_names, identifiers_to_names, load_name_table
from .nearby import NearbyCatalog, build_nearby_catalog, import_gj_ac, import_gj_cns3
from .objectmap import ObjectMap

__all__ = [
    "ASTROMETRY_POLICY",
    "AngularPosition",
    "Catalog",
    "EpochTransform",
    "Identifier",
    "KinematicState",
    "MergePolicy",
    "NearbyCatalog",
    "ObjectMap",
    "ObjectType",
    "PHOTOMETRY_POLICY",
    "StellarEntry",
    "apply_names",
    "build_nearby_catalog",
    "entries_to_array",
    "fuse_entries",
    "identifiers_to_names",
    "import_gj_ac",
    "import_gj_cns3",
    "load_name_table",
    "merge_entry",
    "parse_identifier",
    "pm_pa_to_pmra_pmdec",
    "pmra_pmdec_to_pm_pa",
]
