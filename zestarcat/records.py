"""Parsers turning one fixed-width catalogue line into an intermediate record."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
import re
from typing import Dict, List, Optional, Tuple

from .identifiers import Catalog, Identifier, INVALID, add_identifier, make_identifier, parse_identifier
from .layouts import CatalogLayout, get_layout
from .textfields import layout_field, parse_angle, str_to_float, str_to_int

logger = logging.getLogger(__name__)

CNS3_LAYOUT = get_layout("gj_cns3")
GJAC_LAYOUT = get_layout("gj_ac")

_GJ_DESIGNATION_RE = re.compile(r"^(?:GJ|GL|NN|WO)?\s*(\d+(?:\.\d+)?)\s*([A-D]*)", re.IGNORECASE)


@dataclass
class Cns3Record:
    """One CNS3 line; angles in radians at B1950, raw catalogue units otherwise."""

    gj: str
    components: str
    ra: float
    dec: float
    pm_arcsec: Optional[float] = None
    pa_deg: Optional[float] = None
    rv_km_s: Optional[float] = None
    spectral_type: str = ""
    vmag: Optional[float] = None
    b_v: Optional[float] = None
    parallax_mas: float = 0.0
    parallax_err_mas: float = 0.0
    identifiers: List[Identifier] = field(default_factory=list)


@dataclass
class GjAcRecord:
    """One line of the Gliese accurate coordinates; J2000 radians, arcsec/yr."""

    gj: str
    components: str
    hip: Identifier
    ra: float
    dec: float
    pmra_cosdec_arcsec: Optional[float] = None
    pmdec_arcsec: Optional[float] = None
    jmag: Optional[float] = None
    hmag: Optional[float] = None


def read_columns(line: str, layout: CatalogLayout) -> Optional[Dict[str, str]]:
    """Trimmed text of every column, or None when the line is too short to use."""
    if len(line) < layout.min_length:
        return None
    return {column.name: layout_field(line, column) for column in layout.iter_fields()}


def _optional_float(text: str) -> Optional[float]:
    return str_to_float(text) if text else None


def _ra_dec(columns: Dict[str, str]) -> Optional[Tuple[float, float]]:
    ra_text, dec_text = columns["ra"], columns["dec"]
    if not ra_text or not dec_text:
        return None
    return math.radians(parse_angle(ra_text, is_ra=True)), math.radians(parse_angle(dec_text, is_ra=False))


def variable_star_identifier(text: str) -> Identifier:
    """GCVS designation from a free-text name column, else invalid.

    Names starting "MU" or "NU" are capitalised Bayer letters, not variables.
    """
    if text.startswith(("MU", "NU")):
        return INVALID
    ident = parse_identifier(text)
    return ident if ident.catalog == Catalog.GCVS else INVALID


def split_gj_designation(text: str) -> Tuple[str, str]:
    """Split "Gl 15 A" into ("15", "A").

    A second designation after a slash ("GJ 3406 A/3407 B") is dropped.
    """
    first = text.split("/", 1)[0].strip()
    match = _GJ_DESIGNATION_RE.match(first)
    if match is None:
        return first, ""
    return match.group(1), match.group(2).upper()


def parse_cns3_line(line: str) -> Optional[Cns3Record]:
    columns = read_columns(line, CNS3_LAYOUT)
    if columns is None:
        return None
    coords = _ra_dec(columns)
    if coords is None:
        logger.debug("CNS3 line without position skipped: %r", line[:30])
        return None

    record = Cns3Record(
        gj=columns["gj"],
        components=columns["components"],
        ra=coords[0],
        dec=coords[1],
        rv_km_s=_optional_float(columns["rv"]),
        spectral_type=columns["spectral_type"],
        vmag=_optional_float(columns["vmag"]),
        b_v=_optional_float(columns["b_v"]),
        parallax_mas=str_to_float(columns["parallax"]),
        parallax_err_mas=str_to_float(columns["parallax_err"]),
    )
    if columns["pm"] and columns["pa"]:
        record.pm_arcsec = str_to_float(columns["pm"])
        record.pa_deg = str_to_float(columns["pa"])

    if columns["hd"]:
        add_identifier(make_identifier(Catalog.HD, str_to_int(columns["hd"])), record.identifiers)
    if columns["dm"]:
        add_identifier(parse_identifier(columns["dm"]), record.identifiers)
    if columns["name"]:
        add_identifier(variable_star_identifier(columns["name"]), record.identifiers)
    return record


def parse_gjac_line(line: str) -> Optional[GjAcRecord]:
    columns = read_columns(line, GJAC_LAYOUT)
    if columns is None:
        return None
    coords = _ra_dec(columns)
    if coords is None:
        logger.debug("GJ AC line without position skipped: %r", line[:30])
        return None
    gj, components = split_gj_designation(columns["gj"])
    return GjAcRecord(
        gj=gj,
        components=components,
        hip=parse_identifier(columns["hip"]),
        ra=coords[0],
        dec=coords[1],
        pmra_cosdec_arcsec=_optional_float(columns["pmra"]),
        pmdec_arcsec=_optional_float(columns["pmdec"]),
        jmag=_optional_float(columns["jmag"]),
        hmag=_optional_float(columns["hmag"]),
    )
