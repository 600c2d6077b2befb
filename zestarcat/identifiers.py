"""Catalogue-tagged star identifiers.

An :class:`Identifier` is a small value object ``{catalog, payload}``. The
payload is the canonical text after the catalogue prefix (``"1001A"`` for
``GJ 1001A``, ``"+43 44"`` for ``BD+43 44``, the whole designation for Bayer,
Flamsteed and variable-star names). Identifiers sort by catalogue first, then
by a numeric-aware key derived from the payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering
import re
from typing import Callable, Iterable, List, MutableSequence, Optional, Sequence, Tuple


class Catalog(IntEnum):
    UNKNOWN = 0
    BAYER = 1
    FLAMSTEED = 2
    GCVS = 3
    HR = 4
    GJ = 5
    HD = 6
    SAO = 7
    BD = 8
    CD = 9
    CP = 10
    HIP = 11


_PREFIXES = {
    Catalog.HR: "HR ",
    Catalog.GJ: "GJ ",
    Catalog.HD: "HD ",
    Catalog.SAO: "SAO ",
    Catalog.BD: "BD",
    Catalog.CD: "CD",
    Catalog.CP: "CP",
    Catalog.HIP: "HIP ",
}

CONSTELLATIONS: Tuple[str, ...] = (
    "And", "Ant", "Aps", "Aqr", "Aql", "Ara", "Ari", "Aur", "Boo", "Cae", "Cam", "Cnc",
    "CVn", "CMa", "CMi", "Cap", "Car", "Cas", "Cen", "Cep", "Cet", "Cha", "Cir", "Col",
    "Com", "CrA", "CrB", "Crv", "Crt", "Cru", "Cyg", "Del", "Dor", "Dra", "Equ", "Eri",
    "For", "Gem", "Gru", "Her", "Hor", "Hya", "Hyi", "Ind", "Lac", "Leo", "LMi", "Lep",
    "Lib", "Lup", "Lyn", "Lyr", "Men", "Mic", "Mon", "Mus", "Nor", "Oct", "Oph", "Ori",
    "Pav", "Peg", "Per", "Phe", "Pic", "Psc", "PsA", "Pup", "Pyx", "Ret", "Sge", "Sgr",
    "Sco", "Scl", "Sct", "Ser", "Sex", "Tau", "Tel", "Tri", "TrA", "Tuc", "UMa", "UMi",
    "Vel", "Vir", "Vol", "Vul",
)
_CONSTELLATION_INDEX = {abbr.upper(): idx for idx, abbr in enumerate(CONSTELLATIONS)}

GREEK_LETTERS: Tuple[Tuple[str, str], ...] = (
    ("Alp", "alpha"), ("Bet", "beta"), ("Gam", "gamma"), ("Del", "delta"),
    ("Eps", "epsilon"), ("Zet", "zeta"), ("Eta", "eta"), ("The", "theta"),
    ("Iot", "iota"), ("Kap", "kappa"), ("Lam", "lambda"), ("Mu", "mu"),
    ("Nu", "nu"), ("Xi", "xi"), ("Omi", "omicron"), ("Pi", "pi"),
    ("Rho", "rho"), ("Sig", "sigma"), ("Tau", "tau"), ("Ups", "upsilon"),
    ("Phi", "phi"), ("Chi", "chi"), ("Psi", "psi"), ("Ome", "omega"),
)


def _build_greek_index() -> dict[str, int]:
    index: dict[str, int] = {"Alf": 0, "alf": 0}
    for idx, (abbr, full) in enumerate(GREEK_LETTERS):
        # Title-case or lower-case only: all-caps "MU"/"NU" are GCVS-shaped.
        for spelling in (abbr, abbr.lower(), full, full.capitalize()):
            index[spelling] = idx
    return index


_GREEK_INDEX = _build_greek_index()


def _gcvs_letter_sequence() -> Tuple[str, ...]:
    """R..Z, then RR..ZZ, then AA..QZ (J never used), as numbered by the GCVS."""
    letters = [chr(c) for c in range(ord("A"), ord("Z") + 1) if chr(c) != "J"]
    singles = [c for c in letters if c >= "R"]
    doubles: List[str] = []
    for first in singles + [c for c in letters if c < "R"]:
        doubles.extend(first + second for second in letters if second >= first)
    return tuple(singles + doubles)


_GCVS_ORDINALS = {name: idx + 1 for idx, name in enumerate(_gcvs_letter_sequence())}

_HIP_RE = re.compile(r"^HIP\s*(\d+)\s*([A-Z]?)$", re.IGNORECASE)
_HD_RE = re.compile(r"^HD\s*(\d+)\s*([A-Z]?)$", re.IGNORECASE)
_HR_RE = re.compile(r"^HR\s*(\d+)$", re.IGNORECASE)
_SAO_RE = re.compile(r"^SAO\s*(\d+)$", re.IGNORECASE)
_GJ_RE = re.compile(r"^(?:GJ|GL|NN|WO)\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)$", re.IGNORECASE)
_DM_RE = re.compile(r"^(BD|CD|CP)\s*([+-])\s*(\d{1,2})\s+(\d+)\s*([A-Za-z]?)$", re.IGNORECASE)
_BAYER_RE = re.compile(r"^([A-Za-z]{2,7})\.?\s*(\d?)\s+([A-Za-z]{3})$")
_GCVS_RE = re.compile(r"^([A-Z]{1,2}|V\s*\d{3,})\s+([A-Za-z]{3})$")
_FLAMSTEED_RE = re.compile(r"^(\d{1,3})\s+([A-Za-z]{3})$")


@total_ordering
@dataclass(frozen=True)
class Identifier:
    catalog: Catalog = Catalog.UNKNOWN
    payload: str = ""
    sort_key: Tuple = field(default=(), compare=False, repr=False)

    def __bool__(self) -> bool:
        return self.catalog != Catalog.UNKNOWN

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return (self.catalog, self.sort_key, self.payload) < (other.catalog, other.sort_key, other.payload)

    def __str__(self) -> str:
        if not self:
            return ""
        return _PREFIXES.get(self.catalog, "") + self.payload


INVALID = Identifier()


def make_identifier(catalog: Catalog, number: int, suffix: str = "") -> Identifier:
    """Build a numbered identifier (HD, HR, SAO, HIP); non-positive numbers are invalid."""
    if number <= 0 or catalog not in (Catalog.HD, Catalog.HR, Catalog.SAO, Catalog.HIP):
        return INVALID
    suffix = suffix.strip().upper()
    return Identifier(catalog, f"{number}{suffix}", (number, suffix))


def _constellation(text: str) -> Optional[str]:
    idx = _CONSTELLATION_INDEX.get(text.upper())
    return None if idx is None else CONSTELLATIONS[idx]


def _parse_numbered(regex: "re.Pattern[str]", catalog: Catalog) -> Callable[[str], Optional[Identifier]]:
    def parse(text: str) -> Optional[Identifier]:
        match = regex.match(text)
        if match is None:
            return None
        suffix = match.group(2) if regex.groups > 1 else ""
        return make_identifier(catalog, int(match.group(1)), suffix or "")

    return parse


def _parse_gj(text: str) -> Optional[Identifier]:
    match = _GJ_RE.match(text)
    if match is None:
        return None
    number = match.group(1)
    comps = match.group(2).upper()
    return Identifier(Catalog.GJ, f"{number}{comps}", (float(number), comps))


def _parse_dm(text: str) -> Optional[Identifier]:
    match = _DM_RE.match(text)
    if match is None:
        return None
    catalog = Catalog[match.group(1).upper()]
    sign = match.group(2)
    zone = int(match.group(3))
    number = int(match.group(4))
    suffix = match.group(5).upper()
    signed_zone = -zone if sign == "-" else zone
    return Identifier(catalog, f"{sign}{zone:02d} {number}{suffix}", (signed_zone, sign, number, suffix))


def _parse_bayer(text: str) -> Optional[Identifier]:
    match = _BAYER_RE.match(text)
    if match is None:
        return None
    letter = _GREEK_INDEX.get(match.group(1))
    con = _constellation(match.group(3))
    if letter is None or con is None:
        return None
    sup = match.group(2)
    abbr = GREEK_LETTERS[letter][0]
    return Identifier(
        Catalog.BAYER,
        f"{abbr}{sup} {con}",
        (_CONSTELLATION_INDEX[con.upper()], letter, int(sup or 0)),
    )


def _parse_gcvs(text: str) -> Optional[Identifier]:
    match = _GCVS_RE.match(text)
    if match is None:
        return None
    con = _constellation(match.group(2))
    if con is None:
        return None
    name = match.group(1).replace(" ", "")
    if name.startswith("V") and name[1:].isdigit():
        ordinal = int(name[1:])
        if ordinal < len(_GCVS_ORDINALS) + 1:
            return None
    else:
        ordinal = _GCVS_ORDINALS.get(name)
        if ordinal is None:
            return None
    return Identifier(Catalog.GCVS, f"{name} {con}", (_CONSTELLATION_INDEX[con.upper()], ordinal))


def _parse_flamsteed(text: str) -> Optional[Identifier]:
    match = _FLAMSTEED_RE.match(text)
    if match is None:
        return None
    con = _constellation(match.group(2))
    number = int(match.group(1))
    if con is None or number <= 0:
        return None
    return Identifier(Catalog.FLAMSTEED, f"{number} {con}", (_CONSTELLATION_INDEX[con.upper()], number))


_PARSERS: Tuple[Callable[[str], Optional[Identifier]], ...] = (
    _parse_numbered(_HIP_RE, Catalog.HIP),
    _parse_numbered(_HD_RE, Catalog.HD),
    _parse_numbered(_HR_RE, Catalog.HR),
    _parse_numbered(_SAO_RE, Catalog.SAO),
    _parse_gj,
    _parse_dm,
    _parse_bayer,
    _parse_gcvs,
    _parse_flamsteed,
)


def parse_identifier(text: str) -> Identifier:
    """Parse free text into an identifier; unrecognized text gives an invalid one."""
    value = " ".join((text or "").split())
    if not value:
        return INVALID
    for parser in _PARSERS:
        ident = parser(value)
        if ident is not None:
            return ident
    return INVALID


def add_identifier(ident: Identifier, idents: MutableSequence[Identifier]) -> bool:
    """Append *ident* unless it is invalid or already present."""
    if not ident or ident in idents:
        return False
    idents.append(ident)
    return True


def sort_identifiers(idents: Iterable[Identifier]) -> List[Identifier]:
    return sorted(idents)


def get_identifier(idents: Sequence[Identifier], catalog: Catalog) -> Identifier:
    for ident in idents:
        if ident.catalog == catalog:
            return ident
    return INVALID
