"""Common-name lookup for catalogue identifiers."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from .entries import StellarEntry
from .identifiers import Identifier, parse_identifier

logger = logging.getLogger(__name__)

NameTable = Mapping[Identifier, Sequence[str]]


def load_name_table(path: Path | str) -> Dict[Identifier, List[str]]:
    """Read ``identifier,name[,name...]`` rows into a name table.

    Rows whose identifier does not parse are skipped. A missing file gives an
    empty table so that an import run can proceed without names.
    """
    path = Path(path).expanduser()
    table: Dict[Identifier, List[str]] = {}
    try:
        handle = path.open("r", encoding="utf-8", newline="")
    except OSError as exc:
        logger.warning("name table %s unavailable: %s", path, exc)
        return table
    skipped = 0
    with handle:
        for row in csv.reader(handle):
            if not row or row[0].lstrip().startswith("#"):
                continue
            ident = parse_identifier(row[0])
            names = [name.strip() for name in row[1:] if name.strip()]
            if not ident or not names:
                skipped += 1
                continue
            existing = table.setdefault(ident, [])
            existing.extend(name for name in names if name not in existing)
    logger.info("name table %s: %d identifier(s), %d row(s) skipped", path.name, len(table), skipped)
    return table


def identifiers_to_names(idents: Iterable[Identifier], table: NameTable) -> List[str]:
    """Names of every identifier in *idents*, in table order, without repeats."""
    wanted = set(idents)
    names: List[str] = []
    if not wanted:
        return names
    for ident, ident_names in table.items():
        if ident not in wanted:
            continue
        for name in ident_names:
            if name not in names:
                names.append(name)
    return names


def apply_names(entry: StellarEntry, table: NameTable) -> bool:
    """Replace the entry's names when the table knows any of its identifiers."""
    names = identifiers_to_names(entry.identifiers, table)
    if not names:
        return False
    entry.names = names
    return True
