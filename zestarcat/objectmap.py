"""Identifier -> entry lookup over one reference catalogue."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Sequence

from .entries import StellarEntry
from .identifiers import Catalog, Identifier

logger = logging.getLogger(__name__)


class ObjectMap:
    """Maps identifiers of one catalogue to 1-based slots in a reference list.

    Built in a single pass; when several entries share an identifier the
    later one wins. The reference list is only read, never modified.
    """

    def __init__(self, entries: Sequence[StellarEntry], catalog: Catalog, slots: Dict[Identifier, int]) -> None:
        self._entries = entries
        self.catalog = catalog
        self._slots = slots

    @classmethod
    def build(cls, entries: Sequence[StellarEntry], catalog: Catalog) -> "ObjectMap":
        slots: Dict[Identifier, int] = {}
        duplicates = 0
        for idx, entry in enumerate(entries):
            if entry is None:
                continue
            ident = entry.get_identifier(catalog)
            if not ident:
                continue
            if ident in slots:
                duplicates += 1
            slots[ident] = idx + 1
        logger.debug(
            "object map %s: %d identifier(s) over %d entries (%d duplicate(s), last kept)",
            catalog.name,
            len(slots),
            len(entries),
            duplicates,
        )
        return cls(entries, catalog, slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, ident: object) -> bool:
        return ident in self._slots

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._slots)

    def slot(self, ident: Identifier) -> int:
        """1-based position of the matching entry, 0 when there is none."""
        return self._slots.get(ident, 0)

    def lookup(self, ident: Identifier) -> Optional[StellarEntry]:
        k = self.slot(ident)
        if k > 0:
            return self._entries[k - 1]
        return None
