"""Splitting of multiple-star catalogue lines into single components."""

from __future__ import annotations

from typing import List

from .entries import StellarEntry
from .identifiers import parse_identifier


def add_component_entry(entry: StellarEntry, base_number: str, component: str, out: List[StellarEntry], prefix: str = "GJ") -> StellarEntry:
    """Append an independent copy of *entry* identified as ``<prefix> <base_number><component>``."""
    new_entry = entry.copy()
    new_entry.add_identifier(parse_identifier(f"{prefix} {base_number}{component}"))
    new_entry.sort_identifiers()
    out.append(new_entry)
    return new_entry


def expand_components(entry: StellarEntry, base_number: str, components: str, out: List[StellarEntry], prefix: str = "GJ") -> int:
    """Append one entry per component letter and return how many were added.

    Fewer than two component characters give a single entry carrying them
    verbatim ("" or "A"); otherwise every character becomes its own entry.
    """
    if len(components) < 2:
        add_component_entry(entry, base_number, components, out, prefix)
        return 1
    for component in components:
        add_component_entry(entry, base_number, component, out, prefix)
    return len(components)
