"""
Fixed-column layouts of the nearby-star catalogues.

The column offsets are sourced from the CDS ReadMe files:
  * https://cdsarc.u-strasbg.fr/ftp/cats/V/70A/  (CNS3)
  * https://cdsarc.unistra.fr/ftp/J/PASP/122/885  (Gliese accurate coordinates)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
import json
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class FieldDef:
    """One fixed-width column coming from ``layouts.json``."""

    name: str
    start: int
    width: Optional[int]
    requires: Optional[int]

    @property
    def stop(self) -> Optional[int]:
        return None if self.width is None else self.start + self.width

    @property
    def min_length(self) -> int:
        """Line length needed before the field is read at all."""
        if self.requires is not None:
            return self.requires
        return self.start + (self.width or 0)


@dataclass(frozen=True)
class CatalogLayout:
    """In-memory representation of one catalogue's column layout."""

    name: str
    title: str
    min_length: int
    fields: Tuple[FieldDef, ...]
    _by_name: Dict[str, FieldDef] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError(f"layout {self.name} has no fields defined")
        mapping = {column.name: column for column in self.fields}
        object.__setattr__(self, "_by_name", mapping)

    def field(self, name: str) -> FieldDef:
        try:
            return self._by_name[name]
        except KeyError as exc:
            raise KeyError(f"field {name!r} not defined in layout {self.name}") from exc

    def iter_fields(self) -> Iterable[FieldDef]:
        return iter(self.fields)


def _load_layouts() -> Dict[str, CatalogLayout]:
    """Read the bundled JSON metadata."""

    with resources.files("zestarcat.data").joinpath("layouts.json").open("r", encoding="utf-8") as handle:
        payload = json.load(handle)

    layouts: Dict[str, CatalogLayout] = {}
    for name, row in payload.items():
        fields: List[FieldDef] = []
        for column in row["fields"]:
            fields.append(
                FieldDef(
                    name=column["name"],
                    start=int(column["start"]),
                    width=None if column.get("width") is None else int(column["width"]),
                    requires=None if column.get("requires") is None else int(column["requires"]),
                )
            )
        layouts[name] = CatalogLayout(
            name=name,
            title=row.get("title", name),
            min_length=int(row["min_length"]),
            fields=tuple(fields),
        )
    return layouts


LAYOUTS: Dict[str, CatalogLayout] = _load_layouts()


def get_layout(name: str) -> CatalogLayout:
    try:
        return LAYOUTS[name]
    except KeyError as exc:
        raise KeyError(f"unknown layout {name!r}") from exc


def list_layout_names() -> Tuple[str, ...]:
    return tuple(sorted(LAYOUTS))
