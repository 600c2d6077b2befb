#!/usr/bin/env python3
"""
Build the fused nearby-star catalogue from CNS3 and the Gliese accurate coordinates.

Example:
    python tools/build_nearby_catalog.py --cns3 ./data/catalog.dat --gjac ./data/gj_ac.dat --names ./data/names.csv --json report.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import logging
import math
import sys
from typing import List, Sequence

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from zestarcat import StellarEntry, build_nearby_catalog, entries_to_array
from zestarcat.identifiers import Catalog
from zestarcat.settings import EPOCH_CHOICES, ImportSettings, load_settings


def _sample_rows(entries: Sequence[StellarEntry], limit: int) -> List[dict]:
    if not entries or limit <= 0:
        return []
    if len(entries) <= limit:
        indices = range(len(entries))
    else:
        indices = np.linspace(0, len(entries) - 1, num=limit, dtype=int)
    return [entries[int(idx)].to_dict() for idx in indices]


def _summarize(label: str, entries: Sequence[StellarEntry], samples: int) -> dict:
    stars = entries_to_array(entries)
    vmag = stars["vmag"][np.isfinite(stars["vmag"])]
    dist = stars["dist_ly"][np.isfinite(stars["dist_ly"])]
    with_hip = sum(1 for entry in entries if entry.get_identifier(Catalog.HIP))
    named = sum(1 for entry in entries if entry.names)
    return {
        "catalog": label,
        "star_count": len(entries),
        "with_hip": with_hip,
        "named": named,
        "vmag_range": [float(vmag.min()), float(vmag.max())] if vmag.size else None,
        "distance_ly_range": [float(dist.min()), float(dist.max())] if dist.size else None,
        "sample_stars": _sample_rows(entries, samples),
    }


def _print_summary(info: dict) -> None:
    print(f"{info['catalog']}: {info['star_count']:,} star(s)")
    print(f"  With HIP identifier: {info['with_hip']:,}  Named: {info['named']:,}")
    if info["vmag_range"]:
        lo, hi = info["vmag_range"]
        print(f"  V magnitude range: {lo:.2f} … {hi:.2f}")
    if info["distance_ly_range"]:
        lo, hi = info["distance_ly_range"]
        print(f"  Distance range: {lo:.2f} … {hi:.2f} ly")
    if info["sample_stars"]:
        print("  Sample stars:")
        for row in info["sample_stars"]:
            ident = ", ".join(row["identifiers"]) or "?"
            name = f" ({row['names'][0]})" if row["names"] else ""
            vmag = "" if row["vmag"] is None or math.isnan(row["vmag"]) else f"  V {row['vmag']:.2f}"
            print(f"    {ident}{name}  RA {row['ra_deg']:.6f}°  DEC {row['dec_deg']:.6f}°{vmag}")
    print("")


def run(settings: ImportSettings, json_path: Path | None) -> int:
    if not settings.cns3_path or not settings.gjac_path:
        logging.error("both a CNS3 and a GJ accurate-coordinates file are required")
        return 2
    catalog = build_nearby_catalog(
        settings.cns3_path,
        settings.gjac_path,
        names_path=settings.names_path,
        source_epoch=settings.source_epoch,
        target_epoch=settings.target_epoch,
    )
    if not catalog.cns3_count and not catalog.ac_count:
        print("No stars imported.")
        return 1
    report = [
        _summarize("GJ AC", catalog.ac_stars, settings.report_samples),
        _summarize("CNS3", catalog.stars, settings.report_samples),
    ]
    for info in report:
        _print_summary(info)
    if json_path:
        json_path.write_text(json.dumps(report, indent=2))
        print(f"JSON report saved to {json_path}")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--settings", type=Path, help="JSON settings file to start from")
    parser.add_argument("--cns3", help="CNS3 catalog.dat (V/70A)")
    parser.add_argument("--gjac", help="Gliese accurate coordinates table (J/PASP/122/885)")
    parser.add_argument("--names", help="CSV of identifier,name[,name...] rows")
    parser.add_argument("--source-epoch", choices=EPOCH_CHOICES, help="epoch of the CNS3 coordinates (default: B1950)")
    parser.add_argument("--target-epoch", choices=EPOCH_CHOICES, help="epoch of the output (default: J2000)")
    parser.add_argument("--samples", type=int, help="number of sample stars per catalogue")
    parser.add_argument("--json", type=Path, help="optional path to write the JSON summary")
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.settings) if args.settings else ImportSettings()
    for attr, value in (
        ("cns3_path", args.cns3),
        ("gjac_path", args.gjac),
        ("names_path", args.names),
        ("source_epoch", args.source_epoch),
        ("target_epoch", args.target_epoch),
        ("report_samples", args.samples),
        ("log_level", args.log_level),
    ):
        if value is not None:
            setattr(settings, attr, value)
    log_level = getattr(logging, str(settings.log_level).upper(), None)
    if not isinstance(log_level, int):
        parser.error(f"invalid log level {settings.log_level!r}")
    logging.basicConfig(level=log_level, format="%(levelname)s %(message)s")
    return run(settings, args.json)


if __name__ == "__main__":
    sys.exit(main())
