from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from zestarcat.layouts import get_layout

# Proxima Centauri as listed by CNS3 (B1950) and the accurate coordinates (J2000).
PROXIMA_CNS3 = {
    "gj": "551",
    "ra": "14 26 19",
    "dec": "-62 28.1",
    "pm": "3.853",
    "pa": "281.5",
    "rv": "-16",
    "spectral_type": "M5  e",
    "vmag": "11.05",
    "b_v": "1.97",
    "parallax": "771.8",
    "parallax_err": "2.6",
    "name": "V645 Cen",
}
PROXIMA_GJAC = {
    "gj": "Gl 551",
    "hip": "HIP 70890",
    "ra": "14 29 42.95",
    "dec": "-62 40 46.1",
    "pmra": "-3.775",
    "pmdec": "0.769",
    "jmag": "5.357",
    "hmag": "4.835",
}


def fixed_width_line(layout_name: str, values: Dict[str, str], length: Optional[int] = None) -> str:
    """Lay *values* out at their catalogue columns; pad to the layout minimum."""
    layout = get_layout(layout_name)
    end = layout.min_length
    for name, text in values.items():
        column = layout.field(name)
        end = max(end, column.start + len(text), column.min_length)
    buf = [" "] * end
    for name, text in values.items():
        start = layout.field(name).start
        buf[start : start + len(text)] = list(text)
    line = "".join(buf)
    return line if length is None else line[:length]


@pytest.fixture
def cns3_line() -> Callable[..., str]:
    def build(length: Optional[int] = None, **values: str) -> str:
        return fixed_width_line("gj_cns3", values, length)

    return build


@pytest.fixture
def gjac_line() -> Callable[..., str]:
    def build(length: Optional[int] = None, **values: str) -> str:
        return fixed_width_line("gj_ac", values, length)

    return build


@pytest.fixture
def proxima_cns3() -> Dict[str, str]:
    return dict(PROXIMA_CNS3)


@pytest.fixture
def proxima_gjac() -> Dict[str, str]:
    return dict(PROXIMA_GJAC)
