from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".zestarcat_settings.json"
# Increment when the on-disk settings layout changes
SETTINGS_SCHEMA_VERSION = 1

EPOCH_CHOICES = ("B1950", "J2000")
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ImportSettings:
    schema_version: int = SETTINGS_SCHEMA_VERSION
    cns3_path: Optional[str] = None
    gjac_path: Optional[str] = None
    names_path: Optional[str] = None
    source_epoch: str = "B1950"
    target_epoch: str = "J2000"
    log_level: str = "INFO"
    report_samples: int = 5


def _normalize_choice(value: object, choices: tuple[str, ...], default: str) -> str:
    candidate = default
    if isinstance(value, str) and value.strip():
        candidate = value.strip().upper()
    if candidate not in choices:
        return default
    return candidate


def load_settings(path: Path | str | None = None) -> ImportSettings:
    """Read settings from *path* (default :data:`SETTINGS_PATH`); defaults on any problem."""
    path = Path(path).expanduser() if path else SETTINGS_PATH
    if not path.exists():
        return ImportSettings()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable settings %s: %s", path, exc)
        return ImportSettings()
    if not isinstance(payload, dict):
        return ImportSettings()

    try:
        samples = max(0, int(payload.get("report_samples", 5)))
    except (TypeError, ValueError):
        samples = 5

    return ImportSettings(
        schema_version=SETTINGS_SCHEMA_VERSION,
        cns3_path=(payload.get("cns3_path") or None),
        gjac_path=(payload.get("gjac_path") or None),
        names_path=(payload.get("names_path") or None),
        source_epoch=_normalize_choice(payload.get("source_epoch"), EPOCH_CHOICES, "B1950"),
        target_epoch=_normalize_choice(payload.get("target_epoch"), EPOCH_CHOICES, "J2000"),
        log_level=_normalize_choice(payload.get("log_level"), LOG_LEVEL_CHOICES, "INFO"),
        report_samples=samples,
    )


def save_settings(settings: ImportSettings, path: Path | str | None = None) -> Path:
    path = Path(path).expanduser() if path else SETTINGS_PATH
    data = asdict(settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


__all__ = [
    "EPOCH_CHOICES",
    "ImportSettings",
    "LOG_LEVEL_CHOICES",
    "SETTINGS_PATH",
    "SETTINGS_SCHEMA_VERSION",
    "load_settings",
    "save_settings",
]
