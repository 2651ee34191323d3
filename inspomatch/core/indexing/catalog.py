# Path: inspomatch/core/indexing/catalog.py
# Purpose: Load the service media catalog that feeds the index builder.
# Layer: core/indexing.
# Details: Reads a JSON manifest of provider service photos and resolves image paths.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from inspomatch.core.models.domain import ServiceDisplay, ServiceMediaRecord

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}
DISPLAY_FIELDS = tuple(ServiceDisplay.__dataclass_fields__)


def record_from_entry(entry: Dict[str, Any], base_dir: Path) -> ServiceMediaRecord:
    """Build a ServiceMediaRecord from one manifest entry."""

    if "media_id" not in entry or "path" not in entry:
        raise ValueError(f"Catalog entry requires 'media_id' and 'path': {entry}")

    path = Path(entry["path"])
    if not path.is_absolute():
        path = base_dir / path
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported image type for {entry['media_id']}: {path.suffix}")

    display_values = {key: entry[key] for key in DISPLAY_FIELDS if entry.get(key) is not None}
    if "service_price_min" in display_values:
        display_values["service_price_min"] = float(display_values["service_price_min"])

    return ServiceMediaRecord(
        media_id=str(entry["media_id"]),
        path=path,
        tags=[str(tag) for tag in entry.get("tags") or []],
        category=entry.get("category") or "general",
        display=ServiceDisplay(**display_values),
    )


def load_catalog(manifest_path: Path | str) -> List[ServiceMediaRecord]:
    """Return every catalog entry listed in a JSON manifest.

    The manifest is either a list of entries or an object with a "media" list.
    Relative image paths resolve against the manifest's directory.
    """

    manifest = Path(manifest_path)
    payload = json.loads(manifest.read_text(encoding="utf-8"))
    entries = payload.get("media", []) if isinstance(payload, dict) else payload
    return [record_from_entry(entry, manifest.parent) for entry in entries]
