"""
Loading of the pallet configuration shipped in ``palletstack/config``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from palletstack.models.pallet import PalletFootprint

CONFIG_DIR = Path(__file__).resolve().parent / "config"
PALLETS_FILE = CONFIG_DIR / "pallets.json"


def load_config(path: Path = PALLETS_FILE) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def load_pallets(config: Dict[str, Any]) -> Dict[str, PalletFootprint]:
    """Return the configured footprints keyed by their config key."""
    return {key: PalletFootprint.from_dict(value) for key, value in config["pallets"].items()}


def default_pallet(config: Dict[str, Any]) -> PalletFootprint:
    pallets = load_pallets(config)
    key = config.get("default_pallet")
    if key not in pallets:
        raise KeyError(f"default_pallet {key!r} is not one of {sorted(pallets)}")
    return pallets[key]


def height_presets(config: Dict[str, Any]) -> Dict[str, float]:
    """Return preset stack-height limits (label -> mm) in file order."""
    return {label: float(value) for label, value in config.get("height_presets", {}).items()}
