"""
Pallet footprint model describing the stacking surface used for the boxes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from palletstack.models.errors import require_non_negative, require_positive


@dataclass(frozen=True)
class PalletFootprint:
    """Immutable plan-view footprint of the pallet plus its deck height offset."""

    length: float
    width: float
    base_height: float = field(default=0.0)  # subtracted from the stack height limit
    name: str = field(default="Pallet")

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", require_positive("pallet length", self.length))
        object.__setattr__(self, "width", require_positive("pallet width", self.width))
        object.__setattr__(
            self, "base_height", require_non_negative("pallet base_height", self.base_height)
        )

    @property
    def area(self) -> float:
        """Return pallet footprint area in mm^2."""
        return self.length * self.width

    def usable_height(self, max_stack_height: float) -> float:
        """Return the height left for cargo once the deck offset is taken off."""
        return max(0.0, max_stack_height - self.base_height)

    def to_dict(self) -> Dict[str, float | str]:
        return {
            "name": self.name,
            "length": self.length,
            "width": self.width,
            "base_height": self.base_height,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, float | str]) -> "PalletFootprint":
        """Instantiate from a raw configuration dictionary."""
        return cls(
            name=str(payload.get("name", "Pallet")),
            length=float(payload["length"]),
            width=float(payload["width"]),
            base_height=float(payload.get("base_height", 0.0)),
        )


DEFAULT_FOOTPRINT = PalletFootprint(length=1180, width=980, name="Standard 1180 x 980")
