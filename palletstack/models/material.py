"""
Data model representing a material item (one carton size) read from a
material list.

Dimensions are outer dimensions in millimetres (mm). The item is only a
record: values must be numeric (anything else raises ``InvalidDimension``), but
zero, negative or non-finite sizes are kept so rows from a spreadsheet can be
listed before the planner validates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from palletstack.models.errors import require_number, require_positive


@dataclass(frozen=True)
class MaterialItem:
    """Immutable box specification; ``name`` and ``item_id`` are display only."""

    length: float
    width: float
    height: float
    name: str = field(default="Material")
    item_id: str = field(default="")

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", require_number("length", self.length))
        object.__setattr__(self, "width", require_number("width", self.width))
        object.__setattr__(self, "height", require_number("height", self.height))
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "item_id", str(self.item_id))

    def validate(self) -> "MaterialItem":
        """Raise ``InvalidDimension`` unless all three dimensions are positive and finite."""
        require_positive("length", self.length)
        require_positive("width", self.width)
        require_positive("height", self.height)
        return self

    @property
    def volume(self) -> float:
        """Return the cubic volume of a single box in mm^3."""
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        """Expose dimensions as an (L, W, H) tuple."""
        return self.length, self.width, self.height

    @property
    def label(self) -> str:
        return f"{self.name} ({self.length:g} x {self.width:g} x {self.height:g} mm)"

    def to_dict(self) -> Dict[str, float | str]:
        """Serialize the item for reporting."""
        return {
            "id": self.item_id,
            "name": self.name,
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "volume": self.volume,
        }
