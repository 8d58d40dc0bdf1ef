"""
Single-layer grid tiling of one box orientation on the pallet footprint.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

STANDARD_PATTERN = "Standard Grid"
ROTATED_PATTERN = "Rotated Grid"


@dataclass(frozen=True)
class BoxPlacement:
    """
    Position of one box within a layer, in footprint coordinates.
    """

    x: float
    y: float
    length: float
    width: float
    rotated: bool

    def as_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "length": self.length,
            "width": self.width,
            "rotated": self.rotated,
        }


@dataclass(frozen=True)
class LayerPlan:
    pattern_name: str
    total_boxes: int
    positions: Tuple[BoxPlacement, ...]
    used_length: float
    used_width: float
    efficiency: float
    rows: int
    cols: int
    rotated: bool

    def to_dict(self) -> dict:
        return {
            "pattern_name": self.pattern_name,
            "total_boxes": self.total_boxes,
            "rows": self.rows,
            "cols": self.cols,
            "used_length": self.used_length,
            "used_width": self.used_width,
            "efficiency": self.efficiency,
            "rotated": self.rotated,
            "positions": [placement.as_dict() for placement in self.positions],
        }


def evaluate_layer(
    box_length: float,
    box_width: float,
    footprint_length: float,
    footprint_width: float,
    rotated: bool,
) -> LayerPlan:
    """
    Tile the footprint with a uniform grid of boxes and centre the block.

    Box length runs along the footprint length. Partial boxes are never
    placed, so a box longer than the footprint yields an empty layer.
    Callers are expected to pass validated, positive dimensions.
    """
    cols = math.floor(footprint_length / box_length)
    rows = math.floor(footprint_width / box_width)
    total_boxes = rows * cols

    used_length = cols * box_length
    used_width = rows * box_width

    start_x = (footprint_length - used_length) / 2
    start_y = (footprint_width - used_width) / 2

    positions: List[BoxPlacement] = []
    for row in range(rows):
        for col in range(cols):
            positions.append(
                BoxPlacement(
                    x=start_x + col * box_length,
                    y=start_y + row * box_width,
                    length=box_length,
                    width=box_width,
                    rotated=rotated,
                )
            )

    return LayerPlan(
        pattern_name=ROTATED_PATTERN if rotated else STANDARD_PATTERN,
        total_boxes=total_boxes,
        positions=tuple(positions),
        used_length=used_length,
        used_width=used_width,
        efficiency=(used_length * used_width) / (footprint_length * footprint_width),
        rows=rows,
        cols=cols,
        rotated=rotated,
    )
