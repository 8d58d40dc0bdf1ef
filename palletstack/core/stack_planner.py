"""
Stacking logic for placing identical material boxes onto a pallet.

Both horizontal orientations of the box are tiled on the footprint; the
denser one is used for odd layers and, when the other orientation holds the
same number of boxes, it is used for even layers so the courses interlock.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from palletstack.core.layer_layout import LayerPlan, evaluate_layer
from palletstack.models.errors import require_positive
from palletstack.models.material import MaterialItem
from palletstack.models.pallet import DEFAULT_FOOTPRINT, PalletFootprint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackPlan:
    material: MaterialItem
    max_height_constraint: float
    total_layers: int
    total_boxes: int
    layer_height: float
    stack_height: float
    odd_layer: LayerPlan
    even_layer: Optional[LayerPlan]
    pallet_utilization: float
    pallet: PalletFootprint = field(default=DEFAULT_FOOTPRINT)
    advisories: Tuple[str, ...] = field(default=())

    @property
    def boxes_per_layer(self) -> int:
        return self.odd_layer.total_boxes

    @property
    def interlocked(self) -> bool:
        """True when even layers use the rotated alternate pattern."""
        return self.even_layer is not None

    def layer_for(self, index: int) -> LayerPlan:
        """
        Return the pattern of the layer at ``index`` (0-based, so index 0 is
        layer 1, an odd layer).
        """
        if index % 2 == 1 and self.even_layer is not None:
            return self.even_layer
        return self.odd_layer

    def iter_layers(self) -> Iterator[Tuple[int, float, LayerPlan]]:
        """Yield ``(index, z, layer)`` from the pallet deck upwards."""
        for index in range(self.total_layers):
            yield index, index * self.layer_height, self.layer_for(index)

    def to_dict(self) -> dict:
        return {
            "material": self.material.to_dict(),
            "pallet": self.pallet.to_dict(),
            "max_height_constraint": self.max_height_constraint,
            "total_layers": self.total_layers,
            "total_boxes": self.total_boxes,
            "boxes_per_layer": self.boxes_per_layer,
            "layer_height": self.layer_height,
            "stack_height": self.stack_height,
            "odd_layer": self.odd_layer.to_dict(),
            "even_layer": self.even_layer.to_dict() if self.even_layer else None,
            "pallet_utilization": self.pallet_utilization,
            "advisories": list(self.advisories),
        }


def choose_layer_patterns(
    item: MaterialItem,
    pallet: PalletFootprint = DEFAULT_FOOTPRINT,
) -> Tuple[LayerPlan, LayerPlan]:
    """
    Return ``(best, alt)`` for the two horizontal orientations of ``item``.

    Higher box count wins, then higher area efficiency, then the unrotated
    pattern. The pallet footprint itself is never rotated.
    """
    normal = evaluate_layer(item.length, item.width, pallet.length, pallet.width, rotated=False)
    rotated = evaluate_layer(item.width, item.length, pallet.length, pallet.width, rotated=True)

    if rotated.total_boxes > normal.total_boxes:
        return rotated, normal
    if normal.total_boxes > rotated.total_boxes:
        return normal, rotated
    if rotated.efficiency > normal.efficiency:
        return rotated, normal
    return normal, rotated


def _advisories(item: MaterialItem, best: LayerPlan, alt: LayerPlan, total_layers: int) -> Tuple[str, ...]:
    notes = []
    if best.total_boxes == 0:
        notes.append(
            f"{item.name} ({item.length:g} x {item.width:g} mm) does not fit the pallet footprint "
            "in either orientation."
        )
    elif total_layers == 0:
        notes.append(f"Box height {item.height:g} mm exceeds the usable stack height.")
    if 0 < alt.total_boxes < best.total_boxes:
        notes.append(
            f"Layers are not interlocked: the {alt.pattern_name.lower()} holds {alt.total_boxes} "
            f"boxes against {best.total_boxes}, so every layer uses the {best.pattern_name.lower()}."
        )
    return tuple(notes)


def plan_stack(
    item: MaterialItem,
    max_stack_height: float,
    pallet: PalletFootprint = DEFAULT_FOOTPRINT,
) -> StackPlan:
    """
    Plan a full pallet stack of ``item`` under ``max_stack_height``.

    Raises ``InvalidDimension`` before any computation when a box dimension
    or the height limit is zero, negative or not finite. A box that does not
    fit the footprint is not an error: the plan holds zero layers and zero
    boxes.
    """
    item.validate()
    max_stack_height = require_positive("max_stack_height", max_stack_height)

    best, alt = choose_layer_patterns(item, pallet)

    if best.total_boxes > 0:
        total_layers = math.floor(pallet.usable_height(max_stack_height) / item.height)
    else:
        total_layers = 0
    stack_height = total_layers * item.height

    even_layer: Optional[LayerPlan] = None
    if alt.total_boxes == best.total_boxes and best.total_boxes > 0:
        even_layer = alt

    total_boxes = total_layers * best.total_boxes

    if total_layers > 0:
        utilization = (total_boxes * item.volume) / (pallet.area * stack_height)
    else:
        utilization = 0.0

    advisories = _advisories(item, best, alt, total_layers)
    for note in advisories:
        logger.warning(note)

    plan = StackPlan(
        material=item,
        max_height_constraint=max_stack_height,
        total_layers=total_layers,
        total_boxes=total_boxes,
        layer_height=item.height,
        stack_height=stack_height,
        odd_layer=best,
        even_layer=even_layer,
        pallet_utilization=utilization,
        pallet=pallet,
        advisories=advisories,
    )
    logger.debug(
        "Planned %s: %d layers x %d boxes (%s%s)",
        item.name,
        total_layers,
        best.total_boxes,
        best.pattern_name,
        ", interlocked" if even_layer is not None else "",
    )
    return plan
