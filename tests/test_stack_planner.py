import logging
import math

import pytest

from palletstack.core.stack_planner import choose_layer_patterns, plan_stack
from palletstack.models.errors import InvalidDimension
from palletstack.models.material import MaterialItem
from palletstack.models.pallet import DEFAULT_FOOTPRINT, PalletFootprint


def _item(length, width, height, name="Carton"):
    return MaterialItem(length=length, width=width, height=height, name=name)


def test_reference_stack():
    plan = plan_stack(_item(400, 300, 200), 1350)

    assert plan.pallet == DEFAULT_FOOTPRINT
    assert plan.odd_layer.rotated is False
    assert plan.odd_layer.total_boxes == 6
    assert plan.even_layer is not None
    assert plan.even_layer.rotated is True
    assert plan.even_layer.total_boxes == 6
    assert plan.interlocked
    assert plan.total_layers == 6
    assert plan.stack_height == 1200
    assert plan.layer_height == 200
    assert plan.total_boxes == 36
    assert plan.max_height_constraint == 1350
    expected = (36 * 400 * 300 * 200) / (1180 * 980 * 1200)
    assert math.isclose(plan.pallet_utilization, expected)
    assert plan.advisories == ()


def test_square_box_prefers_unrotated_and_interlocks():
    best, alt = choose_layer_patterns(_item(250, 250, 100))

    assert best.rotated is False
    assert alt.rotated is True
    assert best.total_boxes == alt.total_boxes == 12
    assert best.efficiency == alt.efficiency

    plan = plan_stack(_item(250, 250, 100), 700)
    assert plan.odd_layer.rotated is False
    assert plan.even_layer is not None


def test_denser_rotation_wins():
    plan = plan_stack(_item(300, 500, 100), 1350)

    assert plan.odd_layer.rotated is True
    assert plan.odd_layer.total_boxes == 6


def test_unequal_counts_stack_uniformly_with_advisory(caplog):
    with caplog.at_level(logging.WARNING, logger="palletstack.core.stack_planner"):
        plan = plan_stack(_item(500, 300, 100), 1350)

    assert plan.odd_layer.total_boxes == 6
    assert plan.even_layer is None
    assert not plan.interlocked
    assert plan.total_boxes == 13 * 6
    assert len(plan.advisories) == 1
    assert "not interlocked" in plan.advisories[0]
    assert "not interlocked" in caplog.text


def test_box_larger_than_pallet():
    plan = plan_stack(_item(1200, 1000, 100), 1350)

    assert plan.odd_layer.total_boxes == 0
    assert plan.even_layer is None
    assert plan.total_layers == 0
    assert plan.stack_height == 0
    assert list(plan.iter_layers()) == []
    assert plan.total_boxes == 0
    assert plan.pallet_utilization == 0.0
    assert any("does not fit" in note for note in plan.advisories)


def test_box_taller_than_limit():
    plan = plan_stack(_item(400, 300, 1400), 1350)

    assert plan.total_layers == 0
    assert plan.stack_height == 0
    assert plan.total_boxes == 0
    assert plan.pallet_utilization == 0.0
    assert list(plan.iter_layers()) == []


@pytest.mark.parametrize("limit", [1200, 1250, 1399.99])
def test_height_is_quantised_to_whole_layers(limit):
    plan = plan_stack(_item(400, 300, 200), limit)

    assert plan.total_layers == 6
    assert plan.stack_height == 6 * 200
    assert plan.stack_height <= limit


def test_base_height_is_taken_off_the_limit():
    pallet = PalletFootprint(length=1180, width=980, base_height=200)
    plan = plan_stack(_item(400, 300, 200), 1350, pallet)

    assert plan.total_layers == 5
    assert plan.stack_height == 1000
    assert plan.total_boxes == 30


def test_base_height_above_limit_gives_no_layers():
    pallet = PalletFootprint(length=1180, width=980, base_height=1500)
    plan = plan_stack(_item(400, 300, 200), 1350, pallet)

    assert plan.total_layers == 0
    assert plan.pallet_utilization == 0.0


def test_layers_alternate_from_the_bottom():
    plan = plan_stack(_item(400, 300, 200), 1350)
    layers = list(plan.iter_layers())

    assert [index for index, _, _ in layers] == [0, 1, 2, 3, 4, 5]
    assert [z for _, z, _ in layers] == [0, 200, 400, 600, 800, 1000]
    assert [layer.rotated for _, _, layer in layers] == [False, True, False, True, False, True]


@pytest.mark.parametrize(
    "length, width, height, limit",
    [
        (0, 300, 200, 1350),
        (400, -1, 200, 1350),
        (400, 300, 0, 1350),
        (400, 300, float("nan"), 1350),
        (float("inf"), 300, 200, 1350),
        (400, 300, 200, 0),
        (400, 300, 200, -5),
        (400, 300, 200, float("inf")),
        (1e-320, 300, 200, 1350),
        (400, 300, 200, 0.001),
    ],
)
def test_invalid_input_is_rejected(length, width, height, limit):
    with pytest.raises(InvalidDimension):
        plan_stack(_item(length, width, height), limit)


def test_repeated_calls_are_identical():
    item = _item(412.5, 287.3, 199.9)

    assert plan_stack(item, 1350) == plan_stack(item, 1350)


def test_to_dict_is_serialisable_shape():
    payload = plan_stack(_item(400, 300, 200), 1350).to_dict()

    assert payload["total_boxes"] == 36
    assert payload["even_layer"]["pattern_name"] == "Rotated Grid"
    assert len(payload["odd_layer"]["positions"]) == 6
    assert payload["material"]["name"] == "Carton"
