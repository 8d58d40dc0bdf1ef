import plotly.graph_objects as go

from palletstack.core.stack_planner import plan_stack
from palletstack.models.material import MaterialItem
from palletstack.visualization import layout_plot


def test_stack_figure_has_one_mesh_per_layer():
    plan = plan_stack(MaterialItem(400, 300, 200, name="A-100"), 1350)
    fig = layout_plot.pallet_stack_figure(plan)

    meshes = [trace for trace in fig.data if isinstance(trace, go.Mesh3d)]
    # pallet deck plus six layers
    assert len(meshes) == 7
    assert len(meshes[1].x) == 6 * 8
    assert meshes[1].color == layout_plot.ODD_LAYER_COLOR
    assert meshes[2].color == layout_plot.EVEN_LAYER_COLOR
    assert max(meshes[-1].z) == 1200


def test_uniform_stack_has_single_floor_plan():
    plan = plan_stack(MaterialItem(500, 300, 100), 1350)
    plans = layout_plot.layer_floor_plans(plan)

    assert [label for label, _ in plans] == ["All layers"]
    fig = plans[0][1]
    # pallet outline plus one rectangle per box
    assert len(fig.layout.shapes) == 1 + plan.boxes_per_layer


def test_interlocked_stack_has_odd_and_even_plans():
    plan = plan_stack(MaterialItem(400, 300, 200), 1350)
    plans = layout_plot.layer_floor_plans(plan)

    assert len(plans) == 2
    even_fig = plans[1][1]
    assert even_fig.layout.shapes[1].fillcolor == layout_plot.EVEN_LAYER_COLOR


def test_empty_stack_still_draws_pallet():
    plan = plan_stack(MaterialItem(1200, 1000, 100), 1350)
    fig = layout_plot.pallet_stack_figure(plan)

    assert len([trace for trace in fig.data if isinstance(trace, go.Mesh3d)]) == 1
