"""
Plotly-based views of a planned pallet stack: a 3D stack and 2D layer plans.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import plotly.graph_objects as go
import plotly.io as pio

from palletstack.core.layer_layout import LayerPlan
from palletstack.core.stack_planner import StackPlan
from palletstack.models.pallet import PalletFootprint

ODD_LAYER_COLOR = "#60a5fa"
EVEN_LAYER_COLOR = "#f59e0b"
EDGE_COLOR = "#1e40af"
PALLET_COLOR = "#9ca3af"
DECK_THICKNESS = 140.0  # drawn only, never part of the stack height

# Two triangles per face: bottom, top, front, back, left, right.
_PRISM_TRIANGLES = [
    (0, 1, 2), (0, 2, 3),
    (4, 5, 6), (4, 6, 7),
    (0, 1, 5), (0, 5, 4),
    (3, 2, 6), (3, 6, 7),
    (0, 3, 7), (0, 7, 4),
    (1, 2, 6), (1, 6, 5),
]

_PRISM_EDGES = [
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
]


def _prism_vertices(
    x: float, y: float, z: float, dx: float, dy: float, dz: float
) -> Tuple[List[float], List[float], List[float]]:
    xs = [x, x + dx, x + dx, x, x, x + dx, x + dx, x]
    ys = [y, y, y + dy, y + dy, y, y, y + dy, y + dy]
    zs = [z, z, z, z, z + dz, z + dz, z + dz, z + dz]
    return xs, ys, zs


def _layer_traces(layer: LayerPlan, z: float, height: float, color: str, name: str) -> List[go.BaseTraceType]:
    """
    Build one mesh holding every box of the layer plus one trace of box edges.
    """
    xs: List[float] = []
    ys: List[float] = []
    zs: List[float] = []
    i: List[int] = []
    j: List[int] = []
    k: List[int] = []
    edge_x: List[float | None] = []
    edge_y: List[float | None] = []
    edge_z: List[float | None] = []

    for placement in layer.positions:
        px, py, pz = _prism_vertices(placement.x, placement.y, z, placement.length, placement.width, height)
        offset = len(xs)
        xs.extend(px)
        ys.extend(py)
        zs.extend(pz)
        for a, b, c in _PRISM_TRIANGLES:
            i.append(offset + a)
            j.append(offset + b)
            k.append(offset + c)
        for start, end in _PRISM_EDGES:
            edge_x.extend([px[start], px[end], None])
            edge_y.extend([py[start], py[end], None])
            edge_z.extend([pz[start], pz[end], None])

    mesh = go.Mesh3d(
        x=xs,
        y=ys,
        z=zs,
        i=i,
        j=j,
        k=k,
        color=color,
        opacity=1.0,
        name=name,
        flatshading=True,
        lighting=dict(ambient=0.7, diffuse=0.9, specular=0.1),
        hoverinfo="name",
    )
    edges = go.Scatter3d(
        x=edge_x,
        y=edge_y,
        z=edge_z,
        mode="lines",
        line=dict(color=EDGE_COLOR, width=2),
        name=name,
        showlegend=False,
        hoverinfo="skip",
    )
    return [mesh, edges]


def _pallet_deck_trace(pallet: PalletFootprint) -> go.Mesh3d:
    xs, ys, zs = _prism_vertices(0, 0, -DECK_THICKNESS, pallet.length, pallet.width, DECK_THICKNESS)
    return go.Mesh3d(
        x=xs,
        y=ys,
        z=zs,
        i=[t[0] for t in _PRISM_TRIANGLES],
        j=[t[1] for t in _PRISM_TRIANGLES],
        k=[t[2] for t in _PRISM_TRIANGLES],
        color=PALLET_COLOR,
        opacity=1.0,
        name=pallet.name,
        flatshading=True,
        hoverinfo="name",
    )


def _height_limit_wireframe(pallet: PalletFootprint, height: float) -> go.Scatter3d:
    xs, ys, zs = _prism_vertices(0, 0, 0, pallet.length, pallet.width, height)
    x_coords: List[float | None] = []
    y_coords: List[float | None] = []
    z_coords: List[float | None] = []
    for start, end in _PRISM_EDGES:
        x_coords.extend([xs[start], xs[end], None])
        y_coords.extend([ys[start], ys[end], None])
        z_coords.extend([zs[start], zs[end], None])
    return go.Scatter3d(
        x=x_coords,
        y=y_coords,
        z=z_coords,
        mode="lines",
        name="Height limit",
        line=dict(color="#4a5568", width=2, dash="dash"),
        showlegend=True,
        hoverinfo="skip",
    )


def pallet_stack_figure(plan: StackPlan) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(_pallet_deck_trace(plan.pallet))
    limit = plan.pallet.usable_height(plan.max_height_constraint)
    if limit > 0:
        fig.add_trace(_height_limit_wireframe(plan.pallet, limit))

    for index, z, layer in plan.iter_layers():
        even = index % 2 == 1 and plan.interlocked
        color = EVEN_LAYER_COLOR if even else ODD_LAYER_COLOR
        for trace in _layer_traces(layer, z, plan.layer_height, color, f"Layer {index + 1}"):
            fig.add_trace(trace)

    axis_style = dict(backgroundcolor="#f2f5fb", gridcolor="#cbd5e0", zerolinecolor="#a0aec0")
    fig.update_layout(
        title=f"{plan.material.name}: {plan.total_layers} layers x {plan.boxes_per_layer} boxes",
        scene=dict(
            xaxis_title="Length (mm)",
            yaxis_title="Width (mm)",
            zaxis_title="Height (mm)",
            aspectmode="data",
            xaxis=axis_style,
            yaxis=axis_style,
            zaxis=axis_style,
        ),
        paper_bgcolor="#f7f9fc",
        plot_bgcolor="#f7f9fc",
        legend=dict(bgcolor="rgba(255,255,255,0.8)", bordercolor="#cbd5e0", borderwidth=1),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def layer_floor_plan_figure(
    layer: LayerPlan,
    pallet: PalletFootprint,
    title: str,
    color: str = ODD_LAYER_COLOR,
) -> go.Figure:
    """
    Plan view of one layer: the pallet rectangle with every box drawn on it.
    """
    fig = go.Figure()
    fig.add_shape(
        type="rect",
        x0=0,
        y0=0,
        x1=pallet.length,
        y1=pallet.width,
        fillcolor="#e5e7eb",
        line=dict(color=PALLET_COLOR, width=2),
        layer="below",
    )
    for idx, placement in enumerate(layer.positions):
        fig.add_shape(
            type="rect",
            x0=placement.x,
            y0=placement.y,
            x1=placement.x + placement.length,
            y1=placement.y + placement.width,
            fillcolor=color,
            opacity=0.9,
            line=dict(color=EDGE_COLOR, width=2),
        )
        if placement.length > 100 and placement.width > 60:
            fig.add_annotation(
                x=placement.x + placement.length / 2,
                y=placement.y + placement.width / 2,
                text=str(idx + 1),
                showarrow=False,
                font=dict(color="#ffffff", size=12),
            )

    fig.update_xaxes(range=[-20, pallet.length + 20], title_text=f"{pallet.length:g} mm")
    fig.update_yaxes(
        range=[pallet.width + 20, -20],
        title_text=f"{pallet.width:g} mm",
        scaleanchor="x",
        scaleratio=1,
    )
    fig.update_layout(
        title=f"{title}: {layer.total_boxes} boxes ({layer.pattern_name})",
        plot_bgcolor="#ffffff",
        paper_bgcolor="#f7f9fc",
        margin=dict(l=20, r=20, t=50, b=20),
        showlegend=False,
    )
    return fig


def layer_floor_plans(plan: StackPlan) -> List[Tuple[str, go.Figure]]:
    """Return the odd-layer plan and, for interlocked stacks, the even-layer plan."""
    if plan.even_layer is None:
        return [("All layers", layer_floor_plan_figure(plan.odd_layer, plan.pallet, "All layers"))]
    return [
        ("Odd layers (1, 3, 5...)", layer_floor_plan_figure(plan.odd_layer, plan.pallet, "Odd layers")),
        (
            "Even layers (2, 4, 6...)",
            layer_floor_plan_figure(plan.even_layer, plan.pallet, "Even layers", color=EVEN_LAYER_COLOR),
        ),
    ]


def save_figure_image(fig: go.Figure, output_path: str | Path, width: int = 900, height: int = 650) -> None:
    """
    Persist a figure to disk as a static PNG using Kaleido.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pio.write_image(fig, str(output_path), format="png", width=width, height=height, scale=2)
