"""
Streamlit entrypoint for the pallet stacking planner.
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import streamlit as st

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from palletstack import settings
from palletstack.core.stack_planner import StackPlan, plan_stack
from palletstack.ingest.excel_reader import MaterialSheetError, filter_materials, read_material_sheet
from palletstack.models.errors import InvalidDimension
from palletstack.models.material import MaterialItem
from palletstack.models.pallet import PalletFootprint
from palletstack.report.pdf_generator import generate_pdf_report
from palletstack.visualization import layout_plot


@st.cache_data
def load_settings() -> Dict[str, Any]:
    return settings.load_config()


def build_material_list() -> List[MaterialItem]:
    with st.expander("Material List", expanded=True):
        upload = st.file_uploader(
            "Material workbook (.xlsx)",
            type=["xlsx"],
            help="Columns: Material, Length, Width, Height (mm). The first row is a header.",
        )
        if upload is None:
            return st.session_state.get("materials", [])
        try:
            materials = read_material_sheet(upload)
        except MaterialSheetError as exc:
            st.error(str(exc))
            return []
        if not materials:
            st.error("No valid material rows found. Expected: Material, Length, Width, Height.")
            return []
        st.session_state["materials"] = materials
        st.caption(f"{len(materials)} materials loaded")
        return materials


def select_material(materials: List[MaterialItem]) -> MaterialItem | None:
    search = st.text_input("Search materials", value="")
    matches = filter_materials(materials, search)
    if not matches:
        st.info("No materials match the search.")
        return None
    return st.selectbox(
        "Material",
        matches,
        format_func=lambda item: item.label,
        help="Box dimensions are used as length x width x height on the pallet",
    )


def build_pallet_inputs(config: Dict[str, Any]) -> PalletFootprint:
    pallets = settings.load_pallets(config)
    names = {pallet.name: pallet for pallet in pallets.values()}
    default = settings.default_pallet(config)
    selected = st.selectbox("Pallet", list(names), index=list(names).index(default.name))
    template = names[selected]
    base_height = st.number_input(
        "Pallet base height (mm)",
        min_value=0.0,
        value=float(template.base_height),
        step=1.0,
        format="%.1f",
        help="Subtracted from the height limit when the limit includes the pallet deck",
    )
    return PalletFootprint(
        length=template.length,
        width=template.width,
        base_height=base_height,
        name=template.name,
    )


def build_height_input(config: Dict[str, Any]) -> float:
    presets = settings.height_presets(config)
    if "max_height" not in st.session_state:
        st.session_state.max_height = next(iter(presets.values()), 1350.0)

    columns = st.columns(len(presets) or 1)
    for column, (label, value) in zip(columns, presets.items()):
        if column.button(label, use_container_width=True):
            st.session_state.max_height = value

    return st.number_input(
        "Max Stack Height (mm)",
        min_value=0.01,
        value=float(st.session_state.max_height),
        step=10.0,
        format="%.1f",
    )


def build_report_bytes(plan: StackPlan, stack_fig, floor_plans) -> bytes:
    """Render the figures to PNG and return the PDF report as bytes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        images = []
        stack_image = tmpdir_path / "pallet_stack.png"
        layout_plot.save_figure_image(stack_fig, stack_image)
        images.append(stack_image)
        for index, (_, fig) in enumerate(floor_plans, start=1):
            image = tmpdir_path / f"layer_plan_{index}.png"
            layout_plot.save_figure_image(fig, image)
            images.append(image)
        pdf_path = generate_pdf_report(tmpdir_path / "pallet_stack.pdf", plan, images)
        return pdf_path.read_bytes()


def generate_report(plan: StackPlan, stack_fig, floor_plans) -> bytes | None:
    try:
        return build_report_bytes(plan, stack_fig, floor_plans)
    except Exception as exc:  # noqa: BLE001
        st.error(f"Report generation failed: {exc}")
        return None


def render_results(plan: StackPlan) -> None:
    material = plan.material
    st.markdown(f"## {material.name}")
    st.caption(f"L {material.length:g} | W {material.width:g} | H {material.height:g} mm")

    summary_cols = st.columns(4)
    summary_cols[0].metric("Boxes per Layer", plan.boxes_per_layer)
    summary_cols[1].metric("Layers", plan.total_layers)
    summary_cols[2].metric("Total Boxes", plan.total_boxes)
    summary_cols[3].metric("Stack Height (mm)", f"{plan.stack_height:.1f}")

    st.progress(min(plan.odd_layer.efficiency, 1.0), text=f"Layer area: {plan.odd_layer.efficiency * 100:.2f}%")
    st.progress(min(plan.pallet_utilization, 1.0), text=f"Pallet volume: {plan.pallet_utilization * 100:.2f}%")
    for note in plan.advisories:
        st.warning(note)

    view_3d, view_2d = st.tabs(["3D Stack", "Layer Plans"])
    stack_fig = layout_plot.pallet_stack_figure(plan)
    floor_plans = layout_plot.layer_floor_plans(plan)
    with view_3d:
        st.plotly_chart(stack_fig, use_container_width=True)
        st.caption("Illustration only. Adjust the stacking to the actual stability of the goods.")
    with view_2d:
        for label, fig in floor_plans:
            st.markdown(f"**{label}**")
            st.plotly_chart(fig, use_container_width=True)

    report = st.session_state.get("report")
    if report is None or report["plan"] != plan:
        if not st.button("Generate PDF Report", type="primary", use_container_width=True):
            return
        st.session_state.pop("report", None)
        pdf_bytes = generate_report(plan, stack_fig, floor_plans)
        if pdf_bytes is None:
            return
        report = {"plan": plan, "pdf_bytes": pdf_bytes}
        st.session_state["report"] = report

    st.download_button(
        label="Download PDF Report",
        data=report["pdf_bytes"],
        file_name="pallet_stack.pdf",
        mime="application/pdf",
        use_container_width=True,
    )


def main() -> None:
    st.set_page_config(page_title="Pallet Stacking Planner", layout="wide")
    st.title("Pallet Stacking Planner")
    st.divider()

    config = load_settings()
    materials = build_material_list()

    with st.expander("Stacking Constraints", expanded=True):
        pallet = build_pallet_inputs(config)
        max_height = build_height_input(config)

    if not materials:
        st.info("Upload a material workbook to start.")
        return

    material = select_material(materials)
    if material is None:
        return

    try:
        plan = plan_stack(material, max_height, pallet)
    except InvalidDimension as exc:
        st.error(f"Cannot plan {material.name}: {exc}")
        return

    st.divider()
    render_results(plan)


if __name__ == "__main__":
    main()
