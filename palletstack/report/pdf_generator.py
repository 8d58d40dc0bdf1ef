"""
PDF report generator using ReportLab.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from palletstack.core.stack_planner import StackPlan


def _build_table(data: Sequence[Sequence[str]], column_widths: Sequence[float]) -> Table:
    table = Table(data, colWidths=column_widths)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F1F1F1")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#333333")),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#DDDDDD")),
            ]
        )
    )
    return table


def _input_table(plan: StackPlan) -> Table:
    material = plan.material
    pallet = plan.pallet
    rows = [
        ("Material", material.name),
        ("Box Dimensions (mm)", f"{material.length:g} x {material.width:g} x {material.height:g}"),
        ("Pallet", pallet.name),
        ("Pallet Footprint (mm)", f"{pallet.length:g} x {pallet.width:g}"),
        ("Pallet Base Height (mm)", f"{pallet.base_height:g}"),
        ("Max Stack Height (mm)", f"{plan.max_height_constraint:g}"),
    ]
    data = [["Parameter", "Value"]] + [[left, right] for left, right in rows]
    return _build_table(data, column_widths=[70 * mm, 110 * mm])


def _metrics_table(plan: StackPlan) -> Table:
    even = plan.even_layer
    rows = [
        ("Boxes per Layer", plan.boxes_per_layer),
        ("Layers", plan.total_layers),
        ("Total Boxes", plan.total_boxes),
        ("Stack Height (mm)", f"{plan.stack_height:.1f}"),
        ("Odd Layer Pattern", f"{plan.odd_layer.pattern_name} ({plan.odd_layer.cols} x {plan.odd_layer.rows})"),
        ("Even Layer Pattern", f"{even.pattern_name} ({even.cols} x {even.rows})" if even else "Same as odd layers"),
        ("Interlocked", "Yes" if plan.interlocked else "No"),
        ("Layer Area Efficiency (%)", f"{plan.odd_layer.efficiency * 100:.2f}"),
        ("Pallet Volume Utilisation (%)", f"{plan.pallet_utilization * 100:.2f}"),
    ]
    data = [["Metric", "Value"]] + [[str(left), str(right)] for left, right in rows]
    return _build_table(data, column_widths=[80 * mm, 100 * mm])


def generate_pdf_report(
    output_path: str | Path,
    plan: StackPlan,
    layout_images: Iterable[str | Path] = (),
) -> Path:
    """
    Generate a pallet stacking PDF report and return the output path.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(A4),
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title="Pallet Stacking Report",
    )

    styles = getSampleStyleSheet()
    subtitle_style = ParagraphStyle(
        "Subtitle",
        parent=styles["Heading2"],
        textColor=colors.HexColor("#2D5B88"),
    )

    story: list = [
        Paragraph("Pallet Stacking Report", styles["Title"]),
        Spacer(1, 8 * mm),
        Paragraph("Input Summary", subtitle_style),
        Spacer(1, 4 * mm),
        _input_table(plan),
        Spacer(1, 6 * mm),
        Paragraph("Stacking Plan", subtitle_style),
        Spacer(1, 4 * mm),
        _metrics_table(plan),
    ]

    if plan.advisories:
        story.extend([Spacer(1, 6 * mm), Paragraph("Advisories", subtitle_style), Spacer(1, 2 * mm)])
        story.extend(Paragraph(escape(note), styles["BodyText"]) for note in plan.advisories)

    for image_path in layout_images:
        image_path = Path(image_path)
        if image_path.exists():
            story.extend(
                [
                    Spacer(1, 6 * mm),
                    Paragraph(image_path.stem.replace("_", " ").title(), subtitle_style),
                    Spacer(1, 4 * mm),
                    Image(str(image_path), width=180 * mm, height=110 * mm),
                ]
            )

    doc.build(story)
    return output_path
