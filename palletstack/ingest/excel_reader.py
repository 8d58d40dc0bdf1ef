"""
Material list ingestion from Excel workbooks using pandas.

Expected layout of the first worksheet (row 0 is a header and is skipped):
column A = material name, B = length, C = width, D = height (mm).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, List, Union

import pandas as pd

from palletstack.models.material import MaterialItem

logger = logging.getLogger(__name__)

MaterialSource = Union[str, Path, IO[bytes]]

NAME_COLUMN = 0
# Leading number of a cell, so "400mm" and " 300 mm" read as 400 and 300.
LEADING_NUMBER = r"^\s*([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)"
DIMENSION_COLUMNS = (1, 2, 3)


class MaterialSheetError(ValueError):
    """Raised when a workbook cannot be opened or parsed."""


def _cell_name(value: object) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return "Unknown"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or "Unknown"


def _leading_numbers(column: pd.Series) -> pd.Series:
    text = column.astype(str).str.extract(LEADING_NUMBER, expand=False)
    return pd.to_numeric(text, errors="coerce")


def materials_from_frame(frame: pd.DataFrame) -> List[MaterialItem]:
    """
    Convert a header-less sheet frame into material items.

    Dimension cells are read up to the end of their leading number, so unit
    suffixes are ignored. Rows whose length, width or height has no leading
    number are skipped.
    """
    if frame.shape[1] < len(DIMENSION_COLUMNS) + 1:
        logger.info("Material sheet has %d columns, expected at least 4", frame.shape[1])
        return []

    dimensions = frame.iloc[:, list(DIMENSION_COLUMNS)].apply(_leading_numbers)
    materials: List[MaterialItem] = []
    for row_index in range(1, len(frame)):
        length, width, height = dimensions.iloc[row_index]
        if pd.isna(length) or pd.isna(width) or pd.isna(height):
            logger.debug("Skipping material row %d: non-numeric dimensions", row_index)
            continue
        materials.append(
            MaterialItem(
                length=float(length),
                width=float(width),
                height=float(height),
                name=_cell_name(frame.iat[row_index, NAME_COLUMN]),
                item_id=f"row-{row_index}",
            )
        )
    logger.info("Read %d material rows", len(materials))
    return materials


def read_material_sheet(source: MaterialSource) -> List[MaterialItem]:
    """Read the first worksheet of ``source`` into a list of material items."""
    try:
        frame = pd.read_excel(source, sheet_name=0, header=None, engine="openpyxl")
    except Exception as exc:  # noqa: BLE001
        raise MaterialSheetError(f"Failed to read material workbook: {exc}") from exc
    return materials_from_frame(frame)


def filter_materials(materials: Iterable[MaterialItem], term: str) -> List[MaterialItem]:
    """Case-insensitive substring search on material names."""
    materials = list(materials)
    if not term:
        return materials
    needle = term.lower()
    return [item for item in materials if needle in item.name.lower()]
