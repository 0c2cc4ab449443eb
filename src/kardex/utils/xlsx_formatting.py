# -*- coding: utf-8 -*-
"""XLSX writing and styling for templates and ledger exports."""

import logging
from datetime import date, datetime
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
DEFAULT_COLUMN_WIDTH = 20


class XLSXFormatter:
    """Styling helpers shared by every sheet the ledger writes."""

    @staticmethod
    def format_header(worksheet, template: "SheetTemplate") -> None:
        """Style the header row and size columns from the template widths."""
        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            cell = worksheet.cell(row=1, column=col_idx)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")
            worksheet.column_dimensions[get_column_letter(col_idx)].width = (
                col_spec.width or DEFAULT_COLUMN_WIDTH
            )

    @staticmethod
    def apply_column_formats(worksheet, template: "SheetTemplate", start_row: int = 2) -> None:
        """Apply number/date formats to data cells."""
        max_row = worksheet.max_row
        if max_row < start_row:
            return

        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            if not col_spec.format_code:
                continue
            for row in range(start_row, max_row + 1):
                cell = worksheet.cell(row=row, column=col_idx)
                cell.number_format = col_spec.format_code
                if col_spec.data_type == "number":
                    cell.alignment = Alignment(horizontal="right")

    @staticmethod
    def cell_value(value, data_type: str):
        """Convert a DataFrame value into something openpyxl can store."""
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return None
        if data_type in ("date", "datetime"):
            if isinstance(value, pd.Timestamp):
                value = value.to_pydatetime()
            if data_type == "date" and isinstance(value, datetime):
                return value.date()
            if isinstance(value, (date, datetime)):
                return value
            return str(value)
        if data_type == "number":
            # numpy scalars to plain Python numbers
            return value.item() if hasattr(value, "item") else value
        return str(value)

    @staticmethod
    def write_xlsx(df: pd.DataFrame, output_path: Path, template: "SheetTemplate") -> Path:
        """Write a DataFrame laid out as the template's columns.

        Args:
            df: Data with one column per template column name.
            output_path: Destination file; parent directories are created.
            template: Sheet template giving column order, types and widths.

        Returns:
            The written path.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = template.SHEET_NAME

        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            worksheet.cell(row=1, column=col_idx, value=col_spec.name)

        for row_offset, (_, row) in enumerate(df.iterrows(), start=2):
            for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
                value = row[col_spec.name] if col_spec.name in row.index else None
                worksheet.cell(
                    row=row_offset,
                    column=col_idx,
                    value=XLSXFormatter.cell_value(value, col_spec.data_type),
                )

        XLSXFormatter.format_header(worksheet, template)
        XLSXFormatter.apply_column_formats(worksheet, template)

        workbook.save(output_path)
        logger.info(f"Wrote XLSX: {output_path}")
        return output_path
