# -*- coding: utf-8 -*-
"""Spreadsheet templates and ledger export.

Defines the column layout of each sheet the ledger reads or writes. The
example rows use the same sentinels the reconcilers reject, so a template
downloaded and re-imported untouched imports nothing.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from kardex.constants import (
    BLANK_ID_SENTINEL,
    MOVEMENT_EXAMPLE_CODE,
    TYPE_LABEL_COUNT,
    TYPE_LABEL_IN,
    TYPE_LABEL_OUT,
)
from kardex.imports.loader import frame_to_rows, read_frame
from kardex.imports.reconciler import ReconcileResult, reconcile_rows
from kardex.ledger.models import Direction, MovementRecord
from kardex.utils.xlsx_formatting import XLSXFormatter

logger = logging.getLogger(__name__)


class TemplateType(Enum):
    """Sheets the ledger knows how to lay out."""

    MOVEMENTS = "MOVEMENTS"
    INVENTORY = "INVENTORY"
    LEDGER_EXPORT = "LEDGER_EXPORT"


@dataclass
class ColumnSpec:
    """Specification for a single sheet column."""

    name: str  # header text (e.g., "Código")
    column_index: int  # 0-based column index
    data_type: str  # "text", "number", "date", "datetime"
    format_code: Optional[str]  # Excel format code (e.g., "yyyy-mm-dd")
    required: bool  # must be present when reading the sheet back
    width: int = 20


class SheetTemplate:
    """Base class for sheet layouts."""

    SHEET_NAME = "Sheet1"
    FILENAME = "kardex.xlsx"
    COLUMNS: List[ColumnSpec] = []

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.COLUMNS]

    def validate_dataframe(self, df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Check that every required column is present.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = [
            f"Missing required column: {col.name}"
            for col in self.COLUMNS
            if col.required and col.name not in df.columns
        ]
        return len(errors) == 0, errors


class MovementTemplate(SheetTemplate):
    """Import template for movements (Modelo Importação)."""

    SHEET_NAME = "Modelo Importação"
    FILENAME = "Modelo_Kardex.xlsx"
    COLUMNS = [
        ColumnSpec("ID", 0, "text", None, required=False, width=36),
        ColumnSpec("Data", 1, "date", "yyyy-mm-dd", required=False, width=12),
        ColumnSpec("Código", 2, "text", None, required=True, width=15),
        ColumnSpec("Item", 3, "text", None, required=True, width=30),
        ColumnSpec("Tipo", 4, "text", None, required=False, width=10),
        ColumnSpec("Quantidade", 5, "number", "#,##0.##", required=True, width=12),
        ColumnSpec("Armazém", 6, "text", None, required=False, width=20),
        ColumnSpec("Endereço", 7, "text", None, required=False, width=15),
        ColumnSpec("Responsável", 8, "text", None, required=False, width=20),
    ]

    EXAMPLE_ROWS = [
        {
            "ID": BLANK_ID_SENTINEL,
            "Data": date(2023, 10, 25),
            "Código": MOVEMENT_EXAMPLE_CODE,
            "Item": "Exemplo de Item",
            "Tipo": TYPE_LABEL_IN,
            "Quantidade": 100,
            "Armazém": "Geral",
            "Endereço": "A1",
            "Responsável": "João",
        }
    ]


class InventoryTemplate(SheetTemplate):
    """Stock-list template for bulk inventory import (Lista de Estoque)."""

    SHEET_NAME = "Lista de Estoque"
    FILENAME = "Modelo_Lista_Estoque.xlsx"
    COLUMNS = [
        ColumnSpec("Código", 0, "text", None, required=True, width=15),
        ColumnSpec("Item", 1, "text", None, required=True, width=30),
        ColumnSpec("Quantidade", 2, "number", "#,##0", required=True, width=12),
        ColumnSpec("Armazém", 3, "text", None, required=False, width=15),
        ColumnSpec("Endereço", 4, "text", None, required=False, width=12),
        ColumnSpec("Estoque Mínimo", 5, "number", "#,##0", required=False, width=15),
    ]

    EXAMPLE_ROWS = [
        {
            "Código": "PROD-001",
            "Item": "Produto Exemplo 1",
            "Quantidade": 100,
            "Armazém": "Geral",
            "Endereço": "A1-01",
            "Estoque Mínimo": 10,
        },
        {
            "Código": "PROD-002",
            "Item": "Produto Exemplo 2",
            "Quantidade": 50,
            "Armazém": "Secundário",
            "Endereço": "B2-05",
            "Estoque Mínimo": 5,
        },
    ]


class LedgerExportTemplate(SheetTemplate):
    """Full ledger dump (Kardex Movimentações). Re-importable as movements."""

    SHEET_NAME = "Kardex Movimentações"
    FILENAME = "Kardex_Dados_{date}.xlsx"
    COLUMNS = [
        ColumnSpec("ID", 0, "text", None, required=True, width=36),
        ColumnSpec("Data", 1, "date", "yyyy-mm-dd", required=True, width=12),
        ColumnSpec("Código", 2, "text", None, required=True, width=15),
        ColumnSpec("Item", 3, "text", None, required=True, width=30),
        ColumnSpec("Tipo", 4, "text", None, required=True, width=10),
        ColumnSpec("Quantidade", 5, "number", "#,##0.##", required=True, width=12),
        ColumnSpec("Armazém", 6, "text", None, required=False, width=20),
        ColumnSpec("Endereço", 7, "text", None, required=False, width=15),
        ColumnSpec("Responsável", 8, "text", None, required=False, width=20),
        ColumnSpec("Estoque Mínimo", 9, "number", "#,##0.##", required=False, width=15),
        ColumnSpec(
            "Carimbo de Data/Hora", 10, "datetime", "yyyy-mm-dd hh:mm:ss", required=False, width=22
        ),
    ]

    @classmethod
    def filename_for(cls, day: Optional[date] = None) -> str:
        return cls.FILENAME.format(date=(day or date.today()).isoformat())


TEMPLATES = {
    TemplateType.MOVEMENTS: MovementTemplate,
    TemplateType.INVENTORY: InventoryTemplate,
    TemplateType.LEDGER_EXPORT: LedgerExportTemplate,
}


def get_template(template_type: Union[TemplateType, str]) -> SheetTemplate:
    if isinstance(template_type, str):
        template_type = TemplateType(template_type.upper())
    return TEMPLATES[template_type]()


def _write_example(template: SheetTemplate, output_path: Optional[Path]) -> Path:
    df = pd.DataFrame(template.EXAMPLE_ROWS, columns=template.column_names)
    return XLSXFormatter.write_xlsx(df, Path(output_path or template.FILENAME), template)


def write_movement_template(output_path: Optional[Path] = None) -> Path:
    """Write the movement import template with its example row."""
    return _write_example(MovementTemplate(), output_path)


def write_inventory_template(output_path: Optional[Path] = None) -> Path:
    """Write the stock-list template with its two example rows."""
    return _write_example(InventoryTemplate(), output_path)


def type_label(record: MovementRecord) -> str:
    if record.is_count:
        return TYPE_LABEL_COUNT
    return TYPE_LABEL_IN if record.direction is Direction.IN else TYPE_LABEL_OUT


def ledger_frame(records: Iterable[MovementRecord]) -> pd.DataFrame:
    """Ledger as a DataFrame with export headers, oldest record first."""
    ordered = sorted(
        records, key=lambda r: (r.created_at is not None, r.created_at or r.date, r.date)
    )
    rows = [
        {
            "ID": r.id,
            "Data": r.date,
            "Código": r.code,
            "Item": r.name,
            "Tipo": type_label(r),
            "Quantidade": r.quantity,
            "Armazém": r.location,
            "Endereço": r.address,
            "Responsável": r.responsible,
            "Estoque Mínimo": r.min_stock,
            "Carimbo de Data/Hora": r.created_at,
        }
        for r in ordered
    ]
    return pd.DataFrame(rows, columns=LedgerExportTemplate().column_names)


def export_ledger(
    records: Iterable[MovementRecord], output_path: Optional[Path] = None
) -> Path:
    """Write the full ledger to XLSX.

    Args:
        records: Movement history.
        output_path: Destination. Defaults to Kardex_Dados_<today>.xlsx.
    """
    template = LedgerExportTemplate()
    output_path = Path(output_path or template.filename_for())
    df = ledger_frame(records)
    logger.info(f"Exporting {len(df)} movements")
    return XLSXFormatter.write_xlsx(df, output_path, template)


def load_ledger_export(
    path: Union[str, Path], today: Optional[date] = None
) -> ReconcileResult[MovementRecord]:
    """Read a ledger export back into movement records.

    Raises:
        ValueError: If the sheet lacks a required export column.
    """
    df = read_frame(path)
    is_valid, errors = LedgerExportTemplate().validate_dataframe(df)
    if not is_valid:
        raise ValueError(f"{Path(path).name} is not a ledger export: {'; '.join(errors)}")
    return reconcile_rows(frame_to_rows(df), today)
