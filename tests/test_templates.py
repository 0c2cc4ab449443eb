# -*- coding: utf-8 -*-
"""Tests for sheet templates and the ledger export."""

from datetime import date, datetime

import pandas as pd
import pytest

from kardex.imports.inventory import reconcile_inventory_rows
from kardex.imports.loader import read_rows
from kardex.imports.reconciler import REASON_EXAMPLE, reconcile_rows
from kardex.ledger.aggregator import aggregate
from kardex.templates import (
    InventoryTemplate,
    LedgerExportTemplate,
    MovementTemplate,
    TemplateType,
    export_ledger,
    get_template,
    ledger_frame,
    load_ledger_export,
    type_label,
    write_inventory_template,
    write_movement_template,
)

openpyxl = pytest.importorskip("openpyxl")


def test_movement_template_structure():
    """Movement template has the import headers in order."""
    template = MovementTemplate()
    assert template.column_names == [
        "ID",
        "Data",
        "Código",
        "Item",
        "Tipo",
        "Quantidade",
        "Armazém",
        "Endereço",
        "Responsável",
    ]
    assert template.EXAMPLE_ROWS[0]["ID"] == "DEIXE_EM_BRANCO_PARA_NOVO"
    assert template.EXAMPLE_ROWS[0]["Código"] == "SKU-001"


def test_inventory_template_structure():
    template = InventoryTemplate()
    assert template.column_names[-1] == "Estoque Mínimo"
    assert [c.width for c in template.COLUMNS] == [15, 30, 12, 15, 12, 15]


def test_get_template():
    assert isinstance(get_template("inventory"), InventoryTemplate)
    assert isinstance(get_template(TemplateType.LEDGER_EXPORT), LedgerExportTemplate)


def test_validate_dataframe():
    template = LedgerExportTemplate()
    is_valid, errors = template.validate_dataframe(pd.DataFrame({"Código": ["A"]}))
    assert not is_valid
    assert any("ID" in err for err in errors)

    df = pd.DataFrame({name: [] for name in template.column_names})
    assert template.validate_dataframe(df) == (True, [])


def test_movement_template_imports_nothing(tmp_path):
    """A template re-imported untouched yields zero accepted records."""
    path = write_movement_template(tmp_path / "Modelo_Kardex.xlsx")
    result = reconcile_rows(read_rows(path))
    assert result.accepted_count == 0
    assert result.rejected_count == 1
    assert result.rejections[0].reason == REASON_EXAMPLE


def test_inventory_template_imports_nothing(tmp_path):
    path = write_inventory_template(tmp_path / "Modelo_Lista_Estoque.xlsx")
    result = reconcile_inventory_rows(read_rows(path))
    assert result.accepted_count == 0
    assert result.rejected_count == 2


def test_template_styling(tmp_path):
    path = write_inventory_template(tmp_path / "lista.xlsx")
    workbook = openpyxl.load_workbook(path)
    sheet = workbook.active
    assert sheet.title == "Lista de Estoque"
    assert sheet["A1"].value == "Código"
    assert sheet["A1"].font.bold
    assert sheet["A1"].fill.start_color.rgb.endswith("4472C4")
    assert sheet.column_dimensions["B"].width == 30
    assert sheet["A2"].value == "PROD-001"
    assert sheet["F3"].value == 5


def test_type_label(make_record):
    assert type_label(make_record(direction="IN")) == "ENTRADA"
    assert type_label(make_record(direction="OUT")) == "SAIDA"
    assert type_label(make_record(kind="COUNT")) == "CONTAGEM"


def test_ledger_frame_orders_by_creation(make_record):
    first = make_record("A", 1)
    second = make_record("B", 2, direction="OUT")
    df = ledger_frame([second, first])
    assert list(df["Código"]) == ["A", "B"]
    assert list(df["Tipo"]) == ["ENTRADA", "SAIDA"]
    assert list(df.columns) == LedgerExportTemplate().column_names


def test_export_round_trip(tmp_path, make_record):
    """An export re-imports with ids, kinds and thresholds preserved."""
    records = [
        make_record("X101", 100, "IN", id="m1", min_stock=10, date=date(2024, 1, 3)),
        make_record("X101", 30, "OUT", id="m2", address="B-1", date=date(2024, 1, 4)),
        make_record("X101", 60, kind="COUNT", id="m3", date=date(2024, 1, 5)),
    ]
    path = export_ledger(records, tmp_path / "Kardex_Dados.xlsx")
    assert openpyxl.load_workbook(path).active.title == "Kardex Movimentações"

    result = load_ledger_export(path)
    assert result.rejected_count == 0
    reloaded = {r.id: r for r in result.accepted}
    assert set(reloaded) == {"m1", "m2", "m3"}
    assert reloaded["m1"].date == date(2024, 1, 3)
    assert reloaded["m2"].address == "B-1"
    assert reloaded["m3"].operation_kind.value == "COUNT"
    assert all(r.created_at is not None for r in result.accepted)

    entry = aggregate(result.accepted)["X101"]
    assert entry.balance == 70
    assert entry.min_stock == 10
    assert entry.count_events == 1


def test_load_ledger_export_rejects_other_sheets(tmp_path):
    path = write_inventory_template(tmp_path / "lista.xlsx")
    with pytest.raises(ValueError, match="not a ledger export"):
        load_ledger_export(path)


def test_export_default_filename():
    assert LedgerExportTemplate.filename_for(date(2024, 5, 1)) == "Kardex_Dados_2024-05-01.xlsx"


def test_export_datetime_cells(tmp_path, make_record):
    record = make_record("A", 1, created_at=datetime(2024, 2, 1, 12, 30))
    path = export_ledger([record], tmp_path / "out.xlsx")
    sheet = openpyxl.load_workbook(path).active
    assert sheet["K2"].value == datetime(2024, 2, 1, 12, 30)
