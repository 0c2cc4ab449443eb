# -*- coding: utf-8 -*-
"""Shared literals for the ledger: template sentinels, alias tables, type tokens.

The alias tables map a canonical field to the spreadsheet headers accepted
for it, in priority order. Header matching is case-insensitive. Bump
FIELD_ALIASES_VERSION whenever a table changes so downstream caches of
resolved headers can be invalidated.
"""

from typing import Dict, Tuple

# Template sentinels, shared with kardex.templates
BLANK_ID_SENTINEL = "DEIXE_EM_BRANCO_PARA_NOVO"
MOVEMENT_EXAMPLE_CODE = "SKU-001"
INVENTORY_EXAMPLE_PREFIX = "PROD-00"

# Spreadsheet serial dates (1900 date system)
SERIAL_EPOCH_OFFSET = 25569  # serial of 1970-01-01
SERIAL_THRESHOLD = 20000  # smaller numbers are not treated as serials

DEFAULT_LOCATION = "Geral"
DEFAULT_BATCH_SIZE = 50
DEFAULT_WINDOWS = (7, 15, 30, 90)
DASHBOARD_DAYS = 7

# Substrings of the type column, compared upper-cased
EXIT_TOKENS = ("SAI", "SAÍ", "OUT", "EXIT")
COUNT_TOKENS = ("CONTAGEM", "COUNT")

# Labels written to the Tipo column on export
TYPE_LABEL_IN = "ENTRADA"
TYPE_LABEL_OUT = "SAIDA"
TYPE_LABEL_COUNT = "CONTAGEM"

FIELD_ALIASES_VERSION = 2

MOVEMENT_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("ID",),
    "date": ("Data", "Date"),
    "code": ("Código", "Codigo", "Code", "SKU"),
    "name": ("Item", "Nome", "Descrição", "Descricao", "Description", "Name"),
    "type": ("Tipo", "Type"),
    "quantity": ("Quantidade", "Qtd", "Quantity", "Qty", "Quant"),
    "location": ("Armazém", "Armazem", "Warehouse", "Local"),
    "address": ("Endereço", "Endereco", "Address"),
    "responsible": ("Responsável", "Responsavel", "Responsible"),
    "min_stock": (
        "Estoque Mínimo",
        "Estoque Minimo",
        "Min Stock",
        "Min",
        "Mínimo",
        "Minimo",
    ),
    "created_at": ("Carimbo de Data/Hora", "Created At", "Timestamp"),
}

INVENTORY_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "code": ("Código", "Codigo", "Code", "SKU"),
    "name": ("Item", "Nome", "Produto", "Descrição", "Descricao", "Description", "Name"),
    "quantity": ("Quantidade", "Qtd", "Quantity", "Qty", "Quant", "Saldo"),
    "location": ("Armazém", "Armazem", "Warehouse", "Local"),
    "address": ("Endereço", "Endereco", "Address", "Localização", "Localizacao"),
    "min_stock": (
        "Estoque Mínimo",
        "Estoque Minimo",
        "Min Stock",
        "Min",
        "Mínimo",
        "Minimo",
    ),
}
