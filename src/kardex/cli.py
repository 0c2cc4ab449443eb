# -*- coding: utf-8 -*-
"""Command line for the Kardex ledger.

Subcommands:
    template   Write a blank import template
    reconcile  Dry-run an import file and report accepted/skipped rows
    summary    Dashboard figures and critical items from a ledger export
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from kardex.config import load_config
from kardex.exceptions import KardexError
from kardex.imports.inventory import reconcile_inventory_rows
from kardex.imports.loader import read_rows
from kardex.imports.reconciler import reconcile_rows
from kardex.ledger.aggregator import aggregate
from kardex.ledger.classifier import classify, list_critical
from kardex.ledger.window import dashboard_stats, parse_window
from kardex.templates import (
    InventoryTemplate,
    MovementTemplate,
    load_ledger_export,
    write_inventory_template,
    write_movement_template,
)

logger = logging.getLogger(__name__)

EPILOG = """
Examples:
  kardex template movements -o Modelo_Kardex.xlsx
  kardex template inventory
  kardex reconcile entradas.xlsx
  kardex reconcile lista.xlsx --inventory
  kardex summary Kardex_Dados_2024-05-01.xlsx --window 30d
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kardex",
        description="Kardex stock ledger: templates, import checks and stock summary",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to kardex.toml (default: ./kardex.toml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    template = subparsers.add_parser("template", help="Write a blank import template")
    template.add_argument("kind", choices=["movements", "inventory"])
    template.add_argument("-o", "--output", type=Path, default=None, help="Output XLSX path")

    reconcile = subparsers.add_parser(
        "reconcile", help="Check an import file without storing anything"
    )
    reconcile.add_argument("file", type=Path)
    reconcile.add_argument(
        "--inventory",
        action="store_true",
        default=False,
        help="Treat the file as a stock list instead of a movement sheet",
    )

    summary = subparsers.add_parser("summary", help="Summarize a ledger export")
    summary.add_argument("file", type=Path)
    summary.add_argument(
        "--window",
        default=None,
        help="Activity window: 7d, 15d, 30d, 90d or ALL (default from config)",
    )
    summary.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    return parser


def run_template(args, config) -> bool:
    if args.kind == "movements":
        path = write_movement_template(args.output or Path(MovementTemplate.FILENAME))
    else:
        path = write_inventory_template(args.output or Path(InventoryTemplate.FILENAME))
    print(f"Template written: {path}")
    return True


def run_reconcile(args, config) -> bool:
    rows = read_rows(args.file)
    if args.inventory:
        result = reconcile_inventory_rows(rows, config.default_location)
    else:
        result = reconcile_rows(rows, default_location=config.default_location)

    print(result.summary())
    for rejection in result.rejections:
        code = f" [{rejection.code}]" if rejection.code else ""
        print(f"  row {rejection.row_number}: {rejection.reason}{code}")
    return True


def run_summary(args, config) -> bool:
    window = args.window if args.window is not None else config.default_window
    days = parse_window(window)
    if days is not None and days not in config.windows:
        logger.warning(f"Window {days}d is not one of the configured windows {config.windows}")

    result = load_ledger_export(args.file, args.today)
    records = result.accepted
    stats = dashboard_stats(records, window, args.today)
    critical = list_critical(aggregate(records))

    label = "ALL" if days is None else f"{days}d"
    print(f"Window: {label}")
    print(f"Products in stock: {stats.products_in_stock}")
    print(f"Movements: {stats.movement_count} (in {stats.in_count}, out {stats.out_count})")
    print(f"Critical items: {stats.critical_items}")
    for entry in critical:
        print(
            f"  {entry.code:<15} {classify(entry).value:<9} "
            f"balance {entry.balance} / min {entry.min_stock}  {entry.name}"
        )
    return True


COMMANDS = {
    "template": run_template,
    "reconcile": run_reconcile,
    "summary": run_summary,
}


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except KardexError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=config.log_level, format=config.log_format)

    try:
        success = COMMANDS[args.command](args, config)
    except (KardexError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        success = False

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
