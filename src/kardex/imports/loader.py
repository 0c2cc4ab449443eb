# -*- coding: utf-8 -*-
"""Read spreadsheet files into plain row mappings for the reconcilers."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from kardex.exceptions import ImportFileError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xlsm", ".xls")


def read_frame(path: Union[str, Path]) -> pd.DataFrame:
    """Load the first sheet of an Excel file, or a CSV file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ImportFileError: If the file type is unsupported or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Import file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix in EXCEL_SUFFIXES:
            df = pd.read_excel(path, sheet_name=0)
        elif suffix == ".csv":
            df = pd.read_csv(path, encoding="utf-8-sig")
        else:
            raise ImportFileError(f"Unsupported file type: {suffix}", path=str(path))
    except ImportFileError:
        raise
    except Exception as e:
        raise ImportFileError(f"Cannot read {path.name}: {e}", path=str(path)) from e

    logger.info(f"Loaded {path.name}")
    logger.info(f"  Rows: {len(df)}")
    logger.debug(f"  Columns: {list(df.columns)}")
    return df


def frame_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a DataFrame to row dicts with empty cells as None."""
    df = df.dropna(how="all")
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")


def read_rows(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a spreadsheet as a list of header -> value dicts."""
    return frame_to_rows(read_frame(path))
