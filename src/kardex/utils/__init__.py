"""Shared helpers."""

from .xlsx_formatting import HEADER_FILL, HEADER_FONT, XLSXFormatter

__all__ = ["HEADER_FILL", "HEADER_FONT", "XLSXFormatter"]
