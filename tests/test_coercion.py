# -*- coding: utf-8 -*-
"""Tests for spreadsheet value coercion."""

from datetime import date, datetime

import pandas as pd
import pytest

from kardex.imports.coercion import (
    clean_text,
    is_blank,
    normalize_code,
    parse_date,
    parse_min_stock,
    parse_quantity,
    parse_timestamp,
    parse_whole_quantity,
    pick,
    round_half_up,
    serial_to_date,
)

TODAY = date(2024, 3, 31)


class TestBlankAndText:
    @pytest.mark.parametrize("value", [None, "", "   ", float("nan"), pd.NaT, pd.NA])
    def test_blank(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", [0, "0", "x", 0.0, False])
    def test_not_blank(self, value):
        assert not is_blank(value)

    def test_clean_text(self):
        assert clean_text("  Bolt  ") == "Bolt"
        assert clean_text(None) == ""
        assert clean_text(1001.0) == "1001"
        assert clean_text(12.5) == "12.5"

    def test_normalize_code(self):
        assert normalize_code(" sku-9 ") == "SKU-9"


class TestQuantity:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (10, 10),
            (-10, 10),
            ("15", 15),
            (" -2.5 ", 2.5),
            (3.0, 3),
            ("abc", 0),
            ("", 0),
            (None, 0),
            (float("nan"), 0),
            (float("inf"), 0),
            (True, 0),
            (pd.Series([7]).iloc[0], 7),
        ],
    )
    def test_parse_quantity(self, value, expected):
        """Non-numeric values become 0 instead of rejecting the row."""
        assert parse_quantity(value) == expected

    def test_integral_values_are_int(self):
        assert isinstance(parse_quantity("4.0"), int)

    @pytest.mark.parametrize(
        "value,expected", [(2.5, 3), (2.4, 2), (-2.5, 3), ("7.5", 8), (0.4, 0), ("x", 0)]
    )
    def test_parse_whole_quantity(self, value, expected):
        """Halves round up, applied after taking the absolute value."""
        assert parse_whole_quantity(value) == expected

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(1.5) == 2
        assert round_half_up(2.5) == 3

    @pytest.mark.parametrize(
        "value,expected", [(10, 10), ("-5", 5), (0, None), (None, None), ("n/a", None)]
    )
    def test_parse_min_stock(self, value, expected):
        assert parse_min_stock(value) == expected


class TestDates:
    def test_serial_45000(self):
        assert serial_to_date(45000) == date(2023, 3, 15)
        assert parse_date(45000, TODAY) == date(2023, 3, 15)

    def test_serial_epoch(self):
        assert serial_to_date(25569) == date(1970, 1, 1)

    def test_serial_float_and_string(self):
        assert parse_date(45000.75, TODAY) == date(2023, 3, 15)
        assert parse_date("45000", TODAY) == date(2023, 3, 15)

    def test_small_numbers_are_not_serials(self):
        assert parse_date(150, TODAY) == TODAY

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2023-10-25", date(2023, 10, 25)),
            ("2023-10-25T14:00:00", date(2023, 10, 25)),
            ("25/10/2023", date(2023, 10, 25)),
            (datetime(2024, 1, 2, 9, 30), date(2024, 1, 2)),
            (pd.Timestamp("2024-02-03"), date(2024, 2, 3)),
            (date(2024, 2, 4), date(2024, 2, 4)),
        ],
    )
    def test_calendar_values(self, value, expected):
        assert parse_date(value, TODAY) == expected

    @pytest.mark.parametrize("value", [None, "", "not a date", float("nan"), 10**12])
    def test_fallback_to_today(self, value):
        assert parse_date(value, TODAY) == TODAY

    def test_parse_timestamp(self):
        assert parse_timestamp("2024-01-02 10:11:12") == datetime(2024, 1, 2, 10, 11, 12)
        assert parse_timestamp(pd.Timestamp("2024-01-02 10:00")) == datetime(2024, 1, 2, 10)
        assert parse_timestamp(None) is None
        assert parse_timestamp("garbage") is None


class TestPick:
    def test_first_alias_wins(self):
        row = {"SKU": "B", "Código": "A"}
        assert pick(row, ("Código", "SKU")) == "A"

    def test_case_insensitive(self):
        row = {"CÓDIGO": "A", " quantidade ": 3}
        assert pick(row, ("Código",)) == "A"
        assert pick(row, ("Quantidade",)) == 3

    def test_blank_values_are_skipped(self):
        row = {"Código": "  ", "Codigo": None, "Code": "C"}
        assert pick(row, ("Código", "Codigo", "Code")) == "C"

    def test_missing(self):
        assert pick({"Other": 1}, ("Código",)) is None

    def test_zero_is_a_value(self):
        assert pick({"Quantidade": 0}, ("Quantidade",)) == 0
