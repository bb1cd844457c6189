"""Tests for cm_common.money — paise arithmetic."""

import pytest

from src.cm_common.money import paise_to_amount, paise_to_display, parse_price, rupees


class TestParsePrice:
    def test_whole_rupees(self) -> None:
        assert parse_price("800") == 80000

    def test_one_fraction_digit(self) -> None:
        assert parse_price("799.5") == 79950

    def test_two_fraction_digits(self) -> None:
        assert parse_price("799.50") == 79950

    def test_zero(self) -> None:
        assert parse_price("0") == 0

    def test_surrounding_whitespace(self) -> None:
        assert parse_price(" 1200 ") == 120000

    @pytest.mark.parametrize("text", ["", "abc", "-5", "1.234", "1,200", "12e3", "."])
    def test_invalid_raises(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_price(text)


class TestPaiseToAmount:
    def test_whole(self) -> None:
        assert paise_to_amount(80000) == "800"

    def test_fraction(self) -> None:
        assert paise_to_amount(79950) == "799.50"

    def test_no_grouping(self) -> None:
        assert paise_to_amount(rupees(35000)) == "35000"

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            paise_to_amount(-1)


class TestPaiseToDisplay:
    def test_grouped(self) -> None:
        assert paise_to_display(rupees(35000)) == "₹35,000"

    def test_fraction(self) -> None:
        assert paise_to_display(79950) == "₹799.50"

    def test_zero(self) -> None:
        assert paise_to_display(0) == "₹0"

    def test_custom_currency(self) -> None:
        assert paise_to_display(rupees(5), currency="Rs ") == "Rs 5"
