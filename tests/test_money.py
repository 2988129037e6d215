from decimal import Decimal

import pytest

from classstore.domain.errors import ValidationError
from classstore.domain.money import format_money, parse_amount


class TestMoney:

    @pytest.mark.parametrize("raw,expected", [
        ("45", "45.00"),
        ("45.00", "45.00"),
        ("0.50", "0.50"),
        (" 120.00 ", "120.00"),
        ("99999999.99", "99999999.99"),
    ])
    def test_parse_amount(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "45.0", "45.000", "-1.00", "1e3", "abc", "45,00", "123456789", "123456789012.00"])
    def test_parse_amount_rejects(self, raw):
        with pytest.raises(ValidationError):
            parse_amount(raw)

    def test_format_money(self):
        assert format_money(Decimal("45")) == "45.00"
        assert format_money(Decimal("12.5")) == "12.50"
        assert format_money("7") == "7.00"

    def test_format_money_refuses_floats(self):
        with pytest.raises(TypeError):
            format_money(45.0)
