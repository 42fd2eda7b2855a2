import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from amounts import format_ticks, from_ticks, to_ticks


class TestAmounts:
    @pytest.mark.parametrize("text", ["0", "1.5", "2.0", "0.0001", "1.2345", "123456789.9999"])
    def test_round_trip_four_decimals(self, text):
        amount = Decimal(text)
        assert from_ticks(to_ticks(amount)) == amount

    def test_to_ticks(self):
        assert to_ticks(Decimal("1.5")) == 15000
        assert to_ticks(Decimal("0.0001")) == 1

    def test_to_ticks_rounds_half_even(self):
        assert to_ticks(Decimal("0.00005")) == 0
        assert to_ticks(Decimal("0.00015")) == 2
        assert to_ticks(Decimal("1.23456")) == 12346

    def test_to_ticks_rejects_non_finite(self):
        with pytest.raises(ValueError):
            to_ticks(Decimal("NaN"))
        with pytest.raises(ValueError):
            to_ticks(Decimal("Infinity"))

    def test_format_ticks(self):
        assert format_ticks(25000) == "2.5000"
        assert format_ticks(0) == "0.0000"
        assert format_ticks(1) == "0.0001"
        assert format_ticks(-10000) == "-1.0000"

    def test_round_trip_beyond_default_precision(self):
        amount = Decimal("123456789012345678901234567.8901")
        ticks = to_ticks(amount)
        assert ticks == 1234567890123456789012345678901
        assert from_ticks(ticks) == amount
        assert format_ticks(ticks) == "123456789012345678901234567.8901"
