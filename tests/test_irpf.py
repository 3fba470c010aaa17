"""Tests de la retención de IRPF."""

from decimal import Decimal

import pytest

from nominas.calculadora.irpf import calculate_irpf, validate_irpf_percentage
from nominas.exceptions import ValidationError


class TestCalculateIrpf:

    def test_simple_percentage(self):
        assert calculate_irpf(Decimal("2000"), Decimal("15")) == Decimal("300.00")

    def test_rounding(self):
        # 1234.56 x 12.5% = 154.32
        assert calculate_irpf(Decimal("1234.56"), Decimal("12.5")) == Decimal("154.32")

    def test_zero_percentage(self):
        assert calculate_irpf(Decimal("2000"), Decimal("0")) == Decimal("0.00")

    def test_non_positive_base(self):
        assert calculate_irpf(Decimal("0"), Decimal("15")) == Decimal("0")

    @pytest.mark.parametrize("percentage", ["-1", "100.01"])
    def test_out_of_range(self, percentage):
        with pytest.raises(ValidationError) as exc_info:
            calculate_irpf(Decimal("2000"), Decimal(percentage))

        assert exc_info.value.issues[0].code == "INVALID_IRPF_PERCENTAGE"


class TestIrpfWarnings:

    def test_usual_percentage(self):
        assert validate_irpf_percentage(Decimal("15")) == []

    def test_zero_warns(self):
        assert len(validate_irpf_percentage(Decimal("0"))) == 1

    def test_above_maximum_warns(self):
        warnings = validate_irpf_percentage(Decimal("50"))

        assert len(warnings) == 1
        assert "47" in warnings[0]
