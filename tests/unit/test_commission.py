"""
Тесты для Commission

Проверяемые инварианты:
1. gains <= 0 → 0 при любой ставке
2. rate > 100 → clamp до 100
3. rate <= 0 → вся сумма gains (оператор пула)
4. Монотонность по ставке при фиксированных положительных gains
"""

import pytest

from pool_ledger.core.math.commission import (
    DEFAULT_COMMISSION_RATE_PCT,
    MAX_COMMISSION_RATE_PCT,
    commission,
)


class TestCommission:
    """Тесты commission."""

    def test_constants(self):
        assert MAX_COMMISSION_RATE_PCT == 100.0
        assert DEFAULT_COMMISSION_RATE_PCT == 0.0

    def test_zero_gains(self):
        assert commission(0.0, 50.0) == 0.0

    def test_negative_gains(self):
        assert commission(-100.0, 50.0) == 0.0

    @pytest.mark.parametrize("rate", [-10.0, 0.0, 25.0, 100.0, 150.0])
    def test_no_commission_on_losses_for_any_rate(self, rate):
        assert commission(-0.01, rate) == 0.0
        assert commission(0.0, rate) == 0.0

    def test_zero_rate_returns_full_gains(self):
        """Оператор пула с 0% получает 100% gains."""
        assert commission(200.0, 0.0) == 200.0

    def test_negative_rate_returns_full_gains(self):
        assert commission(200.0, -10.0) == 200.0

    def test_fifty_percent(self):
        assert commission(200.0, 50.0) == 100.0

    def test_fifty_five_percent(self):
        assert commission(200.0, 55.0) == pytest.approx(110.0)

    def test_hundred_percent(self):
        assert commission(200.0, 100.0) == 200.0

    def test_rate_clamped_at_hundred(self):
        assert commission(200.0, 150.0) == commission(200.0, 100.0) == 200.0

    def test_small_gains(self):
        assert commission(0.50, 50.0) == 0.25

    def test_monotonic_in_rate(self):
        """Для положительных gains комиссия не убывает с ростом ставки (rate > 0)."""
        rates = [1.0, 10.0, 33.3, 50.0, 99.9, 100.0, 120.0]
        values = [commission(250.0, rate) for rate in rates]
        assert values == sorted(values)

    def test_custom_max_rate(self):
        assert commission(200.0, 80.0, max_rate=60.0) == pytest.approx(120.0)
