"""
Тесты для Valuation — ratio, стоимость доли и gains

Проверяемые инварианты:
1. initial <= 0 → ratio = 1.0
2. entry_ratio == current_ratio → current_value == capital
3. Gains считаются только с момента входа инвестора
4. entry_ratio <= 0 → capital без масштабирования
"""

import pytest

from pool_ledger.core.math.valuation import (
    NEUTRAL_RATIO,
    current_ratio,
    current_value,
    entry_ratio,
    gains,
)


# =============================================================================
# ТЕСТЫ: Ratio
# =============================================================================


class TestEntryRatio:
    """Тесты entry_ratio."""

    def test_zero_initial_capital(self):
        """initial = 0 → 1.0."""
        assert entry_ratio(0.0, 0.0) == 1.0
        assert entry_ratio(1000.0, 0.0) == 1.0

    def test_negative_initial_capital(self):
        """initial < 0 обрабатывается как ноль."""
        assert entry_ratio(1000.0, -100.0) == 1.0

    def test_portfolio_with_gains(self):
        """Пул вырос с 10000 до 11000."""
        assert entry_ratio(11000.0, 10000.0) == 1.1

    def test_portfolio_with_losses(self):
        """Пул упал с 10000 до 9000."""
        assert entry_ratio(9000.0, 10000.0) == 0.9

    def test_flat_portfolio(self):
        assert entry_ratio(10000.0, 10000.0) == 1.0

    def test_neutral_constant(self):
        assert NEUTRAL_RATIO == 1.0


class TestCurrentRatio:
    """Тесты current_ratio."""

    @pytest.mark.parametrize("total,initial", [(0.0, 0.0), (1000.0, -100.0), (-50.0, 0.0)])
    def test_non_positive_initial(self, total, initial):
        assert current_ratio(total, initial) == 1.0

    def test_positive_ratio(self):
        assert current_ratio(12000.0, 10000.0) == 1.2

    def test_ratio_below_one(self):
        assert current_ratio(8000.0, 10000.0) == 0.8

    def test_identical_to_entry_ratio(self):
        """Формулы entry_ratio и current_ratio совпадают."""
        for total, initial in [(11000.0, 10000.0), (0.0, 0.0), (5.0, 3.0)]:
            assert current_ratio(total, initial) == entry_ratio(total, initial)


# =============================================================================
# ТЕСТЫ: Current Value
# =============================================================================


class TestCurrentValue:
    """Тесты current_value."""

    def test_zero_entry_ratio_returns_capital(self):
        assert current_value(1000.0, 0.0, 1.2) == 1000.0

    def test_negative_entry_ratio_returns_capital(self):
        assert current_value(1000.0, -1.0, 1.2) == 1000.0

    def test_no_change_since_entry(self):
        """entry == current → capital без изменений."""
        assert current_value(1000.0, 1.0, 1.0) == 1000.0
        assert current_value(1000.0, 1.5, 1.5) == 1000.0

    def test_growth_after_entry(self):
        """Вход при 1.0, сейчас 1.2 → +20%."""
        assert current_value(1000.0, 1.0, 1.2) == pytest.approx(1200.0)

    def test_drop_after_entry(self):
        """Вход при 1.0, сейчас 0.8 → -20%."""
        assert current_value(1000.0, 1.0, 0.8) == pytest.approx(800.0)

    def test_late_investor_only_gains_after_entry(self):
        """Вход при 1.5, сейчас 1.8 → +20% с момента входа, а не +80%."""
        assert current_value(1000.0, 1.5, 1.8) == pytest.approx(1200.0)

    def test_fractional_ratios(self):
        assert current_value(1000.0, 1.1, 1.21) == pytest.approx(1100.0)

    def test_different_entry_points_different_values(self):
        """Одинаковый capital, разный entry → разная стоимость."""
        early = current_value(1000.0, 1.0, 1.2)
        late = current_value(1000.0, 1.2, 1.2)
        assert early != late
        assert late == 1000.0


# =============================================================================
# ТЕСТЫ: Gains
# =============================================================================


class TestGains:
    """Тесты gains."""

    def test_positive(self):
        assert gains(1000.0, 1200.0) == 200.0

    def test_negative(self):
        assert gains(1000.0, 800.0) == -200.0

    def test_no_change(self):
        assert gains(1000.0, 1000.0) == 0.0

    def test_zero_capital(self):
        assert gains(0.0, 0.0) == 0.0
