"""
Тесты для Transitions — переходы состояния пула

Проверяемые инварианты:
1. Add investor: entry ratio по состоянию ДО добавления
2. Reinvest: total без изменений, initial растёт
3. Withdraw: total уменьшается, initial без изменений
4. Capital adjustment: total без изменений, initial на разницу
5. Remove investor: ratio пула сохраняется
6. Переходы не изменяют входные данные и детерминированы
"""

import dataclasses

import pytest

from pool_ledger.engine.transitions import (
    AddInvestorTransition,
    CapitalAdjustmentTransition,
    MarketUpdateTransition,
    PoolTransition,
    RemoveInvestorTransition,
    calculate_entry_ratio_after_reinvest,
    calculate_state_after_add_investor,
    calculate_state_after_capital_adjustment,
    calculate_state_after_market_update,
    calculate_state_after_reinvest,
    calculate_state_after_remove_investor,
    calculate_state_after_withdraw,
)


# =============================================================================
# ТЕСТЫ: Add Investor
# =============================================================================


class TestAddInvestor:
    """Тесты calculate_state_after_add_investor."""

    def test_adds_capital_to_both(self):
        result = calculate_state_after_add_investor(11000.0, 10000.0, 1000.0)

        assert isinstance(result, AddInvestorTransition)
        assert result.total_capital == 12000.0
        assert result.initial_capital == 11000.0

    def test_entry_ratio_from_pre_addition_state(self):
        result = calculate_state_after_add_investor(11000.0, 10000.0, 1000.0)

        assert result.entry_ratio == 1.1

    def test_empty_pool(self):
        result = calculate_state_after_add_investor(0.0, 0.0, 1000.0)

        assert result.total_capital == 1000.0
        assert result.initial_capital == 1000.0
        assert result.entry_ratio == 1.0

    def test_result_is_immutable(self):
        result = calculate_state_after_add_investor(0.0, 0.0, 1000.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.total_capital = 5.0


# =============================================================================
# ТЕСТЫ: Reinvest / Withdraw
# =============================================================================


class TestReinvest:
    """Тесты calculate_state_after_reinvest."""

    def test_increases_initial_not_total(self):
        result = calculate_state_after_reinvest(11000.0, 10000.0, 500.0)

        assert result == PoolTransition(total_capital=11000.0, initial_capital=10500.0)


class TestWithdraw:
    """Тесты calculate_state_after_withdraw."""

    def test_decreases_total_not_initial(self):
        result = calculate_state_after_withdraw(11000.0, 10000.0, 500.0)

        assert result == PoolTransition(total_capital=10500.0, initial_capital=10000.0)


class TestEntryRatioAfterReinvest:
    """Тесты calculate_entry_ratio_after_reinvest."""

    def test_equals_post_action_ratio(self):
        after = calculate_state_after_reinvest(12000.0, 10000.0, 100.0)
        ratio = calculate_entry_ratio_after_reinvest(after.total_capital, after.initial_capital)

        assert ratio == 12000.0 / 10100.0

    def test_after_withdraw(self):
        after = calculate_state_after_withdraw(12000.0, 10000.0, 100.0)
        ratio = calculate_entry_ratio_after_reinvest(after.total_capital, after.initial_capital)

        assert ratio == pytest.approx(1.19)

    @pytest.mark.parametrize("new_initial", [0.0, -10.0])
    def test_non_positive_initial(self, new_initial):
        assert calculate_entry_ratio_after_reinvest(12000.0, new_initial) == 1.0


# =============================================================================
# ТЕСТЫ: Capital Adjustment
# =============================================================================


class TestCapitalAdjustment:
    """Тесты calculate_state_after_capital_adjustment."""

    def test_upward(self):
        result = calculate_state_after_capital_adjustment(11000.0, 10000.0, 1000.0, 1500.0)

        assert isinstance(result, CapitalAdjustmentTransition)
        assert result.total_capital == 11000.0
        assert result.initial_capital == 10500.0
        assert result.capital_diff == 500.0

    def test_downward(self):
        result = calculate_state_after_capital_adjustment(11000.0, 10000.0, 1000.0, 700.0)

        assert result.total_capital == 11000.0
        assert result.initial_capital == 9700.0
        assert result.capital_diff == -300.0

    def test_scenario_correction_after_creation(self):
        result = calculate_state_after_capital_adjustment(10000.0, 10000.0, 1000.0, 1500.0)

        assert result.initial_capital == 10500.0
        assert result.total_capital == 10000.0


# =============================================================================
# ТЕСТЫ: Remove Investor
# =============================================================================


class TestRemoveInvestor:
    """Тесты calculate_state_after_remove_investor."""

    def test_pool_shrinks_by_current_value(self):
        """Пул +20%: инвестор с 2000 уносит 2400."""
        result = calculate_state_after_remove_investor(12000.0, 10000.0, 2000.0)

        assert isinstance(result, RemoveInvestorTransition)
        assert result.initial_capital == 8000.0
        assert result.removed_value == pytest.approx(2400.0)
        assert result.total_capital == pytest.approx(9600.0)

    def test_pool_ratio_preserved(self):
        """После удаления ratio пула не меняется."""
        total, initial = 13750.0, 11000.0
        result = calculate_state_after_remove_investor(total, initial, 3300.0)

        assert result.total_capital / result.initial_capital == pytest.approx(total / initial)

    def test_last_investor_empties_pool(self):
        result = calculate_state_after_remove_investor(1200.0, 1000.0, 1000.0)

        assert result.initial_capital == 0.0
        assert result.total_capital == pytest.approx(0.0)

    def test_empty_initial_removes_nothing_from_total(self):
        result = calculate_state_after_remove_investor(500.0, 0.0, 100.0)

        assert result.removed_value == 0.0
        assert result.total_capital == 500.0
        assert result.initial_capital == -100.0


# =============================================================================
# ТЕСТЫ: Market Update
# =============================================================================


class TestMarketUpdate:
    """Тесты calculate_state_after_market_update."""

    def test_profit(self):
        result = calculate_state_after_market_update(10000.0, 10000.0, 10800.0)

        assert result == MarketUpdateTransition(
            total_capital=10800.0, initial_capital=10000.0, diff=800.0
        )

    def test_loss(self):
        result = calculate_state_after_market_update(10000.0, 10000.0, 9500.0)

        assert result.diff == -500.0
        assert result.initial_capital == 10000.0


# =============================================================================
# ТЕСТЫ: Сценарии
# =============================================================================


class TestScenarios:
    """Сквозные сценарии из нескольких переходов."""

    def test_join_grow_reinvest(self):
        # Первый инвестор
        s1 = calculate_state_after_add_investor(0.0, 0.0, 10000.0)
        # Рынок +10%
        s2 = calculate_state_after_market_update(s1.total_capital, s1.initial_capital, 11000.0)
        # Второй инвестор входит при ratio 1.1
        s3 = calculate_state_after_add_investor(s2.total_capital, s2.initial_capital, 1000.0)

        assert s3.entry_ratio == 1.1
        assert s3.total_capital == 12000.0
        assert s3.initial_capital == 11000.0

        # Реинвестирование 500
        s4 = calculate_state_after_reinvest(s3.total_capital, s3.initial_capital, 500.0)
        assert s4.total_capital == 12000.0
        assert s4.initial_capital == 11500.0
