"""
core.finance
Financial math primitives (pure functions, no state).

Rates are annual decimals (0.18 == 18% APR); periods are months.
"""

from __future__ import annotations

from .rng import Rng
from .state import DebtBalances

BASE_RETURN = 0.04
RISK_RETURN_SPREAD = 0.06
MAX_VOLATILITY = 0.15
RECESSION_PENALTY = 0.08


def compound_interest(principal: float, annual_rate: float, months: float) -> float:
    """New balance after monthly compounding."""
    if annual_rate == 0 or months == 0:
        return principal
    return principal * (1 + annual_rate / 12) ** months


def simple_interest(principal: float, annual_rate: float, months: float) -> float:
    """Interest amount only (not principal + interest)."""
    return principal * (annual_rate / 12) * months


def adjust_for_inflation(value: float, annual_rate: float, months: float) -> float:
    # same compounding as compound_interest, applied to prices
    return compound_interest(value, annual_rate, months)


def real_purchasing_power(nominal_value: float, cumulative_inflation: float) -> float:
    return nominal_value / cumulative_inflation


def total_debt(debt: DebtBalances) -> float:
    return debt.credit_card + debt.student_loan + debt.auto_loan + debt.mortgage


def net_worth(cash: float, investments: float, debt: DebtBalances) -> float:
    return cash + investments - total_debt(debt)


def investment_growth(
    principal: float,
    risk_level: float,
    months: float,
    rng: Rng,
    recession_active: bool,
) -> float:
    """Risk-adjusted growth of an investment balance.

    - expected annual return: 4% (risk 0) .. 10% (risk 100)
    - volatility: 0 .. 15%, perturbation drawn uniformly in [-vol, +vol]
    - recession: flat -8% annual

    Exactly one rng draw per call.
    """
    risk = float(risk_level) / 100.0
    base_return = BASE_RETURN + risk * RISK_RETURN_SPREAD
    volatility = risk * MAX_VOLATILITY
    perturbation = (rng() - 0.5) * 2 * volatility
    penalty = RECESSION_PENALTY if recession_active else 0.0

    annual_return = base_return + perturbation - penalty
    return principal * (1 + annual_return / 12) ** months
