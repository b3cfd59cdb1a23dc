"""Mortgage-backed security pricing with the Numerix prepayment model."""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

__all__ = [
    "burnout",
    "refinancing_incentive",
    "seasoning",
    "seasonality",
    "cpr",
    "cir_rate_paths",
    "numerix_price",
]

MONTHS_PER_YEAR = 12
WINDOW_MONTHS = 120
DEFAULT_SEED = 12345678
DEFAULT_SIMULATIONS = 1000

_SEASONALITY = (0.94, 0.76, 0.74, 0.76, 0.95, 0.98, 0.92, 1.10, 1.18, 1.22, 1.23, 0.98)


def burnout(pv0: float, pv_prev: float) -> float:
    """Burnout factor from the share of the pool still outstanding."""
    return 0.3 + 0.7 * (pv_prev / pv0)


def refinancing_incentive(wac: float, ten_year_rate: float) -> float:
    """Refinancing incentive from the mortgage rate and the ten-year rate."""
    return 0.28 + 0.14 * math.atan(-8.57 + 430 * (wac - ten_year_rate))


def seasoning(t: float) -> float:
    """Seasoning multiplier for loan age ``t`` in months, capped at one."""
    return min(1.0, t / 30.0)


def seasonality(month_index: int) -> float:
    """Seasonal multiplier for a calendar month numbered 0 to 11."""
    if not 0 <= month_index < MONTHS_PER_YEAR:
        raise ValueError(f"month index must lie in 0..11, got {month_index}")
    return _SEASONALITY[month_index]


def cpr(pv0: float, pv_prev: float, t: float, wac: float, rate: float,
        month_index: int) -> float:
    """Conditional prepayment rate at month ``t``."""
    return (refinancing_incentive(wac, rate) * burnout(pv0, pv_prev)
            * seasoning(t) * seasonality(month_index))


def cir_rate_paths(r0: float, sigma: float, kappa: float, rbar: float, steps: int,
                   sim_num: int = DEFAULT_SIMULATIONS,
                   seed: int | None = DEFAULT_SEED) -> np.ndarray:
    """Monthly Euler paths of the CIR short rate, one row per simulation.

    The square root is taken of the absolute previous rate, so paths that
    dip below zero stay finite.
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")
    if sim_num < 1:
        raise ValueError("sim_num must be at least 1")
    rng = np.random.default_rng(seed)
    dt = 1.0 / MONTHS_PER_YEAR
    vol = sigma * math.sqrt(dt)
    shocks = rng.standard_normal((sim_num, steps - 1))
    rates = np.empty((sim_num, steps))
    rates[:, 0] = r0
    for j in range(1, steps):
        previous = rates[:, j - 1]
        rates[:, j] = (previous + kappa * (rbar - previous) * dt
                       + vol * np.sqrt(np.abs(previous)) * shocks[:, j - 1])
    return rates


def _cash_flows(pv0: float, wac: float, monthly_rate: float, steps: int,
                ten_year: np.ndarray) -> Iterator[float]:
    """Monthly pool cash flows: scheduled principal, prepayment and interest."""
    pv_prev = pv0
    for month in range(1, steps):
        prepay_rate = cpr(pv0, pv_prev, month, wac, ten_year[month],
                          (month + 1) % MONTHS_PER_YEAR)
        annuity = 1.0 / (1.0 - (1.0 + monthly_rate) ** (month - 1.0 - steps)) - 1.0
        scheduled = pv_prev * monthly_rate * annuity
        prepaid = (pv_prev - scheduled) * (1 - (1 - prepay_rate) ** (1.0 / 12))
        principal = scheduled + prepaid
        pv = pv_prev - principal
        yield principal + pv * monthly_rate
        pv_prev = pv


def numerix_price(wac: float, pv0: float, r0: float, kappa: float, rbar: float,
                  sigma: float, years: float, oas: float = 0.0,
                  sim_num: int = DEFAULT_SIMULATIONS,
                  seed: int | None = DEFAULT_SEED) -> float:
    """Price of a pass-through MBS under CIR rates and the Numerix model.

    Cash flows are discounted along each simulated rate path shifted by the
    option-adjusted spread ``oas``.
    """
    if years <= 0:
        raise ValueError("years must be positive")
    if wac <= 0:
        raise ValueError("wac must be positive")
    steps = int(years * MONTHS_PER_YEAR + 1)
    if steps < 2:
        raise ValueError("the loan must run for at least one month")
    monthly_rate = wac / MONTHS_PER_YEAR
    dt = years / steps

    rates = cir_rate_paths(r0, sigma, kappa, rbar, steps + WINDOW_MONTHS, sim_num, seed)
    column_means = rates.mean(axis=0)
    window_sums = np.convolve(column_means, np.ones(WINDOW_MONTHS), mode="valid")
    ten_year = window_sums[:steps] / WINDOW_MONTHS

    cash = np.fromiter(_cash_flows(pv0, wac, monthly_rate, steps, ten_year),
                       dtype=float, count=steps - 1)
    discount = np.exp(-np.cumsum((rates[:, 1:steps] + oas) * dt, axis=1))
    return float(np.mean(discount @ cash))