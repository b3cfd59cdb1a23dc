"""Loan amortisation helpers for a default-option model."""

from __future__ import annotations

__all__ = ["apr", "monthly_payment", "loan_a", "loan_b"]


def _months(t: float) -> int:
    return int(t * 12)


def apr(r0: float, delta: float, lambda2: float) -> float:
    """Annual percentage rate: base rate plus the default-intensity premium."""
    return r0 + delta * lambda2


def monthly_payment(l0: float, r: float, t: float) -> float:
    """Level monthly payment on a loan of ``l0`` at monthly rate ``r`` over ``t`` years."""
    return l0 * r / (1 - 1 / (1 + r) ** _months(t))


def loan_a(pmt: float, r: float) -> float:
    """The constant term of the outstanding-loan function, ``pmt / r``."""
    return pmt / r


def loan_b(pmt: float, r: float, t: float) -> float:
    """The decaying term of the outstanding-loan function."""
    return pmt / (r * (1 + r) ** _months(t))