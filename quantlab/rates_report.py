"""Bond and bond-option prices under short-rate models, printed as a report."""

from __future__ import annotations

import argparse
import math

import numpy as np

from quantlab.fixed_income import (
    cir_affine_coefficients,
    cir_explicit_call,
    cir_paths,
    g2pp_paths,
    vasicek_bond_price,
    vasicek_paths,
    zero_coupon_mc,
)

__all__ = [
    "run_zero_coupon",
    "run_coupon_bond",
    "run_vasicek_call",
    "run_coupon_bond_call",
    "run_cir_call",
    "run_cir_explicit_call",
    "run_g2pp_put",
    "main",
]

TRADING_DAYS = 252
FACE = 1000.0
STRIKE = 980.0

_CASHFLOWS = (30, 30, 30, 30, 30, 30, 30, 1030)
_SEMIANNUAL_TIMES = (0.5, 1, 1.5, 2, 2.5, 3, 3.5, 4)
_SHIFTED_TIMES = (0.25, 0.75, 1.25, 1.75, 2.25, 2.75, 3.25, 3.75)


def _generator(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def run_zero_coupon(r0: float, sigma: float, kappa: float, rbar: float,
                    rng: np.random.Generator | None = None) -> float:
    """Vasicek zero-coupon bond, face 1000, half a year to maturity."""
    return zero_coupon_mc(r0, sigma, kappa, rbar, FACE, 0.5, 127, _generator(rng))


def run_coupon_bond(r0: float, sigma: float, kappa: float, rbar: float,
                    rng: np.random.Generator | None = None) -> float:
    """Semi-annual coupon bond priced as a sum of zero-coupon bonds."""
    rng = _generator(rng)
    return sum(
        zero_coupon_mc(r0, sigma, kappa, rbar, cash, when,
                       math.floor(when * TRADING_DAYS), rng)
        for cash, when in zip(_CASHFLOWS, _SEMIANNUAL_TIMES)
    )


def run_vasicek_call(r0: float, sigma: float, kappa: float, rbar: float,
                     rng: np.random.Generator | None = None) -> float:
    """European call, expiring in three months, on a half-year zero-coupon bond."""
    expiry, maturity, sim_num = 0.25, 0.5, 5000
    steps = math.floor(expiry * TRADING_DAYS)
    paths = vasicek_paths(r0, sigma, kappa, rbar, expiry, steps, sim_num, _generator(rng))
    total = 0.0
    for rate, integral in zip(paths.rates[:, -1], paths.integrals):
        bond = vasicek_bond_price(FACE, rate, kappa, sigma, rbar, maturity, expiry)
        total += max(bond - STRIKE, 0.0) / math.exp(integral)
    return total / sim_num


def run_coupon_bond_call(r0: float, sigma: float, kappa: float, rbar: float,
                         rng: np.random.Generator | None = None) -> float:
    """European call, expiring in three months, on the coupon bond.

    The bond value at expiry is itself found by simulation from each
    simulated rate at expiry.
    """
    expiry, sim_num = 0.25, 1000
    steps = math.floor(expiry * TRADING_DAYS)
    rng = _generator(rng)
    paths = vasicek_paths(r0, sigma, kappa, rbar, expiry, steps, sim_num, rng)
    total = 0.0
    for rate, integral in zip(paths.rates[:, -1], paths.integrals):
        bond_at_expiry = sum(
            zero_coupon_mc(rate, sigma, kappa, rbar, cash, when, steps, rng)
            for cash, when in zip(_CASHFLOWS, _SHIFTED_TIMES)
        )
        total += max(bond_at_expiry - STRIKE, 0.0) / math.exp(integral)
    return total / sim_num


def run_cir_call(r0: float, sigma: float, kappa: float, rbar: float,
                 rng: np.random.Generator | None = None) -> float:
    """European call on a one-year CIR bond, expiring in half a year."""
    expiry, maturity, sim_num = 0.5, 1.0, 5000
    steps = math.floor(expiry * 360)
    paths = cir_paths(r0, sigma, kappa, rbar, expiry, steps, sim_num, _generator(rng))
    a_coef, b_coef = cir_affine_coefficients(kappa, sigma, rbar, expiry, maturity)
    bonds = FACE * a_coef * np.exp(-b_coef * paths.rates[:, -1])
    payoffs = np.maximum(bonds - STRIKE, 0.0) / np.exp(paths.integrals)
    return float(np.sum(payoffs) / sim_num)


def run_cir_explicit_call(r0: float, sigma: float, kappa: float, rbar: float) -> float:
    """The same CIR call by the closed-form formula."""
    return cir_explicit_call(r0, sigma, kappa, rbar, STRIKE, FACE, 0.5, 1.0, 0.0)


def run_g2pp_put(r0: float, sigma: float,
                 rng: np.random.Generator | None = None,
                 sim_num: int = 1000) -> float:
    """European put, expiring in half a year, on a one-year bond under G2++.

    ``r0`` is the initial rate of the reference set; the factors start at zero.
    """
    expiry, maturity, strike = 0.5, 1.0, 985.0
    steps = math.floor(expiry * 360) + 1
    rho, a, b, eta, phi = 0.7, 0.1, 0.3, 0.08, 0.03
    rng = _generator(rng)

    outer = g2pp_paths(sim_num, expiry, steps, a, b, sigma, phi, eta, rho, rng=rng)
    total = 0.0
    for x_end, y_end, integral in zip(outer.x[:, -1], outer.y[:, -1], outer.integrals):
        inner = g2pp_paths(sim_num, maturity - expiry, steps, a, b, sigma, phi, eta,
                           rho, x0=x_end, y0=y_end, rng=rng)
        bonds = FACE * np.exp(-inner.integrals)
        payoff = float(np.mean(np.maximum(strike - bonds, 0.0)))
        total += payoff * math.exp(-integral)
    return total / sim_num


def _section(label: str, line: str) -> None:
    print(f"{'#' * 40} {label} {'#' * 50}")
    print(line)
    print("#" * 95)


def main(argv: list[str] | None = None) -> int:
    """Print every bond and bond-option price of the report."""
    parser = argparse.ArgumentParser(description="Short-rate model bond pricing report.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the simulations")
    args = parser.parse_args(argv)
    rng = np.random.default_rng(args.seed)

    r0, sigma, kappa, rbar = 0.05, 0.18, 0.82, 0.05
    _section("Qn1 a", f"The bond price at time 0 is: "
                      f"{run_zero_coupon(r0, sigma, kappa, rbar, rng):g}")
    _section("Qn1 b", f"The bond price at time 0 is: "
                      f"{run_coupon_bond(r0, sigma, kappa, rbar, rng):g}")
    _section("Qn1 c", f"European Call on the bond is:  "
                      f"{run_vasicek_call(r0, sigma, kappa, rbar, rng):g}")
    _section("Qn1 d", f"European Call on the bond is: "
                      f"{run_coupon_bond_call(r0, sigma, kappa, rbar, rng):g}")

    r0, sigma, kappa, rbar = 0.05, 0.18, 0.92, 0.055
    _section("Qn2 a", f"European Call on the bond is:  "
                      f"{run_cir_call(r0, sigma, kappa, rbar, rng):g}")
    _section("Qn2 b", f"Call option price is: "
                      f"{run_cir_explicit_call(r0, sigma, kappa, rbar):g}")

    r0, sigma = 0.03, 0.03
    _section("Qn3", f"Option Price is: {run_g2pp_put(r0, sigma, rng):g}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())