"""MBS price, option-adjusted spread price and spread sensitivities, printed."""

from __future__ import annotations

import argparse

from quantlab.mbs import DEFAULT_SIMULATIONS, numerix_price

__all__ = ["duration_convexity", "main"]

WAC = 0.08
PV0 = 100000.0
R0 = 0.078
KAPPA = 0.6
RBAR = 0.08
SIGMA = 0.1
YEARS = 30.0
OAS = -0.012811
P0 = 110000.0
SHIFT = 0.0005


def duration_convexity(wac: float, pv0: float, r0: float, kappa: float, rbar: float,
                       sigma: float, years: float, oas: float, p0: float,
                       shift: float = SHIFT,
                       sim_num: int = DEFAULT_SIMULATIONS) -> tuple[float, float]:
    """Option-adjusted duration and convexity by shifting the spread.

    Prices at ``oas + shift`` and ``oas - shift`` are compared with the
    reference price ``p0``.
    """
    if shift <= 0:
        raise ValueError("shift must be positive")
    if p0 == 0:
        raise ValueError("p0 must be non-zero")
    p_plus = numerix_price(wac, pv0, r0, kappa, rbar, sigma, years, oas + shift, sim_num)
    p_minus = numerix_price(wac, pv0, r0, kappa, rbar, sigma, years, oas - shift, sim_num)
    duration = (p_minus - p_plus) / (2 * shift * p0)
    convexity = (p_plus + p_minus - 2 * p0) / (2 * p0 * shift * shift)
    return duration, convexity


def main(argv: list[str] | None = None) -> int:
    """Print the MBS price, the price at the reference spread and its sensitivities."""
    parser = argparse.ArgumentParser(description="Mortgage-backed security pricing report.")
    parser.add_argument("--kappa", type=float, default=KAPPA, help="mean-reversion speed")
    parser.add_argument("--rbar", type=float, default=RBAR, help="long-run rate")
    parser.add_argument("--sigma", type=float, default=SIGMA, help="rate volatility")
    parser.add_argument("--oas", type=float, default=OAS, help="option-adjusted spread")
    parser.add_argument("--sim-num", type=int, default=DEFAULT_SIMULATIONS,
                        help="number of simulated rate paths")
    args = parser.parse_args(argv)

    price = numerix_price(WAC, PV0, R0, args.kappa, args.rbar, args.sigma, YEARS,
                          0.0, args.sim_num)
    print(f"rbar = {args.rbar:g}, sigma = {args.sigma:g}, k = {args.kappa:g}, "
          f"Price = {price:g}")

    oas_price = numerix_price(WAC, PV0, R0, KAPPA, RBAR, SIGMA, YEARS, args.oas,
                              args.sim_num)
    print(f"Trying OAS Spread: {args.oas:g}")
    print(f" Price is {oas_price:g}")

    duration, convexity = duration_convexity(WAC, PV0, R0, KAPPA, RBAR, SIGMA, YEARS,
                                             args.oas, P0, SHIFT, args.sim_num)
    print(f"Duration: {duration:g}")
    print(f"Convexity: {convexity:g}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())