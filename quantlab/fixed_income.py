"""Short-rate models: path simulation, bond prices and bond options."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

__all__ = [
    "RatePaths",
    "G2PPPaths",
    "vasicek_paths",
    "cir_paths",
    "g2pp_paths",
    "zero_coupon_mc",
    "vasicek_bond_price",
    "cir_affine_coefficients",
    "cir_explicit_call",
]

ZERO_COUPON_SIMULATIONS = 1000

# Non-central chi-squared probabilities entering the closed-form CIR call,
# fixed for the reference parameter set.
CIR_CHI_SQUARED_1 = 0.2893
CIR_CHI_SQUARED_2 = 0.2864


@dataclass(frozen=True)
class RatePaths:
    """Simulated short-rate paths and their integrals.

    ``rates`` has one row per simulation and one column per step;
    ``integrals`` holds, per simulation, the sum of ``rate * dt`` over
    every step after the first.
    """

    rates: np.ndarray
    integrals: np.ndarray


@dataclass(frozen=True)
class G2PPPaths:
    """Paths of the two-factor G2++ model: the rate and its two factors."""

    rates: np.ndarray
    integrals: np.ndarray
    x: np.ndarray
    y: np.ndarray


def _check_grid(steps: int, sim_num: int) -> None:
    if steps < 1:
        raise ValueError("steps must be at least 1")
    if sim_num < 1:
        raise ValueError("sim_num must be at least 1")


def _generator(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _mean_reverting_paths(r0: float, sigma: float, kappa: float, rbar: float,
                          t: float, steps: int, sim_num: int,
                          rng: np.random.Generator | None,
                          square_root: bool) -> RatePaths:
    _check_grid(steps, sim_num)
    rng = _generator(rng)
    dt = t / steps
    shocks = rng.standard_normal((sim_num, steps - 1))
    rates = np.empty((sim_num, steps))
    rates[:, 0] = r0
    vol = sigma * math.sqrt(dt)
    with np.errstate(invalid="ignore"):
        for j in range(1, steps):
            previous = rates[:, j - 1]
            diffusion = vol * shocks[:, j - 1]
            if square_root:
                diffusion = diffusion * np.sqrt(previous)
            rates[:, j] = previous + kappa * (rbar - previous) * dt + diffusion
    integrals = rates[:, 1:].sum(axis=1) * dt
    return RatePaths(rates=rates, integrals=integrals)


def vasicek_paths(r0: float, sigma: float, kappa: float, rbar: float, t: float,
                  steps: int, sim_num: int,
                  rng: np.random.Generator | None = None) -> RatePaths:
    """Euler paths of the Vasicek model over ``t`` years in ``steps`` steps."""
    return _mean_reverting_paths(r0, sigma, kappa, rbar, t, steps, sim_num, rng,
                                 square_root=False)


def cir_paths(r0: float, sigma: float, kappa: float, rbar: float, t: float,
              steps: int, sim_num: int,
              rng: np.random.Generator | None = None) -> RatePaths:
    """Euler paths of the Cox-Ingersoll-Ross model.

    A path that turns negative yields NaN from then on.
    """
    return _mean_reverting_paths(r0, sigma, kappa, rbar, t, steps, sim_num, rng,
                                 square_root=True)


def g2pp_paths(sim_num: int, t: float, steps: int, a: float, b: float,
               sigma: float, phi: float, eta: float, rho: float,
               x0=0.0, y0=0.0,
               rng: np.random.Generator | None = None) -> G2PPPaths:
    """Euler paths of the G2++ model, ``r = x + y + phi``.

    ``x0`` and ``y0`` are the starting factor values, either scalars or one
    value per simulation.
    """
    _check_grid(steps, sim_num)
    if not -1.0 <= rho <= 1.0:
        raise ValueError("rho must lie in [-1, 1]")
    rng = _generator(rng)
    dt = t / steps
    root_dt = math.sqrt(dt)
    spread = math.sqrt(1 - rho * rho)

    x = np.zeros((sim_num, steps))
    y = np.zeros((sim_num, steps))
    x[:, 0] = x0
    y[:, 0] = y0
    for j in range(1, steps):
        z1 = rng.standard_normal(sim_num)
        z2 = rho * z1 + spread * rng.standard_normal(sim_num)
        x[:, j] = x[:, j - 1] - a * x[:, j - 1] * dt + sigma * z1 * root_dt
        y[:, j] = y[:, j - 1] - b * y[:, j - 1] * dt + eta * z2 * root_dt
    rates = x + y + phi
    integrals = rates[:, 1:].sum(axis=1) * dt
    return G2PPPaths(rates=rates, integrals=integrals, x=x, y=y)


def zero_coupon_mc(r0: float, sigma: float, kappa: float, rbar: float,
                   face: float, t: float, steps: int,
                   rng: np.random.Generator | None = None) -> float:
    """Monte Carlo price of a zero-coupon bond under Vasicek."""
    paths = vasicek_paths(r0, sigma, kappa, rbar, t, steps,
                          ZERO_COUPON_SIMULATIONS, rng)
    return float(np.mean(face * np.exp(-paths.integrals)))


def vasicek_bond_price(face: float, rt: float, kappa: float, sigma: float,
                       rbar: float, maturity: float, t: float) -> float:
    """Closed-form Vasicek price at ``t`` of a bond maturing at ``maturity``."""
    tau = maturity - t
    b_coef = (1 / kappa) * (1 - math.exp(-kappa * tau))
    a_coef = math.exp(
        (rbar - sigma * sigma / (2 * kappa * kappa)) * (b_coef - tau)
        - sigma * sigma * b_coef * b_coef / (4 * kappa)
    )
    return a_coef * math.exp(-b_coef * rt) * face


def cir_affine_coefficients(kappa: float, sigma: float, rbar: float,
                            t: float, maturity: float) -> tuple[float, float]:
    """The CIR bond-price coefficients ``(A, B)`` with ``P = A * exp(-B * r)``."""
    h1 = math.sqrt(kappa * kappa + 2 * sigma * sigma)
    h2 = (kappa + h1) * 0.5
    h3 = 2 * kappa * rbar / (sigma * sigma)
    exp_h1 = math.exp(h1 * (maturity - t))
    exp_h2 = math.exp(h2 * (maturity - t))
    denominator = h2 * (exp_h1 - 1) + h1
    return (h1 * exp_h2 / denominator) ** h3, (exp_h1 - 1) / denominator


def cir_explicit_call(r0: float, sigma: float, kappa: float, rbar: float,
                      strike: float, face: float, expiry: float,
                      maturity: float, t: float) -> float:
    """Closed-form CIR call at ``t`` on a bond maturing at ``maturity``.

    The option expires at ``expiry``; the chi-squared probabilities are the
    fixed reference values.
    """
    a_ts, b_ts = cir_affine_coefficients(kappa, sigma, rbar, t, maturity)
    a_tt, b_tt = cir_affine_coefficients(kappa, sigma, rbar, t, expiry)
    bond_to_maturity = a_ts * math.exp(-b_ts * r0)
    bond_to_expiry = a_tt * math.exp(-b_tt * r0)
    return (face * bond_to_maturity * CIR_CHI_SQUARED_1
            - strike * bond_to_expiry * CIR_CHI_SQUARED_2)