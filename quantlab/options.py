"""Option pricing: closed form, lattices and Monte Carlo."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

import numpy as np

from quantlab.randgen import box_muller_halton, halton_sequence, wiener_process
from quantlab.stats import mean, pnorm

__all__ = [
    "call_price_simulation",
    "call_antithetic",
    "call_black_scholes",
    "put_black_scholes",
    "call_european_binomial",
    "put_european_binomial",
    "put_american_binomial",
    "call_european_trinomial",
    "call_european_lds",
    "lookback_call",
    "lookback_put",
]

_INT32_MAX = 2 ** 31 - 1


def call_price_simulation(
    w_t: Sequence[float], r: float, sigma: float, t: float, s0: float, strike: float
) -> list[float]:
    """Discounted call payoffs, one per terminal Wiener value in ``w_t``."""
    drift = (r - sigma * sigma / 2) * t
    discount = math.exp(r * t)
    return [
        max(s0 * math.exp(drift + sigma * w) - strike, 0.0) / discount for w in w_t
    ]


def call_antithetic(
    seed: int, size: int, r: float, sigma: float, t: float, s0: float, strike: float
) -> float:
    """Monte Carlo call price with antithetic variates."""
    w_t = wiener_process(t, size, seed)
    plain = call_price_simulation(w_t, r, sigma, t, s0, strike)
    mirrored = call_price_simulation([-w for w in w_t], r, sigma, t, s0, strike)
    return mean([0.5 * (a + b) for a, b in zip(plain, mirrored)])


def _d1_d2(r: float, sigma: float, t: float, s0: float, strike: float) -> tuple[float, float]:
    d1 = (math.log(s0 / strike) + (r + 0.5 * sigma * sigma) * t) / (sigma * math.sqrt(t))
    return d1, d1 - sigma * math.sqrt(t)


def call_black_scholes(r: float, sigma: float, t: float, s0: float, strike: float) -> float:
    """Black-Scholes price of a European call."""
    d1, d2 = _d1_d2(r, sigma, t, s0, strike)
    return s0 * pnorm(d1) - strike * pnorm(d2) / math.exp(r * t)


def put_black_scholes(r: float, sigma: float, t: float, s0: float, strike: float) -> float:
    """Black-Scholes price of a European put."""
    d1, d2 = _d1_d2(r, sigma, t, s0, strike)
    return strike * pnorm(-d2) / math.exp(r * t) - s0 * pnorm(-d1)


def _check_steps(steps: int) -> None:
    if steps <= 0:
        raise ValueError("steps must be positive")


def _binomial_parameters(method: str, r: float, sigma: float, delta: float) -> tuple[float, float, float]:
    """Up factor, down factor and up probability for a binomial scheme."""
    if method == "a":
        c = 0.5 * (math.exp(-r * delta) + math.exp((r + sigma * sigma) * delta))
        d = c - math.sqrt(c * c - 1)
        u = 1 / d
        p_up = (math.exp(r * delta) - d) / (u - d)
    elif method == "b":
        spread = math.sqrt(math.exp(sigma * sigma * delta) - 1)
        u = math.exp(r * delta) * (1 + spread)
        d = math.exp(r * delta) * (1 - spread)
        p_up = 0.5
    elif method == "c":
        drift = (r - sigma * sigma * 0.5) * delta
        u = math.exp(drift + sigma * math.sqrt(delta))
        d = math.exp(drift - sigma * math.sqrt(delta))
        p_up = 0.5
    elif method == "d":
        u = math.exp(sigma * math.sqrt(delta))
        d = math.exp(-sigma * math.sqrt(delta))
        p_up = 0.5 + 0.5 * ((r - 0.5 * sigma * sigma) * math.sqrt(delta) / sigma)
    else:
        raise ValueError(f"unknown binomial method: {method!r}")
    return u, d, p_up


def _binomial_prices(s: float, u: float, d: float, level: int) -> np.ndarray:
    ups = np.arange(level + 1)
    return s * np.power(u, ups) * np.power(d, level - ups)


def _binomial_european(method: str, s: float, k: float, r: float, sigma: float,
                       t: float, steps: int, call: bool) -> float:
    _check_steps(steps)
    delta = t / steps
    u, d, p_up = _binomial_parameters(method, r, sigma, delta)
    p_down = 1 - p_up
    discount = math.exp(r * delta)
    prices = _binomial_prices(s, u, d, steps)
    values = np.maximum(0.0, prices - k if call else k - prices)
    for _ in range(steps):
        values = (p_down * values[:-1] + p_up * values[1:]) / discount
    return float(values[0])


def call_european_binomial(method: str, s: float, k: float, r: float,
                           sigma: float, t: float, steps: int) -> float:
    """European call on a binomial tree; ``method`` is one of "a", "b", "c", "d"."""
    return _binomial_european(method, s, k, r, sigma, t, steps, call=True)


def put_european_binomial(method: str, s: float, k: float, r: float,
                          sigma: float, t: float, steps: int) -> float:
    """European put on a binomial tree; ``method`` is one of "a", "b", "c", "d"."""
    return _binomial_european(method, s, k, r, sigma, t, steps, call=False)


def put_american_binomial(method: str, s: float, k: float, r: float,
                          sigma: float, t: float, steps: int) -> float:
    """American put on a binomial tree.

    At each node the larger of continuation and exercise value is taken,
    and that larger value is discounted one step.
    """
    _check_steps(steps)
    delta = t / steps
    u, d, p_up = _binomial_parameters(method, r, sigma, delta)
    p_down = 1 - p_up
    discount = math.exp(r * delta)
    values = np.maximum(0.0, k - _binomial_prices(s, u, d, steps))
    for level in range(steps - 1, -1, -1):
        continuation = p_down * values[:-1] + p_up * values[1:]
        intrinsic = np.maximum(0.0, k - _binomial_prices(s, u, d, level))
        values = np.maximum(continuation, intrinsic) / discount
    return float(values[0])


def call_european_trinomial(method: str, s: float, k: float, r: float,
                            sigma: float, t: float, steps: int) -> float:
    """European call on a trinomial tree.

    Method "a" works in prices, method "b" in log prices.
    """
    _check_steps(steps)
    delta = t / steps
    discount = math.exp(r * delta)
    # Node j at the last level sits (steps - j) moves above the spot.
    moves = steps - np.arange(2 * steps + 1)
    ups = np.maximum(moves, 0)
    downs = np.maximum(-moves, 0)
    if method == "a":
        d = math.exp(-sigma * math.sqrt(3 * delta))
        u = 1 / d
        rd = r * delta
        p_down = (rd * (1 - u) + rd * rd + sigma * sigma * delta) / ((u - d) * (1 - d))
        p_up = (rd * (1 - d) + rd * rd + sigma * sigma * delta) / ((u - d) * (u - 1))
        prices = s * np.power(u, ups) * np.power(d, downs)
    elif method == "b":
        dx_up = sigma * math.sqrt(3 * delta)
        dx_down = -dx_up
        nu = r - 0.5 * sigma * sigma
        second = sigma * sigma * delta + nu * nu * delta * delta
        first = nu * delta
        p_down = 0.5 * (second / (dx_up * dx_up) - first / dx_up)
        p_up = 0.5 * (second / (dx_up * dx_up) + first / dx_up)
        prices = np.exp(math.log(s) + dx_up * ups + dx_down * downs)
    else:
        raise ValueError(f"unknown trinomial method: {method!r}")
    p_m = 1 - p_down - p_up
    values = np.maximum(0.0, prices - k)
    for _ in range(steps):
        values = (p_up * values[:-2] + p_m * values[1:-1] + p_down * values[2:]) / discount
    return float(values[0])


def call_european_lds(s: float, k: float, r: float, sigma: float, t: float,
                      n: int, base1: int, base2: int) -> float:
    """European call by quasi Monte Carlo on two Halton sequences."""
    normals = box_muller_halton(halton_sequence(base1, n), halton_sequence(base2, n))
    scale = math.sqrt(t)
    payoffs = call_price_simulation([z * scale for z in normals], r, sigma, t, s, k)
    return mean(payoffs)


def _simulate_extremes(r: float, s0: float, sigma: float, num: int, steps: int,
                       delta: float, rng: random.Random | None):
    if num <= 0:
        raise ValueError("num must be positive")
    _check_steps(steps)
    rng = rng if rng is not None else random.Random()
    drift = (r - 0.5 * sigma * sigma) * delta
    for _ in range(num):
        increments = wiener_process(delta, steps, rng.randint(1, _INT32_MAX - 1))
        price = s0
        path = []
        for dw in increments:
            price *= math.exp(drift + sigma * dw)
            path.append(price)
        yield path


def lookback_call(r: float, t: float, s0: float, strike: float, sigma: float,
                  num: int, steps: int, delta: float,
                  rng: random.Random | None = None) -> float:
    """Average payoff of a fixed-strike lookback call over ``num`` paths.

    The payoff is not discounted; ``t`` is accepted for symmetry with the
    other pricers and does not enter the result.
    """
    total = 0.0
    for path in _simulate_extremes(r, s0, sigma, num, steps, delta, rng):
        total += max(max(0.0, *path) - strike, 0.0)
    return total / num


def lookback_put(r: float, t: float, s0: float, strike: float, sigma: float,
                 num: int, steps: int, delta: float,
                 rng: random.Random | None = None) -> float:
    """Average payoff of a fixed-strike lookback put over ``num`` paths.

    The payoff is not discounted; ``t`` does not enter the result.
    """
    total = 0.0
    for path in _simulate_extremes(r, s0, sigma, num, steps, delta, rng):
        total += max(strike - min(float(_INT32_MAX), *path), 0.0)
    return total / num