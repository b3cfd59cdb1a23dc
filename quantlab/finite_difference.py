"""Finite-difference solvers for European and American options."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from quantlab.options import put_black_scholes

__all__ = [
    "Scheme",
    "OptionKind",
    "Coefficients",
    "PutEstimate",
    "efd_coefficients",
    "ifd_coefficients",
    "cnfd_coefficients",
    "efd_european_put",
    "ifd_european_put",
    "cnfd_european_put",
    "american_option_price",
]

SIGMA = 0.2
STRIKE = 10.0
RATE = 0.04
DT = 0.002
MATURITY = 0.5

_EFD_HALF_WIDTH = 50
_IMPLICIT_HALF_WIDTH = 80


class Scheme(Enum):
    """Finite-difference scheme; the value is its conventional abbreviation."""

    EFD = "EFD"
    IFD = "IFD"
    CNFD = "CNFD"

    @property
    def alpha(self) -> float:
        """Weight on the explicit part of the scheme."""
        return {Scheme.EFD: 1.0, Scheme.IFD: 0.0, Scheme.CNFD: 0.5}[self]


class OptionKind(Enum):
    """Call or put."""

    CALL = "Call"
    PUT = "Put"


@dataclass(frozen=True)
class Coefficients:
    """Up, middle and down weights of a log-price scheme."""

    pu: float
    pm: float
    pd: float


@dataclass(frozen=True)
class PutEstimate:
    """A finite-difference put price next to its Black-Scholes value."""

    spot: float
    finite_difference: float
    black_scholes: float

    @property
    def error(self) -> float:
        """Finite-difference value minus the Black-Scholes value."""
        return self.finite_difference - self.black_scholes


def efd_coefficients(dt: float, sigma: float, dx: float, r: float) -> Coefficients:
    """Weights of the explicit scheme."""
    diffusion = sigma * sigma / (2 * dx * dx)
    drift = (r - 0.5 * sigma * sigma) / (2 * dx)
    return Coefficients(
        pu=dt * (diffusion + drift),
        pm=1 - dt * sigma * sigma / (dx * dx) - r * dt,
        pd=dt * (diffusion - drift),
    )


def ifd_coefficients(dt: float, sigma: float, dx: float, r: float) -> Coefficients:
    """Weights of the implicit scheme."""
    diffusion = sigma * sigma / (dx * dx)
    drift = (r - 0.5 * sigma * sigma) / dx
    return Coefficients(
        pu=-0.5 * dt * (diffusion + drift),
        pm=1 + dt * diffusion + r * dt,
        pd=-0.5 * dt * (diffusion - drift),
    )


def cnfd_coefficients(dt: float, sigma: float, dx: float, r: float) -> Coefficients:
    """Weights of the Crank-Nicolson scheme."""
    diffusion = sigma * sigma / (dx * dx)
    drift = (r - 0.5 * sigma * sigma) / dx
    return Coefficients(
        pu=-0.25 * dt * (diffusion + drift),
        pm=1 + dt * sigma * sigma * 0.5 / (dx * dx) + r * dt * 0.5,
        pd=-0.25 * dt * (diffusion - drift),
    )


def _time_steps() -> int:
    return int(MATURITY / DT) + 1


def _check_inputs(price: float, delta_factor: int) -> float:
    if price <= 0:
        raise ValueError("price must be positive")
    if delta_factor <= 0:
        raise ValueError("delta_factor must be positive")
    return SIGMA * math.sqrt(delta_factor * DT)


def _log_grid(price: float, dx: float, half_width: int) -> tuple[np.ndarray, np.ndarray]:
    """Stock prices from the highest to the lowest node, and the put payoff."""
    offsets = np.arange(2 * half_width, -1, -1) - half_width
    prices = np.exp(offsets * dx + math.log(price))
    payoff = np.maximum(STRIKE - prices, 0.0)
    return prices, payoff


def _fill_interior(matrix: np.ndarray, left, centre, right) -> None:
    rows = np.arange(1, matrix.shape[0] - 1)
    matrix[rows, rows - 1] = left
    matrix[rows, rows] = centre
    matrix[rows, rows + 1] = right


def _neumann_matrix(size: int) -> np.ndarray:
    matrix = np.zeros((size, size))
    matrix[0, 0] = 1.0
    matrix[0, 1] = -1.0
    matrix[-1, -1] = -1.0
    matrix[-1, -2] = 1.0
    return matrix


def _estimate(price: float, values: np.ndarray) -> PutEstimate:
    midpoint = (values.size - 1) // 2
    return PutEstimate(
        spot=price,
        finite_difference=float(values[midpoint]),
        black_scholes=put_black_scholes(RATE, SIGMA, MATURITY, price, STRIKE),
    )


def efd_european_put(price: float, delta_factor: int) -> PutEstimate:
    """European put by the explicit scheme on a log-price grid."""
    dx = _check_inputs(price, delta_factor)
    c = efd_coefficients(DT, SIGMA, dx, RATE)
    prices, values = _log_grid(price, dx, _EFD_HALF_WIDTH)
    size = prices.size

    matrix = np.zeros((size, size))
    matrix[0, :3] = (c.pu, c.pm, c.pd)
    matrix[-1, -3:] = (c.pu, c.pm, c.pd)
    _fill_interior(matrix, c.pu, c.pm, c.pd)

    boundary = np.zeros(size)
    boundary[-1] = -(prices[-1] - prices[-2])

    for _ in range(_time_steps()):
        values = matrix @ values + boundary
    return _estimate(price, values)


def ifd_european_put(price: float, delta_factor: int) -> PutEstimate:
    """European put by the implicit scheme on a log-price grid."""
    dx = _check_inputs(price, delta_factor)
    c = ifd_coefficients(DT, SIGMA, dx, RATE)
    prices, values = _log_grid(price, dx, _IMPLICIT_HALF_WIDTH)

    matrix = _neumann_matrix(prices.size)
    _fill_interior(matrix, c.pu, c.pm, c.pd)
    inverse = np.linalg.inv(matrix)
    lower_edge = -(prices[-1] - prices[-2])

    rhs = values.copy()
    rhs[-1] = lower_edge
    rhs[0] = 0.0
    for _ in range(_time_steps()):
        values = inverse @ rhs
        rhs = values.copy()
        rhs[-1] = lower_edge
        rhs[0] = 0.0
    return _estimate(price, values)


def cnfd_european_put(price: float, delta_factor: int) -> PutEstimate:
    """European put by the Crank-Nicolson scheme on a log-price grid."""
    dx = _check_inputs(price, delta_factor)
    c = cnfd_coefficients(DT, SIGMA, dx, RATE)
    prices, values = _log_grid(price, dx, _IMPLICIT_HALF_WIDTH)
    size = prices.size

    matrix = _neumann_matrix(size)
    _fill_interior(matrix, c.pu, c.pm, c.pd)
    inverse = np.linalg.inv(matrix)

    explicit = np.zeros((size, size))
    _fill_interior(explicit, -c.pu, -(c.pm - 2), -c.pd)
    lower_edge = -(prices[-1] - prices[-2])

    rhs = explicit @ values
    rhs[-1] = lower_edge
    for _ in range(_time_steps()):
        values = inverse @ rhs
        rhs = explicit @ values
        rhs[-1] = lower_edge
    return _estimate(price, values)


def american_option_price(price: float, ds: float, method: Scheme | str,
                          kind: OptionKind | str) -> float:
    """American option on a price grid of spacing ``ds`` by a weighted scheme.

    ``method`` selects the explicit, implicit or Crank-Nicolson weighting;
    the grid runs from zero to twice ``price``.
    """
    scheme = Scheme(method)
    option = OptionKind(kind)
    if ds <= 0:
        raise ValueError("ds must be positive")
    half_width = int(price / ds)
    if half_width < 1:
        raise ValueError("price must be at least one grid spacing")
    size = 2 * half_width + 1

    nodes = np.arange(size - 1, -1, -1, dtype=float)
    prices = nodes * ds
    if option is OptionKind.CALL:
        terminal = np.maximum(prices - STRIKE, 0.0)
    else:
        terminal = np.maximum(STRIKE - prices, 0.0)

    alpha = scheme.alpha
    j = nodes[1:-1]
    var_term = SIGMA * SIGMA * j * j
    lower = 0.5 * (var_term - RATE * j)
    middle = var_term + RATE
    upper = 0.5 * (var_term + RATE * j)

    implicit = _neumann_matrix(size)
    _fill_interior(implicit, upper * (1 - alpha), -(1 / DT) - middle * (1 - alpha),
                   lower * (1 - alpha))
    explicit = _neumann_matrix(size)
    _fill_interior(explicit, -upper * alpha, -((1 / DT) - middle * alpha),
                   -lower * alpha)
    inverse = np.linalg.inv(implicit)

    values = terminal.copy()
    rhs = explicit @ values
    for _ in range(_time_steps()):
        if option is OptionKind.CALL:
            rhs[0] = prices[0] - prices[1]
            rhs[-1] = 0.0
        else:
            rhs[0] = 0.0
            rhs[-1] = -(prices[-1] - prices[-2])
        values = np.maximum(inverse @ rhs, terminal)
        rhs = explicit @ values
    return float(values[(size - 1) // 2])