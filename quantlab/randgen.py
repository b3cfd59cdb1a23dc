"""Pseudo-random and low-discrepancy number generators."""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = [
    "lgm_next",
    "runif",
    "rbinom",
    "rexp",
    "box_muller",
    "box_muller_halton",
    "polar_marsaglia",
    "bivariate_normal_x",
    "bivariate_normal_y",
    "wiener_process",
    "halton_sequence",
]

_MULTIPLIER = 7 ** 5
_MODULUS = 2 ** 31 - 1
_UINT32 = 0xFFFFFFFF


def lgm_next(m: int, num: int) -> int:
    """Next state of the Lewis-Goodman-Miller generator.

    The product is taken in 32-bit unsigned arithmetic before the modulus.
    """
    if m <= 0:
        raise ValueError("modulus must be positive")
    if num < 0:
        raise ValueError("state must be non-negative")
    return ((_MULTIPLIER * (int(num) & _UINT32)) & _UINT32) % (int(m) & _UINT32)


def runif(size: int, seed: int) -> list[float]:
    """Uniform draws on [0, 1) from the LGM generator started at ``seed``."""
    if size < 0:
        raise ValueError("size must be non-negative")
    if seed < 0:
        raise ValueError("seed must be non-negative")
    state = seed
    draws = []
    for _ in range(size):
        draws.append(state / _MODULUS)
        state = lgm_next(_MODULUS, state)
    return draws


def rbinom(size: int, n: int, p: float, seed: int) -> list[int]:
    """Binomial(n, p) draws, each the count of n uniforms at or below p."""
    if n < 0:
        raise ValueError("n must be non-negative")
    uniforms = runif(size * n, seed)
    return [
        sum(1 for u in uniforms[i * n:(i + 1) * n] if u <= p)
        for i in range(size)
    ]


def rexp(uniforms: Sequence[float], lam: float) -> list[float]:
    """Exponential draws with mean ``lam`` by inversion."""
    return [-lam * math.log(u) for u in uniforms]


def _require_even(length: int) -> None:
    if length % 2:
        raise ValueError("an even number of inputs is required")


def box_muller(uniforms: Sequence[float]) -> list[float]:
    """Standard normals from consecutive pairs of uniforms."""
    _require_even(len(uniforms))
    normals = []
    for u1, u2 in zip(uniforms[::2], uniforms[1::2]):
        radius = math.sqrt(-2 * math.log(u1))
        normals.append(radius * math.cos(2 * math.pi * u2))
        normals.append(radius * math.sin(2 * math.pi * u2))
    return normals


def box_muller_halton(base1: Sequence[float], base2: Sequence[float]) -> list[float]:
    """Standard normals from two low-discrepancy sequences of equal length."""
    if len(base1) != len(base2):
        raise ValueError("sequences must have the same length")
    _require_even(len(base1))
    normals = []
    for i, (a, b) in enumerate(zip(base1, base2)):
        trig = math.cos if i % 2 == 0 else math.sin
        normals.append(math.sqrt(-2 * math.log(a)) * trig(2 * math.pi * b))
    return normals


def polar_marsaglia(uniforms: Sequence[float]) -> list[float]:
    """Standard normals by the polar method.

    Overlapping neighbouring pairs of the first half of the uniforms are
    tried; accepted pairs yield two normals each. At most half as many
    normals as uniforms are returned.
    """
    limit = len(uniforms) // 2
    normals: list[float] = []
    for u1, u2 in zip(uniforms[:limit], uniforms[1:limit + 1]):
        v1 = 2 * u1 - 1
        v2 = 2 * u2 - 1
        w = v1 * v1 + v2 * v2
        if 0.0 < w <= 1.0:
            factor = math.sqrt(-2 * math.log(w) / w)
            normals.extend((v1 * factor, v2 * factor))
    return normals[:limit]


def bivariate_normal_x(z1: Sequence[float]) -> list[float]:
    """First component of a standard bivariate normal."""
    mu_x, sigma_x = 0.0, 1.0
    return [mu_x + sigma_x * z for z in z1]


def bivariate_normal_y(z1: Sequence[float], z2: Sequence[float], rho: float) -> list[float]:
    """Second component of a standard bivariate normal with correlation ``rho``."""
    if len(z1) != len(z2):
        raise ValueError("sequences must have the same length")
    mu_y, sigma_y = 0.0, 1.0
    spread = math.sqrt(1 - rho * rho)
    return [mu_y + sigma_y * rho * a + sigma_y * spread * b for a, b in zip(z1, z2)]


def wiener_process(t: float, size: int, seed: int) -> list[float]:
    """Wiener increments over time ``t``: scaled Box-Muller normals."""
    scale = math.sqrt(t)
    return [z * scale for z in box_muller(runif(size, seed))]


def halton_sequence(base: int, size: int) -> list[float]:
    """The first ``size`` points of the Halton sequence in ``base``, from index 1."""
    if base < 2:
        raise ValueError("base must be at least 2")
    if size <= 0:
        return []
    num_digits = int(1 + math.ceil(math.log(size) / math.log(base)))
    weights = [base ** -(k + 1) for k in range(num_digits)]
    sequence = []
    for index in range(1, size + 1):
        digits = []
        num = index
        while num > 0:
            num, digit = divmod(num, base)
            digits.append(digit)
        sequence.append(sum(d * w for d, w in zip(digits, weights)))
    return sequence