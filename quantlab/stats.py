"""Descriptive statistics, a normal CDF approximation and CSV writers."""

from __future__ import annotations

import math
import os
from collections.abc import Iterable, Sequence

__all__ = [
    "mean",
    "stdev",
    "corr",
    "cov",
    "pnorm",
    "write_array_csv",
    "write_matrix_csv",
]

_PNORM_COEFFS = (
    0.0498673470,
    0.0211410061,
    0.0032776263,
    0.0000380036,
    0.0000488906,
    0.0000053830,
)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    if not values:
        raise ValueError("mean of an empty sequence")
    return sum(values) / len(values)


def stdev(values: Sequence[float]) -> float:
    """Sample standard deviation (Bessel's correction; a single value gives 0)."""
    centre = mean(values)
    n = len(values)
    variance = sum((v - centre) ** 2 for v in values)
    variance /= n - (0 if n == 1 else 1)
    return math.sqrt(variance)


def _check_pair(x: Sequence[float], y: Sequence[float]) -> int:
    if len(x) != len(y):
        raise ValueError("sequences must have the same length")
    if len(x) < 2:
        raise ValueError("at least two observations are required")
    return len(x)


def cov(x: Sequence[float], y: Sequence[float]) -> float:
    """Sample covariance of two equally long sequences."""
    n = _check_pair(x, y)
    mx, my = mean(x), mean(y)
    return sum((a - mx) * (b - my) for a, b in zip(x, y)) / (n - 1)


def corr(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation of two equally long sequences."""
    n = _check_pair(x, y)
    mx, my = mean(x), mean(y)
    num = sum((a - mx) * (b - my) for a, b in zip(x, y)) / (n - 1)
    sx = math.sqrt(sum((a - mx) ** 2 for a in x) / (n - 1))
    sy = math.sqrt(sum((b - my) ** 2 for b in y) / (n - 1))
    return num / (sy * sx)


def pnorm(x: float) -> float:
    """Standard normal CDF by a sixth-order polynomial approximation."""
    ax = abs(x)
    temp = 1.0 + sum(c * ax ** (k + 1) for k, c in enumerate(_PNORM_COEFFS))
    probability = 1.0 - 0.5 * temp ** -16
    return probability if x >= 0 else 1.0 - probability


def write_array_csv(values: Iterable[float], path: str | os.PathLike) -> None:
    """Write one value per line, each followed by a comma."""
    with open(path, "w", encoding="utf-8") as handle:
        for value in values:
            handle.write(f"{value:g},\n")


def write_matrix_csv(matrix: Sequence[Sequence[float]], path: str | os.PathLike) -> None:
    """Write a matrix stored as a sequence of columns, one row per line.

    Every entry is followed by a comma.
    """
    with open(path, "w", encoding="utf-8") as handle:
        for row in zip(*matrix, strict=True):
            handle.write("".join(f"{value:g}," for value in row))
            handle.write("\n")