"""Computational finance toolkit: random numbers, option pricing, finite differences, short-rate models and MBS."""

__version__ = "0.1.0"

__all__ = [
    "stats",
    "randgen",
    "loans",
    "options",
    "finite_difference",
    "fixed_income",
    "rates_report",
    "mbs",
    "mbs_report",
]