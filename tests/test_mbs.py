import math

import numpy as np
import pytest

from quantlab.mbs import (
    burnout,
    cir_rate_paths,
    cpr,
    numerix_price,
    refinancing_incentive,
    seasonality,
    seasoning,
)


def test_burnout_full_pool_is_one():
    assert burnout(100000, 100000) == pytest.approx(1.0)


def test_burnout_empty_pool_is_floor():
    assert burnout(100000, 0) == pytest.approx(0.3)


def test_refinancing_incentive_at_zero_argument():
    assert refinancing_incentive(0.08 + 8.57 / 430, 0.08) == pytest.approx(0.28)


def test_refinancing_incentive_increases_with_spread():
    assert refinancing_incentive(0.09, 0.05) > refinancing_incentive(0.06, 0.05)


def test_seasoning_capped_at_one():
    assert seasoning(30) == pytest.approx(1.0)
    assert seasoning(200) == pytest.approx(1.0)


def test_seasoning_grows_with_age():
    assert seasoning(5) < seasoning(10) < seasoning(29)


@pytest.mark.parametrize(
    "month, expected",
    [(0, 0.94), (1, 0.76), (2, 0.74), (7, 1.10), (10, 1.23), (11, 0.98)],
)
def test_seasonality_table(month, expected):
    assert seasonality(month) == pytest.approx(expected)


@pytest.mark.parametrize("month", [-1, 12, 40])
def test_seasonality_rejects_bad_month(month):
    with pytest.raises(ValueError):
        seasonality(month)


def test_cpr_zero_for_new_loan():
    assert cpr(100000, 100000, 0, 0.08, 0.07, 3) == pytest.approx(0.0)


def test_cpr_is_a_rate():
    value = cpr(100000, 80000, 40, 0.08, 0.06, 10)
    assert 0.0 < value < 1.0


def test_cir_paths_shape_and_start():
    rates = cir_rate_paths(0.078, 0.1, 0.6, 0.08, 25, sim_num=7, seed=3)
    assert rates.shape == (7, 25)
    assert np.all(rates[:, 0] == 0.078)


def test_cir_paths_reproducible():
    a = cir_rate_paths(0.05, 0.1, 0.6, 0.08, 30, sim_num=5, seed=11)
    b = cir_rate_paths(0.05, 0.1, 0.6, 0.08, 30, sim_num=5, seed=11)
    assert np.array_equal(a, b)


def test_cir_paths_without_volatility_stay_at_mean():
    rates = cir_rate_paths(0.08, 0.0, 0.6, 0.08, 50, sim_num=4)
    assert np.allclose(rates, 0.08)


def test_cir_paths_reject_bad_grid():
    with pytest.raises(ValueError):
        cir_rate_paths(0.05, 0.1, 0.6, 0.08, 0, sim_num=5)
    with pytest.raises(ValueError):
        cir_rate_paths(0.05, 0.1, 0.6, 0.08, 10, sim_num=0)


def test_numerix_price_reproducible():
    args = (0.08, 100000, 0.078, 0.6, 0.08, 0.1, 5.0)
    first = numerix_price(*args, sim_num=30)
    second = numerix_price(*args, sim_num=30)
    assert math.isfinite(first)
    assert 0.0 < first < 2 * 100000
    assert first == pytest.approx(second, rel=0, abs=0)


def test_numerix_price_falls_with_spread():
    args = (0.08, 100000, 0.078, 0.6, 0.08, 0.1, 5.0)
    low = numerix_price(*args, oas=-0.01, sim_num=30)
    high = numerix_price(*args, oas=0.01, sim_num=30)
    assert high < low


def test_numerix_price_deterministic_rates_independent_of_sims():
    args = (0.08, 100000, 0.08, 0.6, 0.08, 0.0, 3.0)
    assert numerix_price(*args, sim_num=3) == pytest.approx(numerix_price(*args, sim_num=17))


def test_numerix_price_positive_and_bounded():
    price = numerix_price(0.08, 100000, 0.078, 0.6, 0.08, 0.1, 5.0, sim_num=30)
    assert 0.0 < price < 2 * 100000


@pytest.mark.parametrize("years", [0.0, -1.0])
def test_numerix_price_rejects_bad_term(years):
    with pytest.raises(ValueError):
        numerix_price(0.08, 100000, 0.078, 0.6, 0.08, 0.1, years, sim_num=5)


def test_numerix_price_rejects_zero_coupon_rate():
    with pytest.raises(ValueError):
        numerix_price(0.0, 100000, 0.078, 0.6, 0.08, 0.1, 5.0, sim_num=5)