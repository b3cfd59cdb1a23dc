import math
import random

import pytest

from quantlab import options

S0, K, R, SIGMA, T = 100.0, 100.0, 0.05, 0.2, 1.0


def test_black_scholes_put_call_parity():
    call = options.call_black_scholes(R, SIGMA, T, S0, K)
    put = options.put_black_scholes(R, SIGMA, T, S0, K)
    assert call - put == pytest.approx(S0 - K * math.exp(-R * T), abs=1e-9)


def test_black_scholes_deep_in_the_money_call():
    call = options.call_black_scholes(R, SIGMA, T, S0, 10.0)
    assert call == pytest.approx(S0 - 10.0 * math.exp(-R * T), abs=1e-6)


def test_black_scholes_call_increases_with_spot():
    low = options.call_black_scholes(R, SIGMA, T, 90.0, K)
    high = options.call_black_scholes(R, SIGMA, T, 110.0, K)
    assert high > low > 0


def test_simulation_out_of_the_money_is_zero():
    payoffs = options.call_price_simulation([0.0, 0.1, -0.2], R, SIGMA, T, S0, 1e6)
    assert payoffs == [0.0, 0.0, 0.0]


def test_simulation_payoffs_monotone_in_wiener_value():
    payoffs = options.call_price_simulation([-1.0, 0.0, 1.0, 2.0], R, SIGMA, T, S0, K)
    assert len(payoffs) == 4
    assert payoffs == sorted(payoffs)
    assert payoffs[-1] > 0


def test_antithetic_close_to_black_scholes():
    bs = options.call_black_scholes(R, SIGMA, T, S0, K)
    mc = options.call_antithetic(12345, 10000, R, SIGMA, T, S0, K)
    assert mc == pytest.approx(bs, abs=0.6)


def test_antithetic_is_deterministic_for_seed():
    a = options.call_antithetic(777, 1000, R, SIGMA, T, S0, K)
    b = options.call_antithetic(777, 1000, R, SIGMA, T, S0, K)
    assert a == b


@pytest.mark.parametrize("method", ["a", "b", "c", "d"])
def test_binomial_call_converges_to_black_scholes(method):
    bs = options.call_black_scholes(R, SIGMA, T, S0, K)
    tree = options.call_european_binomial(method, S0, K, R, SIGMA, T, 400)
    assert tree == pytest.approx(bs, abs=0.1)


@pytest.mark.parametrize("method", ["a", "b", "c", "d"])
def test_binomial_put_converges_to_black_scholes(method):
    bs = options.put_black_scholes(R, SIGMA, T, S0, K)
    tree = options.put_european_binomial(method, S0, K, R, SIGMA, T, 400)
    assert tree == pytest.approx(bs, abs=0.1)


def test_binomial_method_a_put_call_parity():
    call = options.call_european_binomial("a", S0, K, R, SIGMA, T, 50)
    put = options.put_european_binomial("a", S0, K, R, SIGMA, T, 50)
    assert call - put == pytest.approx(S0 - K * math.exp(-R * T), abs=1e-8)


@pytest.mark.parametrize("method", ["a", "b", "c", "d"])
def test_american_put_at_least_european(method):
    american = options.put_american_binomial(method, S0, K, R, SIGMA, T, 100)
    european = options.put_european_binomial(method, S0, K, R, SIGMA, T, 100)
    assert american >= european - 1e-12


def test_american_put_deep_in_the_money_above_intrinsic_discounted():
    american = options.put_american_binomial("d", 50.0, K, R, SIGMA, T, 100)
    assert american >= (K - 50.0) * math.exp(-R * T / 100)


@pytest.mark.parametrize("method", ["a", "b"])
def test_trinomial_converges_to_black_scholes(method):
    bs = options.call_black_scholes(R, SIGMA, T, S0, K)
    tree = options.call_european_trinomial(method, S0, K, R, SIGMA, T, 300)
    assert tree == pytest.approx(bs, abs=0.1)


def test_trinomial_methods_agree():
    a = options.call_european_trinomial("a", S0, 95.0, R, SIGMA, T, 200)
    b = options.call_european_trinomial("b", S0, 95.0, R, SIGMA, T, 200)
    assert a == pytest.approx(b, abs=0.1)


@pytest.mark.parametrize(
    "pricer",
    [
        options.call_european_binomial,
        options.put_european_binomial,
        options.put_american_binomial,
        options.call_european_trinomial,
    ],
)
def test_unknown_method_rejected(pricer):
    with pytest.raises(ValueError):
        pricer("z", S0, K, R, SIGMA, T, 10)


def test_zero_steps_rejected():
    with pytest.raises(ValueError):
        options.call_european_binomial("a", S0, K, R, SIGMA, T, 0)


def test_lds_close_to_black_scholes():
    bs = options.call_black_scholes(R, SIGMA, T, S0, K)
    lds = options.call_european_lds(S0, K, R, SIGMA, T, 10000, 2, 7)
    assert lds == pytest.approx(bs, abs=0.5)


def test_lds_odd_count_rejected():
    with pytest.raises(ValueError):
        options.call_european_lds(S0, K, R, SIGMA, T, 11, 2, 7)


def test_lookback_call_without_volatility_or_rate():
    price = options.lookback_call(0.0, T, S0, 90.0, 0.0, 5, 10, 0.1, random.Random(3))
    assert price == pytest.approx(10.0)


def test_lookback_put_without_volatility_or_rate():
    price = options.lookback_put(0.0, T, S0, 110.0, 0.0, 5, 10, 0.1, random.Random(3))
    assert price == pytest.approx(10.0)


def test_lookback_call_decreases_with_strike():
    low = options.lookback_call(R, T, S0, 90.0, 0.3, 200, 20, 0.05, random.Random(1))
    high = options.lookback_call(R, T, S0, 110.0, 0.3, 200, 20, 0.05, random.Random(1))
    assert low >= high >= 0


def test_lookback_put_increases_with_strike():
    low = options.lookback_put(R, T, S0, 90.0, 0.3, 200, 20, 0.05, random.Random(1))
    high = options.lookback_put(R, T, S0, 110.0, 0.3, 200, 20, 0.05, random.Random(1))
    assert high >= low >= 0


def test_lookback_call_exceeds_plain_intrinsic_with_volatility():
    price = options.lookback_call(R, T, S0, K, 0.3, 300, 20, 0.05, random.Random(5))
    assert price > 0


def test_lookback_odd_steps_rejected():
    with pytest.raises(ValueError):
        options.lookback_call(R, T, S0, K, SIGMA, 10, 7, 0.1, random.Random(0))