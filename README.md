# quantlab

A computational finance toolkit built on numpy.

## Modules

- `quantlab.stats`: `mean`, `stdev` (sample, with Bessel's correction), `cov`,
  `corr`, a polynomial approximation of the standard normal CDF (`pnorm`), and
  two CSV writers: `write_array_csv` (one value per line) and
  `write_matrix_csv` (a matrix given as a sequence of columns).
- `quantlab.randgen`: a Lewis–Goodman–Miller uniform generator (`lgm_next`,
  `runif`), and from it `rbinom`, `rexp`, `box_muller`, `polar_marsaglia`,
  `bivariate_normal_x`, `bivariate_normal_y` and `wiener_process`; also
  `halton_sequence` and `box_muller_halton` for low-discrepancy normals.
- `quantlab.loans`: `apr`, `monthly_payment`, and the two terms of the
  outstanding-loan function, `loan_a` and `loan_b`.
- `quantlab.options`: Black–Scholes prices (`call_black_scholes`,
  `put_black_scholes`), Monte Carlo calls (`call_price_simulation`,
  `call_antithetic`), binomial trees with four parameterisations `"a"` to `"d"`
  (`call_european_binomial`, `put_european_binomial`,
  `put_american_binomial`), trinomial trees in prices (`"a"`) or log prices
  (`"b"`) (`call_european_trinomial`), a quasi Monte Carlo call on Halton
  sequences (`call_european_lds`), and fixed-strike lookback options
  (`lookback_call`, `lookback_put`, which take an optional `random.Random`).
- `quantlab.finite_difference`: scheme weights (`efd_coefficients`,
  `ifd_coefficients`, `cnfd_coefficients`, each returning `Coefficients`),
  European put solvers on a log-price grid (`efd_european_put`,
  `ifd_european_put`, `cnfd_european_put`, each returning a `PutEstimate` with
  the Black–Scholes value and the `error` against it), and
  `american_option_price` for American calls and puts under any `Scheme`
  (`EFD`, `IFD`, `CNFD`) and `OptionKind` (`CALL`, `PUT`). The solvers use
  fixed market data: volatility 0.2, strike 10, rate 0.04, maturity 0.5 years,
  time step 0.002.
- `quantlab.fixed_income`: Vasicek, CIR and G2++ path simulation
  (`vasicek_paths`, `cir_paths` returning `RatePaths`; `g2pp_paths` returning
  `G2PPPaths`), a Monte Carlo zero-coupon bond (`zero_coupon_mc`), the
  closed-form Vasicek bond price (`vasicek_bond_price`), the CIR affine
  coefficients (`cir_affine_coefficients`) and a closed-form CIR bond call
  (`cir_explicit_call`). Simulations take an optional `numpy.random.Generator`.
- `quantlab.mbs`: the Numerix prepayment model (`burnout`,
  `refinancing_incentive`, `seasoning`, `seasonality`, `cpr`), monthly CIR
  rate paths (`cir_rate_paths`) and the pass-through price with an
  option-adjusted spread (`numerix_price`). Both take a `seed`, 12345678 by
  default, so repeated calls give the same price.
- `quantlab.rates_report` and `quantlab.mbs_report`: the functions behind the
  two commands below; `mbs_report.duration_convexity` gives option-adjusted
  duration and convexity by shifting the spread.

## Installation

```
pip install .
```

## Examples

```python
from quantlab.options import call_black_scholes, put_european_binomial

call_black_scholes(0.05, 0.2, 0.5, 10.0, 10.0)
put_european_binomial("d", 10.0, 10.0, 0.05, 0.2, 0.5, 200)
```

```python
from quantlab.finite_difference import american_option_price, Scheme, OptionKind

american_option_price(10.0, 0.5, Scheme.CNFD, OptionKind.PUT)
```

```python
from quantlab.fixed_income import vasicek_bond_price

vasicek_bond_price(1000.0, 0.05, 0.82, 0.18, 0.05, 0.5, 0.0)
```

## Command-line reports

```
quantlab-rates [--seed N]
```

prints Monte Carlo prices of a zero-coupon bond, a coupon bond and European
calls on them under Vasicek, a European call under CIR by simulation and by
the closed-form formula, and a European put under G2++. Without `--seed` every
run draws fresh random numbers. The nested simulations make this report slow.

```
quantlab-mbs [--kappa K] [--rbar R] [--sigma S] [--oas X] [--sim-num N]
```

prices a 30-year mortgage-backed security (WAC 8%, pool 100,000) with the
Numerix prepayment model, then prices it at the option-adjusted spread and
prints its duration and convexity against a reference price of 110,000.
`--kappa`, `--rbar` and `--sigma` apply to the first price only.

## Limits

- `cir_explicit_call` uses fixed non-central chi-squared probabilities
  (0.2893 and 0.2864) set for the reference parameters; it does not compute
  them, so it is only right for that parameter set.
- Lookback payoffs are averaged without discounting.
- There is no calibration to market data and no storage of results; output is
  printed or returned.

## Running the tests

```
pip install .[test]
pytest
```