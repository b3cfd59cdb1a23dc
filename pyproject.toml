[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quantlab"
version = "0.1.0"
description = "Computational finance toolkit: random generators, option pricing, finite differences, short-rate models and mortgage-backed securities"
requires-python = ">=3.10"
keywords = [
    "finance",
    "option pricing",
    "monte carlo",
    "finite difference",
    "binomial tree",
    "vasicek",
    "cir",
    "g2++",
    "mbs",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = ["numpy"]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
quantlab-rates = "quantlab.rates_report:main"
quantlab-mbs = "quantlab.mbs_report:main"

[tool.hatch.build.targets.wheel]
packages = ["quantlab"]

[tool.pytest.ini_options]
addopts = "-ra"
