[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bancosim"
version = "0.1.0"
description = "A small simulated bank: account file, teller terminals, transaction logs and an anomaly monitor"
requires-python = ">=3.10"
dependencies = []
keywords = ["bank", "simulation", "accounts", "transactions", "monitor", "teaching"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bancosim-init-accounts = "bancosim.accounts:init_main"
bancosim-bank = "bancosim.bank:main"
bancosim-terminal = "bancosim.terminal:main"
bancosim-monitor = "bancosim.monitor:main"

[tool.hatch.build.targets.wheel]
packages = ["bancosim"]

[tool.pytest.ini_options]
addopts = "-ra"
