"""Reading the bank's ``KEY=value`` configuration file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import Union

CONFIG_FILE = "config.txt"

_STRING_MAX = 49

_INT_VALUE = re.compile(r"\s*([+-]?\d+)")
_STR_VALUE = re.compile(r"\s*(\S{1,%d})" % _STRING_MAX)

_INT_KEYS = {
    "LIMITE_RETIRO": "withdrawal_limit",
    "LIMITE_TRANSFERENCIA": "transfer_limit",
    "UMBRAL_RETIROS": "withdrawal_threshold",
    "UMBRAL_TRANSFERENCIAS": "transfer_threshold",
    "NUM_HILOS": "max_users",
}

_STR_KEYS = {
    "ARCHIVO_CUENTAS": "accounts_file",
    "ARCHIVO_LOG": "log_file",
}


@dataclass
class Config:
    """System settings; anything absent from the file stays zero or empty."""

    withdrawal_limit: int = 0
    transfer_limit: int = 0
    withdrawal_threshold: int = 0
    transfer_threshold: int = 0
    max_users: int = 0
    accounts_file: str = ""
    log_file: str = ""


def read_config(path: Union[str, PathLike] = CONFIG_FILE) -> Config:
    """Parse the configuration file at *path*.

    Lines starting with ``#`` and empty lines are skipped, as are unknown keys
    and values that do not parse. Raises ``OSError`` if the file cannot be read.
    """
    config = Config()
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            if line.startswith(("#", "\n")):
                continue
            key, sep, rest = line.partition("=")
            if not sep:
                continue
            if key in _INT_KEYS:
                match = _INT_VALUE.match(rest)
                if match:
                    setattr(config, _INT_KEYS[key], int(match.group(1)))
            elif key in _STR_KEYS:
                match = _STR_VALUE.match(rest)
                if match:
                    setattr(config, _STR_KEYS[key], match.group(1))
    return config