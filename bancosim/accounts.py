"""Bank accounts and the fixed-size binary file that stores them."""

from __future__ import annotations

import argparse
import struct
import sys
import threading
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

ACCOUNTS_FILE = "cuentas.dat"

HOLDER_SIZE = 100
_RECORD = struct.Struct(f"<i{HOLDER_SIZE}sfii")
RECORD_SIZE = _RECORD.size


@dataclass
class Account:
    """One bank account as held in the accounts file."""

    number: int
    holder: str
    balance: float
    pin: int
    transactions: int = 0

    def to_bytes(self) -> bytes:
        """Encode as one fixed-size record; the holder is cut to fit."""
        name = self.holder.encode("utf-8")[: HOLDER_SIZE - 1]
        name = name.decode("utf-8", errors="ignore").encode("utf-8")
        return _RECORD.pack(self.number, name, self.balance, self.pin, self.transactions)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Account":
        """Decode one record of exactly ``RECORD_SIZE`` bytes."""
        if len(data) != RECORD_SIZE:
            raise ValueError(f"account record must be {RECORD_SIZE} bytes, got {len(data)}")
        number, name, balance, pin, transactions = _RECORD.unpack(data)
        holder = name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(number, holder, balance, pin, transactions)


INITIAL_ACCOUNTS = (
    Account(1000, "David Sanez", 5000.00, 1234),
    Account(1001, "Miguel Ramirez", 5000.00, 9876),
    Account(1002, "Lucía Ramírez", 5000.00, 4567),
    Account(1003, "Valeria Torres", 5000.00, 8776),
    Account(1004, "Julián Navarro", 5000.00, 2233),
    Account(1005, "Camila Duarte", 5000.00, 2233),
)


def _records(handle: BinaryIO) -> Iterator[Account]:
    while True:
        chunk = handle.read(RECORD_SIZE)
        if len(chunk) < RECORD_SIZE:
            return
        yield Account.from_bytes(chunk)


class AccountStore:
    """Access to an accounts file, serialised by a lock."""

    def __init__(self, path: Union[str, PathLike] = ACCOUNTS_FILE):
        self.path = Path(path)
        self._lock = threading.RLock()

    def accounts(self) -> list[Account]:
        """All complete records in file order. Raises ``OSError`` if unreadable."""
        with self._lock, self.path.open("rb") as handle:
            return list(_records(handle))

    def find(self, number: int) -> Optional[Account]:
        """The account with this number, or ``None``."""
        return next((acc for acc in self.accounts() if acc.number == number), None)

    def authenticate(self, number: int, pin: int) -> Optional[Account]:
        """The account matching both number and PIN, or ``None``."""
        return next(
            (acc for acc in self.accounts() if acc.number == number and acc.pin == pin),
            None,
        )

    def update(self, account: Account) -> bool:
        """Overwrite the stored record with the same number; report if one was found."""
        with self._lock, self.path.open("r+b") as handle:
            for position, stored in enumerate(_records(handle)):
                if stored.number == account.number:
                    handle.seek(position * RECORD_SIZE)
                    handle.write(account.to_bytes())
                    handle.flush()
                    return True
        return False


def create_initial_accounts(path: Union[str, PathLike] = ACCOUNTS_FILE) -> list[Account]:
    """Write the starting set of accounts to *path*, replacing any content."""
    accounts = list(INITIAL_ACCOUNTS)
    with open(path, "wb") as handle:
        handle.write(b"".join(acc.to_bytes() for acc in accounts))
    return accounts


def init_main(argv=None) -> int:
    """Command entry point: create the initial accounts file."""
    parser = argparse.ArgumentParser(description="Create the initial accounts file.")
    parser.add_argument("path", nargs="?", default=ACCOUNTS_FILE)
    args = parser.parse_args(argv)
    try:
        create_initial_accounts(args.path)
    except OSError as exc:
        print(f"Error al crear el archivo de cuentas iniciales: {exc}", file=sys.stderr)
        return 1
    print("Archivo de cuentas creado con las cuentas inciales")
    return 0