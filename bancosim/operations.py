"""Deposits, withdrawals and transfers against the accounts file."""

from __future__ import annotations

import threading
from os import PathLike
from typing import Union

from .accounts import Account, AccountStore
from .config import Config
from .logs import APPLICATION_LOG, TRANSACTION_LOG, log_event, log_transaction

DEPOSIT = "Depósito"
WITHDRAWAL = "Retiro"
TRANSFER_SENT = "Transferencia realizada"
TRANSFER_RECEIVED = "Transferencia recibida"
TRANSFER_FAILED = "Transferencia fallida"


class BankError(Exception):
    """An operation was refused."""


class InsufficientFunds(BankError):
    """The account does not hold enough money."""


class LimitExceeded(BankError):
    """The amount is above the configured limit."""


class AccountNotFound(BankError):
    """No account has the requested number."""


class Teller:
    """Carries out money operations, keeping file and logs in step."""

    def __init__(
        self,
        store: AccountStore,
        config: Config,
        transaction_log: Union[str, PathLike] = TRANSACTION_LOG,
        app_log: Union[str, PathLike] = APPLICATION_LOG,
    ):
        self.store = store
        self.config = config
        self.transaction_log = transaction_log
        self.app_log = app_log
        self._lock = threading.Lock()

    def _event(self, kind: str, number: int, description: str) -> None:
        log_event(self.app_log, kind, description, number)

    def _record(self, kind: str, account: Account, amount: float) -> None:
        log_transaction(self.transaction_log, kind, account.number, amount, account.balance)

    def deposit(self, account: Account, amount: float) -> float:
        """Add *amount* to *account*; return the new balance."""
        with self._lock:
            account.balance += amount
            account.transactions += 1
            self.store.update(account)
        self._record(DEPOSIT, account, amount)
        self._event(DEPOSIT, account.number, "Usuario ha realizado un depósito")
        return account.balance

    def withdraw(self, account: Account, amount: float) -> float:
        """Take *amount* from *account*; return the new balance."""
        with self._lock:
            if amount > account.balance:
                self._event(
                    WITHDRAWAL, account.number, "Retiro rechazado por fondos insuficientes"
                )
                raise InsufficientFunds("Fondos insuficientes.")
            if amount > self.config.withdrawal_limit:
                self._event(WITHDRAWAL, account.number, "Retiro rechazado por exceder limite")
                raise LimitExceeded(
                    f"El monto excede el limite para retiros ({self.config.withdrawal_limit})"
                )
            account.balance -= amount
            account.transactions += 1
            self.store.update(account)
            self._record(WITHDRAWAL, account, amount)
            self._event(WITHDRAWAL, account.number, "Usuario ha realizado un retiro")
            return account.balance

    def transfer(self, account: Account, destination: int, amount: float) -> float:
        """Move *amount* from *account* to account number *destination*.

        Returns the new balance of the sending account.
        """
        target = self.store.find(destination)
        if target is None:
            self._event(TRANSFER_FAILED, account.number, "Cuenta destino inexistente")
            raise AccountNotFound(f"No existe la cuenta {destination}")
        self._event("buscar_cuenta", destination, "Cuenta encontrada")

        with self._lock:
            if amount > account.balance:
                self._event(TRANSFER_FAILED, account.number, "Rechazada por fondos insuficientes")
                raise InsufficientFunds("Fondos insuficientes para la transferencia.")
            if amount > self.config.transfer_limit:
                self._event(TRANSFER_FAILED, account.number, "Rechazada tras exceder limite")
                raise LimitExceeded(
                    f"El monto excede el limite para transferencias ({self.config.transfer_limit})"
                )
            account.balance -= amount
            target.balance += amount
            self.store.update(account)
            self.store.update(target)
            self._record(TRANSFER_SENT, account, amount)
            self._record(TRANSFER_RECEIVED, target, amount)
            self._event(TRANSFER_SENT, account.number, "Transferencia realizada por usuario")
            self._event(TRANSFER_RECEIVED, target.number, "Transferencia recibida por usuario")
            return account.balance