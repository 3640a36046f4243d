"""Interactive user terminal: log in, then operate on one's own account."""

from __future__ import annotations

import argparse
import math
import sys
from os import PathLike
from typing import Callable, Optional, Union

from .accounts import ACCOUNTS_FILE, Account, AccountStore
from .config import CONFIG_FILE, read_config
from .logs import APPLICATION_LOG, TRANSACTION_LOG, log_event
from .operations import BankError, Teller

Ask = Callable[[str], str]

MAX_ATTEMPTS = 3
INVALID_VALUE = "Introduzca un valor valido."

BANNER = "=== MENU USUARIO ==="

SESSION_MENU = (
    "¿Qué quieres hacer en tu cuenta?\n"
    "1. Depositar dinero \n"
    "2. Retirar dinero \n"
    "3. Hacer transferencia \n"
    "4. Consultar saldo \n"
    "5. Salir \n"
)

START_MENU = "1. Iniciar sesion\n2. Salir\n"


def _read_int(ask: Ask, prompt: str) -> Optional[int]:
    try:
        return int(ask(prompt).strip())
    except ValueError:
        return None


def _read_amount(ask: Ask, prompt: str) -> Optional[float]:
    try:
        value = float(ask(prompt).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def login(
    store: AccountStore, ask: Ask, app_log: Union[str, PathLike] = APPLICATION_LOG
) -> Optional[Account]:
    """Ask for account number and PIN, allowing three attempts.

    Returns the authenticated account, or ``None`` after too many failures.
    """
    number = 0
    for remaining in range(MAX_ATTEMPTS - 1, -1, -1):
        entered = _read_int(ask, "Ingrese el número de cuenta: \n")
        pin = _read_int(ask, "Ingrese el PIN de la cuenta:\n")
        if entered is not None:
            number = entered

        account = None
        if entered is not None and pin is not None:
            try:
                account = store.authenticate(entered, pin)
            except OSError as exc:
                print(f"Error al abrir el archivo cuentas.dat: {exc}", file=sys.stderr)
                log_event(
                    app_log, "busqueda_cuenta_log", "Error al abrir el archivo cuentas.dat", number
                )

        if account is not None:
            log_event(app_log, "buscar_cuenta_log", "Cuenta encontrada", number)
            print("Cuenta encontrada. ¡Bienvenido!")
            log_event(app_log, "Login", "Login exitoso", number)
            return account

        print(f"La cuenta no fue encontrada. Intentos restantes: {remaining}")
        log_event(app_log, "Login", "Cuenta no encontrada", number)

    print("Demasiados intentos. Vuelve más tarde.")
    log_event(app_log, "Login", "Demasiados intentos de login", number)
    return None


def _deposit(teller: Teller, account: Account, ask: Ask) -> None:
    amount = _read_amount(ask, "¿Cuánto dinero quiere depositar?\n")
    if amount is None:
        print(INVALID_VALUE)
        return
    balance = teller.deposit(account, amount)
    print(f"Depósito realizado. Nuevo saldo: {balance:.2f}")


def _withdraw(teller: Teller, account: Account, ask: Ask) -> None:
    limit = teller.config.withdrawal_limit
    amount = _read_amount(
        ask,
        "¿Cuánto dinero quiere retirar?\n"
        f"Solo puede retirar un monto maximo de: ({limit})\n",
    )
    if amount is None:
        print(INVALID_VALUE)
        return
    balance = teller.withdraw(account, amount)
    print(f"Retiro realizado. Nuevo saldo: {balance:.2f}")


def _transfer(teller: Teller, account: Account, ask: Ask) -> None:
    destination = _read_int(ask, "Introduzca la cuenta destino: ")
    amount = _read_amount(ask, "Ingrese la cantidad a transferir: ")
    if destination is None or amount is None:
        print(INVALID_VALUE)
        return
    balance = teller.transfer(account, destination, amount)
    print(f"Transferencia realizada. Nuevo saldo: {balance:.2f}")


def _show_balance(account: Account) -> None:
    print(f"Titular: {account.holder}")
    print(f"Número de cuenta: {account.number}")
    print(f"Saldo actual: {account.balance:.2f}")
    print(f"Transacciones realizadas: {account.transactions}")


def run_session(teller: Teller, account: Account, ask: Ask) -> None:
    """Run the account menu for *account* until the user chooses to leave."""
    actions = {1: _deposit, 2: _withdraw, 3: _transfer}
    while True:
        print(BANNER)
        choice = _read_int(ask, SESSION_MENU)
        if choice == 5:
            print("Saliendo.......")
            return
        if choice == 4:
            _show_balance(account)
        elif choice in actions:
            try:
                actions[choice](teller, account, ask)
            except BankError as exc:
                print(exc)
            except OSError as exc:
                print(f"Error al acceder a cuentas.dat: {exc}", file=sys.stderr)
        else:
            print("Introduzca una opción válida por favor")


def _start(store: AccountStore, ask: Ask, app_log) -> Optional[Account]:
    while True:
        choice = _read_int(ask, START_MENU)
        if choice == 1:
            account = login(store, ask, app_log)
            if account is None:
                print("Cerrando aplicacion.....")
            return account
        if choice == 2:
            return None
        print(INVALID_VALUE)


def main(argv=None) -> int:
    """Command entry point: an interactive session for one account holder."""
    parser = argparse.ArgumentParser(description="Bank user terminal.")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument("--accounts", default=ACCOUNTS_FILE)
    parser.add_argument("--transaction-log", default=TRANSACTION_LOG)
    parser.add_argument("--app-log", default=APPLICATION_LOG)
    args = parser.parse_args(argv)

    try:
        config = read_config(args.config)
    except OSError as exc:
        print(f"Error al abrir {args.config}: {exc}", file=sys.stderr)
        return 1

    store = AccountStore(args.accounts)
    teller = Teller(store, config, args.transaction_log, args.app_log)

    print(BANNER)
    try:
        account = _start(store, input, args.app_log)
        if account is None:
            return 1
        run_session(teller, account, input)
    except (EOFError, KeyboardInterrupt):
        print()
        return 1
    return 0