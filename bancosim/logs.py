"""Writing the transaction log and the general application log."""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from os import PathLike
from typing import Optional, Union

TRANSACTION_LOG = "transacciones.log"
APPLICATION_LOG = "application.log"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_lock = threading.Lock()


def _stamp(when: Optional[datetime]) -> str:
    return (when or datetime.now()).strftime(TIMESTAMP_FORMAT)


def format_transaction(kind, account_number, amount, final_balance, when=None) -> str:
    """One transaction-log line, without the trailing newline."""
    return (
        f"[{_stamp(when)}] Cuenta: {account_number:d} | Operación: {kind} "
        f"| Monto: {amount:.2f} | Saldo final: {final_balance:.2f}"
    )


def format_event(kind, description, account_number=None, label="Operación", when=None) -> str:
    """One application-log line; the account part is left out when not given."""
    if account_number is None:
        return f"[{_stamp(when)}] | {label}: {kind} | Descripcion: {description}"
    return f"[{_stamp(when)}] Cuenta: {account_number:d} | {label}: {kind} | Descripcion: {description}"


def _append(path: Union[str, PathLike], line: str) -> bool:
    with _lock:
        try:
            with open(path, "a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError as exc:
            print(f"Error al abrir {path}: {exc}", file=sys.stderr)
            return False
    return True


def log_transaction(path, kind, account_number, amount, final_balance) -> bool:
    """Append a transaction line to *path*; report whether it was written."""
    return _append(path, format_transaction(kind, account_number, amount, final_balance))


def log_event(path, kind, description, account_number=None, label="Operación") -> bool:
    """Append an application event to *path*; report whether it was written."""
    return _append(path, format_event(kind, description, account_number, label))