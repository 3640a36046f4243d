"""Watching the transaction log for suspicious runs of operations."""

from __future__ import annotations

import argparse
import re
import sys
import time
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .config import CONFIG_FILE, Config, read_config
from .logs import APPLICATION_LOG, TRANSACTION_LOG, log_event

MAX_ALERTED = 1000
TRANSFER_SENT = "Transferencia realizada"
WITHDRAWAL = "Retiro"

_FLOAT = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LINE = re.compile(
    r"\[([^\]]+)\]\s*Cuenta:\s*([+-]?\d+)\s*\|\s*Operación:\s*([^|]+)\|"
    rf"\s*Monto:\s*({_FLOAT})\s*\|\s*Saldo final:\s*({_FLOAT})"
)


@dataclass(frozen=True)
class TransactionRecord:
    """One parsed line of the transaction log."""

    timestamp: str
    account: int
    operation: str
    amount: float
    final_balance: float


def parse_transaction_line(line: str) -> Optional[TransactionRecord]:
    """Parse one transaction-log line, or return ``None`` if it does not fit."""
    match = _LINE.match(line)
    if not match:
        return None
    stamp, account, operation, amount, balance = match.groups()
    return TransactionRecord(stamp, int(account), operation.strip(), float(amount), float(balance))


@dataclass
class _Window:
    accounts: list = field(default_factory=lambda: [-1, -1, -1])
    operations: list = field(default_factory=lambda: ["", "", ""])

    def push(self, record: TransactionRecord) -> None:
        self.accounts = self.accounts[1:] + [record.account]
        self.operations = self.operations[1:] + [record.operation]


class AnomalyMonitor:
    """Detects repeated withdrawals and transfers by the same account.

    Counters and the set of alerted accounts persist between scans; each
    account raises at most one alert.
    """

    def __init__(self, config: Config):
        self.config = config
        self.alerted: set[int] = set()
        self._withdrawals = 1
        self._transfers = 1
        self._transfer_gap = 0

    def _register(self, account: int) -> None:
        if len(self.alerted) < MAX_ALERTED:
            self.alerted.add(account)

    def _events(self, lines: Iterable[str]) -> Iterator[tuple[str, str]]:
        window = _Window()
        for line in lines:
            record = parse_transaction_line(line)
            if record is None:
                continue
            window.push(record)
            (acc2, acc1, current), (op2, op1, op) = window.accounts, window.operations

            if op2 == TRANSFER_SENT and current == acc2 and op == TRANSFER_SENT:
                self._transfers += 1
                self._transfer_gap = 0
            else:
                if self._transfer_gap == 1:
                    self._transfers = 1
                self._transfer_gap += 1

            threshold = self.config.transfer_threshold
            if self._transfers == threshold and current not in self.alerted:
                self._register(current)
                self._transfers = 1
                yield (
                    f"🚨 ALERTA: Cuenta {current} ha realizado {threshold} transacciones seguidas",
                    "Alerta de anomalia transferencia",
                )

            if op == WITHDRAWAL and current == acc1 and op1 == WITHDRAWAL:
                self._withdrawals += 1
            else:
                self._withdrawals = 1

            threshold = self.config.withdrawal_threshold
            if self._withdrawals == threshold and current not in self.alerted:
                self._register(current)
                self._withdrawals = 1
                yield (
                    f"🚨 ALERTA: Cuenta {current} ha realizado {threshold} retiros seguidas",
                    "Alerta de anomalia retiro",
                )

    def scan(self, lines: Iterable[str]) -> list[str]:
        """Read a full pass of log lines and return the alert messages raised."""
        return [message for message, _ in self._events(lines)]


def main(argv=None) -> int:
    """Command entry point: watch the transaction log and report anomalies."""
    parser = argparse.ArgumentParser(description="Watch the transaction log for anomalies.")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument("--log", default=TRANSACTION_LOG)
    parser.add_argument("--app-log", default=APPLICATION_LOG)
    parser.add_argument("--interval", type=float, default=4.0)
    parser.add_argument("--once", action="store_true", help="scan a single time and stop")
    args = parser.parse_args(argv)

    try:
        config = read_config(args.config)
    except OSError as exc:
        print(f"Error al abrir {args.config}: {exc}", file=sys.stderr)
        return 1

    monitor = AnomalyMonitor(config)
    print("🔍 Monitor activo. Escuchando anomalías por retiros y tranferencias reiteradas...")
    log_event(args.app_log, "Monitor", "Activo, escuchando", label="Tipo")

    while True:
        try:
            with open(args.log, encoding="utf-8", errors="replace") as handle:
                lines = handle.readlines()
        except OSError as exc:
            print(f"No se pudo abrir el fichero de transacciones.log: {exc}", file=sys.stderr)
            if args.once:
                return 1
            time.sleep(2)
            continue

        for message, description in monitor._events(lines):
            print(message, flush=True)
            log_event(args.app_log, "Monitor", description, label="Tipo")

        if args.once:
            return 0
        time.sleep(args.interval)