"""The bank front desk: opens user terminals up to the configured limit."""

from __future__ import annotations

import argparse
import shlex
import subprocess
import sys
import threading
from os import PathLike
from typing import Optional, Sequence, Union

from .config import CONFIG_FILE, Config, read_config
from .logs import APPLICATION_LOG, log_event

DEFAULT_TERMINAL = ("x-terminal-emulator", "-e", "./usuario")
DEFAULT_MONITOR = "./monitor"

BANNER = "=== SecureBank ==="


class Bank:
    """Tracks open user terminals and refuses new ones beyond the limit."""

    def __init__(
        self,
        config: Config,
        terminal_command: Sequence[str] = DEFAULT_TERMINAL,
        app_log: Union[str, PathLike] = APPLICATION_LOG,
    ):
        if config.max_users <= 0:
            raise ValueError(f"NUM_HILOS debe ser positivo (Valor leído: {config.max_users})")
        self.config = config
        self.terminal_command = list(terminal_command)
        self.app_log = app_log
        self.threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._active = 0
        self._processes: set[subprocess.Popen] = set()

    def active_users(self) -> int:
        """Number of terminals currently open."""
        with self._lock:
            return self._active

    def open_terminal(self) -> Optional[threading.Thread]:
        """Start a user terminal in the background.

        Returns the thread that waits on it, or ``None`` if the limit is reached.
        """
        limit = self.config.max_users
        with self._lock:
            if self._active >= limit:
                reached = True
            else:
                reached = False
                self._active += 1
                active = self._active
        if reached:
            print(f"Se ha alcanzado el numero de usuarios maximo ({limit})")
            log_event(self.app_log, "Main", "Numero de usuarios max. alcanzado")
            return None

        print(f"Abriendo terminal. Usuarios activos: {active}/{limit}")
        log_event(self.app_log, "Main", "Abriendo terminal")
        thread = threading.Thread(target=self._run_terminal, daemon=True)
        self.threads.append(thread)
        thread.start()
        return thread

    def _run_terminal(self) -> None:
        try:
            process = subprocess.Popen(self.terminal_command)
        except OSError as exc:
            print(f"Error al crear hijo: {exc}", file=sys.stderr)
            log_event(self.app_log, "Main", "Error al abrir terminal")
        else:
            with self._lock:
                self._processes.add(process)
            process.wait()
            with self._lock:
                self._processes.discard(process)
        finally:
            with self._lock:
                self._active -= 1

    def _close_all(self) -> None:
        with self._lock:
            processes = list(self._processes)
        for process in processes:
            process.terminate()


def _start_monitor(command: str, app_log) -> Optional[subprocess.Popen]:
    if not command:
        return None
    try:
        return subprocess.Popen(shlex.split(command))
    except OSError as exc:
        print(f"Error al iniciar el monitor: {exc}", file=sys.stderr)
        log_event(app_log, "Main", "Error al iniciar el monitor")
        return None


def main(argv=None) -> int:
    """Command entry point: the bank's main menu."""
    parser = argparse.ArgumentParser(description="Bank main menu.")
    parser.add_argument("--config", default=CONFIG_FILE)
    parser.add_argument("--terminal", default=shlex.join(DEFAULT_TERMINAL))
    parser.add_argument("--monitor", default=DEFAULT_MONITOR, help="empty to run without monitor")
    parser.add_argument("--app-log", default=APPLICATION_LOG)
    args = parser.parse_args(argv)

    print("=== Banco inciado ===")
    log_event(args.app_log, "Main", "Banco iniciado")
    print(BANNER)

    try:
        config = read_config(args.config)
    except OSError as exc:
        print(f"Error al abrir {args.config}: {exc}", file=sys.stderr)
        return 1

    try:
        bank = Bank(config, shlex.split(args.terminal), args.app_log)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        log_event(args.app_log, "Main", "Error num hilos debe ser positivo")
        return 1

    monitor = _start_monitor(args.monitor, args.app_log)

    while True:
        print(f"Actualmente hay {bank.active_users()}/{config.max_users} usuarios abiertos.")
        try:
            answer = input("1.Acceder al sistema\n2.Cerrar\n").strip()
        except (EOFError, KeyboardInterrupt):
            answer = "2"
        if answer == "1":
            bank.open_terminal()
        elif answer == "2":
            break
        else:
            print("Introduzca un valor valido.")
            log_event(args.app_log, "Main", "Error de usuario opcion del menu")

    print("Cerrando todos los terminales....")
    log_event(args.app_log, "Main", "Cerrando terminales")
    bank._close_all()
    if monitor is not None:
        monitor.terminate()
        monitor.wait()
    print("Saliendo.......")
    log_event(args.app_log, "Main", "Salida del sistema")
    return 0