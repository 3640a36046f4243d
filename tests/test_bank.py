import io
import sys

import pytest

from bancosim.bank import Bank, main
from bancosim.config import Config

SLEEP_COMMAND = [sys.executable, "-c", "import time; time.sleep(1)"]


def test_rejects_non_positive_user_limit(tmp_path):
    with pytest.raises(ValueError):
        Bank(Config(max_users=0), SLEEP_COMMAND, tmp_path / "a.log")


def test_limit_is_enforced(tmp_path):
    log = tmp_path / "a.log"
    bank = Bank(Config(max_users=1), SLEEP_COMMAND, log)
    first = bank.open_terminal()
    assert bank.active_users() == 1
    assert bank.open_terminal() is None
    assert "Numero de usuarios max. alcanzado" in log.read_text(encoding="utf-8")
    first.join(timeout=10)
    assert bank.active_users() == 0


def test_terminal_closing_frees_slot(tmp_path):
    bank = Bank(Config(max_users=1), [sys.executable, "-c", "pass"], tmp_path / "a.log")
    bank.open_terminal().join(timeout=10)
    assert bank.active_users() == 0
    second = bank.open_terminal()
    second.join(timeout=10)
    assert len(bank.threads) == 2


def test_failed_start_is_logged(tmp_path):
    log = tmp_path / "a.log"
    bank = Bank(Config(max_users=2), [str(tmp_path / "no-such-program")], log)
    bank.open_terminal().join(timeout=10)
    assert bank.active_users() == 0
    assert "Error al abrir terminal" in log.read_text(encoding="utf-8")


def _config(tmp_path, users):
    path = tmp_path / "config.txt"
    path.write_text(f"NUM_HILOS={users}\n", encoding="utf-8")
    return path


def test_main_close(tmp_path, monkeypatch):
    log = tmp_path / "a.log"
    monkeypatch.setattr("sys.stdin", io.StringIO("7\n2\n"))
    result = main([
        "--config", str(_config(tmp_path, 2)),
        "--monitor", "",
        "--app-log", str(log),
    ])
    assert result == 0
    text = log.read_text(encoding="utf-8")
    assert "Banco iniciado" in text
    assert "Error de usuario opcion del menu" in text
    assert "Salida del sistema" in text


def test_main_rejects_zero_users(tmp_path):
    log = tmp_path / "a.log"
    result = main(["--config", str(_config(tmp_path, 0)), "--monitor", "", "--app-log", str(log)])
    assert result == 1
    assert "Error num hilos debe ser positivo" in log.read_text(encoding="utf-8")


def test_main_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "nope.txt"), "--app-log", str(tmp_path / "a.log")]) == 1