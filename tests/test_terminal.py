import io

import pytest

from bancosim.accounts import INITIAL_ACCOUNTS, AccountStore, create_initial_accounts
from bancosim.config import Config
from bancosim.operations import Teller
from bancosim.terminal import login, main, run_session


def make_ask(*answers):
    remaining = iter(answers)
    return lambda prompt: next(remaining)


@pytest.fixture
def store(tmp_path):
    path = tmp_path / "cuentas.dat"
    create_initial_accounts(path)
    return AccountStore(path)


@pytest.fixture
def app_log(tmp_path):
    return tmp_path / "application.log"


@pytest.fixture
def teller(store, tmp_path, app_log):
    config = Config(withdrawal_limit=1000, transfer_limit=2000, max_users=3)
    return Teller(store, config, tmp_path / "transacciones.log", app_log)


def test_login_success(store, app_log):
    account = login(store, make_ask("1000", "1234"), app_log)
    assert account.number == 1000
    assert account.holder == INITIAL_ACCOUNTS[0].holder
    assert "Login exitoso" in app_log.read_text(encoding="utf-8")


def test_login_fails_after_three_attempts(store, app_log):
    ask = make_ask("1000", "1", "1000", "2", "1000", "3")
    assert login(store, ask, app_log) is None
    text = app_log.read_text(encoding="utf-8")
    assert text.count("Cuenta no encontrada") == 3
    assert "Demasiados intentos de login" in text


def test_login_non_numeric_counts_as_attempt(store, app_log):
    ask = make_ask("abc", "1234", "1001", "9876")
    account = login(store, ask, app_log)
    assert account.number == 1001


def test_login_missing_file(tmp_path, app_log):
    store = AccountStore(tmp_path / "missing.dat")
    ask = make_ask("1000", "1234", "1000", "1234", "1000", "1234")
    assert login(store, ask, app_log) is None
    assert "Error al abrir el archivo cuentas.dat" in app_log.read_text(encoding="utf-8")


def test_session_deposit(store, teller):
    account = store.find(1000)
    run_session(teller, account, make_ask("1", "250", "5"))
    assert store.find(1000).balance == pytest.approx(INITIAL_ACCOUNTS[0].balance + 250)
    assert account.transactions == 1


def test_session_withdraw_over_limit(store, teller, capsys):
    account = store.find(1000)
    run_session(teller, account, make_ask("2", "1500", "5"))
    assert store.find(1000).balance == pytest.approx(INITIAL_ACCOUNTS[0].balance)
    assert "El monto excede el limite para retiros (1000)" in capsys.readouterr().out


def test_session_withdraw(store, teller):
    account = store.find(1000)
    run_session(teller, account, make_ask("2", "100", "5"))
    assert store.find(1000).balance == pytest.approx(INITIAL_ACCOUNTS[0].balance - 100)


def test_session_transfer_preserves_total(store, teller):
    before = sum(acc.balance for acc in store.accounts())
    account = store.find(1000)
    run_session(teller, account, make_ask("3", "1001", "300", "5"))
    after = store.accounts()
    assert sum(acc.balance for acc in after) == pytest.approx(before)
    assert store.find(1000).balance == pytest.approx(INITIAL_ACCOUNTS[0].balance - 300)


def test_session_transfer_to_unknown_account(store, teller, capsys):
    account = store.find(1000)
    run_session(teller, account, make_ask("3", "4242", "300", "5"))
    assert store.find(1000).balance == pytest.approx(INITIAL_ACCOUNTS[0].balance)
    assert "4242" in capsys.readouterr().out


def test_session_consult(store, teller, capsys):
    account = store.find(1000)
    run_session(teller, account, make_ask("4", "5"))
    out = capsys.readouterr().out
    assert f"Titular: {INITIAL_ACCOUNTS[0].holder}" in out
    assert "Saliendo......." in out


def test_session_invalid_option_and_amount(store, teller, capsys):
    account = store.find(1000)
    run_session(teller, account, make_ask("9", "1", "abc", "5"))
    out = capsys.readouterr().out
    assert "Introduzca una opción válida por favor" in out
    assert store.find(1000).balance == pytest.approx(INITIAL_ACCOUNTS[0].balance)


def _write_config(path):
    path.write_text("LIMITE_RETIRO=1000\nLIMITE_TRANSFERENCIA=2000\nNUM_HILOS=3\n", encoding="utf-8")


def test_main_full_session(tmp_path, monkeypatch, capsys):
    config = tmp_path / "config.txt"
    _write_config(config)
    accounts = tmp_path / "cuentas.dat"
    create_initial_accounts(accounts)
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n1000\n1234\n4\n5\n"))
    result = main([
        "--config", str(config),
        "--accounts", str(accounts),
        "--transaction-log", str(tmp_path / "t.log"),
        "--app-log", str(tmp_path / "a.log"),
    ])
    assert result == 0
    assert f"Titular: {INITIAL_ACCOUNTS[0].holder}" in capsys.readouterr().out


def test_main_exit_choice(tmp_path, monkeypatch):
    config = tmp_path / "config.txt"
    _write_config(config)
    monkeypatch.setattr("sys.stdin", io.StringIO("2\n"))
    assert main(["--config", str(config), "--app-log", str(tmp_path / "a.log")]) == 1


def test_main_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "nope.txt")]) == 1