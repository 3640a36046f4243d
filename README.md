# bancosim

A small simulated bank that runs in the terminal. It keeps its accounts in a
binary file, lets users log in from a terminal to deposit, withdraw, transfer
and check their balance, writes every completed operation to a transaction
log, and has a monitor that watches that log for runs of withdrawals or
transfers by the same account.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

Every command reads `config.txt` from the current directory unless given
`--config PATH`. Lines starting with `#` and empty lines are ignored; unknown
keys and values that do not parse are skipped, and missing settings stay zero
or empty.

```
# maximum amount for a single withdrawal
LIMITE_RETIRO=1000
# maximum amount for a single transfer
LIMITE_TRANSFERENCIA=2000
# consecutive withdrawals by one account that raise an alert
UMBRAL_RETIROS=3
# consecutive transfers by one account that raise an alert
UMBRAL_TRANSFERENCIAS=3
# how many terminals may be open at once
NUM_HILOS=4
ARCHIVO_CUENTAS=cuentas.dat
ARCHIVO_LOG=transacciones.log
```

`ARCHIVO_CUENTAS` and `ARCHIVO_LOG` are read into the `Config` object
(`accounts_file`, `log_file`), but the commands take their file names from
their own options instead. `NUM_HILOS` must be positive, or the bank refuses to
start.

## Files

- `cuentas.dat` – the account records (number, holder, balance, PIN,
  transaction count) in fixed-size binary form.
- `transacciones.log` – one line per completed deposit, withdrawal or
  transfer, with date, account, operation, amount and final balance.
- `application.log` – general events: logins, rejected operations, terminals
  opened, alerts raised.

## Commands

1. Create the account file with its starting accounts (an optional path
   argument replaces the default `cuentas.dat`):

   ```
   bancosim-init-accounts
   ```

2. Start the bank's menu. Option 1 opens a user terminal, up to `NUM_HILOS`
   at a time; option 2 (or end of input) closes the terminals it opened, stops
   the monitor and exits.

   ```
   bancosim-bank --terminal "x-terminal-emulator -e bancosim-terminal" --monitor bancosim-monitor
   ```

   `--terminal` is the command run for each user terminal (default
   `x-terminal-emulator -e ./usuario`), `--monitor` the command started
   alongside as the monitor (default `./monitor`; an empty value runs without
   one), `--app-log` the application log.

3. A user terminal can be started directly:

   ```
   bancosim-terminal
   ```

   Options: `--config`, `--accounts`, `--transaction-log`, `--app-log`. The
   user has three attempts to enter a matching account number and PIN. After
   that the menu offers deposit, withdrawal, transfer, balance and exit.
   Withdrawals above `LIMITE_RETIRO`, transfers above `LIMITE_TRANSFERENCIA`,
   transfers to unknown accounts and anything exceeding the balance are
   rejected and logged.

4. The monitor can be run on its own:

   ```
   bancosim-monitor
   ```

   It rereads the transaction log (`--log`) every `--interval` seconds
   (default 4) and prints an alert the first time an account reaches the
   configured number of consecutive withdrawals or transfers; each account is
   alerted at most once. `--once` scans a single time and exits.

## Using the library

```python
from bancosim.config import read_config
from bancosim.accounts import AccountStore, create_initial_accounts
from bancosim.operations import Teller, InsufficientFunds, LimitExceeded

config = read_config("config.txt")
create_initial_accounts("cuentas.dat")
store = AccountStore("cuentas.dat")
teller = Teller(store, config, "transacciones.log", "application.log")

account = store.find(1000)
teller.deposit(account, 250.0)
try:
    teller.withdraw(account, 10_000.0)
except (InsufficientFunds, LimitExceeded) as exc:
    print("rejected:", exc)
```

All refusals derive from `bancosim.operations.BankError`; `transfer` also
raises `AccountNotFound`. `AccountStore` offers `accounts()`, `find()`,
`authenticate()` and `update()`. `bancosim.logs` formats and appends log lines
(`format_transaction`, `log_transaction`, `format_event`, `log_event`).
`bancosim.monitor.AnomalyMonitor` takes a `Config` and its `scan()` returns the
alert messages for a pass over log lines; `parse_transaction_line` turns one
line into a `TransactionRecord`. `bancosim.terminal.login` and `run_session`
take an `ask` callable (such as `input`), and `bancosim.bank.Bank` tracks open
terminals.

## What it does not do

The bank menu does not open windows itself: each user terminal is whatever
command `--terminal` names, so a terminal emulator must be installed for the
default. The accounts file is shared only through a lock within one process;
separate terminal processes writing at once are not coordinated.