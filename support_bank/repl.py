# support_bank/repl.py
"""Interactive ``List All`` / ``List <name>`` command loop."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

import click

from support_bank.core.errors import UnknownAccountError
from support_bank.core.ledger import find_account
from support_bank.core.models import Account
from support_bank.formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_DATE_FORMAT,
    format_balance_line,
    format_statement_line,
)
from support_bank.logging_setup import get_logger

logger = get_logger(__name__)

PROMPT = "Your command> "
COMMAND_PREFIX = "List "
ALL_TARGET = "All"
NOT_UNDERSTOOD = "Sorry, I didn't understand that"

BANNER = [
    "Welcome to SupportBank!",
    "=======================",
    "",
    "Available commands:",
    "  List All - list all account balances",
    "  List [Account] - list transactions for the specified account",
    "",
]


class CommandType(Enum):
    LIST_ALL = "list_all"
    LIST_ONE = "list_one"


@dataclass(frozen=True)
class Command:
    type: CommandType
    target: Optional[str] = None


def parse_command(text: str) -> Optional[Command]:
    """Parse a command line; ``None`` when it is not a command we know."""
    if not text.startswith(COMMAND_PREFIX):
        return None
    target = text[len(COMMAND_PREFIX):]
    if target == ALL_TARGET:
        return Command(CommandType.LIST_ALL)
    return Command(CommandType.LIST_ONE, target)


def render_all_accounts(accounts: Dict[str, Account], symbol=DEFAULT_CURRENCY_SYMBOL) -> List[str]:
    lines = ["All accounts"]
    lines.extend(format_balance_line(account, symbol) for account in accounts.values())
    lines.append("")
    return lines


def render_account(account: Account, symbol=DEFAULT_CURRENCY_SYMBOL,
                   date_format=DEFAULT_DATE_FORMAT) -> List[str]:
    lines = [f"Account {account.owner}"]
    lines.extend(format_statement_line(tx, symbol, date_format) for tx in account.statement())
    lines.append("")
    return lines


class CommandLoop:
    """
    Reads commands one line at a time and writes the response for each.

    There is a single state, waiting for a command; every command leads back
    to it. The loop ends only when the input stream is exhausted.
    """

    def __init__(self, accounts, symbol=DEFAULT_CURRENCY_SYMBOL,
                 date_format=DEFAULT_DATE_FORMAT, stdin=None):
        self.accounts = accounts
        self.symbol = symbol
        self.date_format = date_format
        self.stdin = stdin

    def handle(self, text: str) -> List[str]:
        """Return the output lines for one line of input."""
        command = parse_command(text)
        if command is None:
            return [NOT_UNDERSTOOD, ""]
        if command.type is CommandType.LIST_ALL:
            return render_all_accounts(self.accounts, self.symbol)
        try:
            account = find_account(self.accounts, command.target)
        except UnknownAccountError as e:
            logger.info("Requested unknown account %s", e.name)
            return [str(e), ""]
        return render_account(account, self.symbol, self.date_format)

    def _read_command(self, stdin) -> Optional[str]:
        click.echo(PROMPT, nl=False)
        line = stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def run(self) -> None:
        stdin = self.stdin or click.get_text_stream("stdin")
        while True:
            text = self._read_command(stdin)
            if text is None:
                click.echo()
                logger.info("End of input, shutting down")
                return
            for out in self.handle(text):
                click.echo(out)


def print_banner() -> None:
    for line in BANNER:
        click.echo(line)
