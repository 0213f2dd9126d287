# support_bank/formatting.py
from decimal import Decimal

from support_bank.core.models import Account, Transaction

DEFAULT_CURRENCY_SYMBOL = "£"
DEFAULT_DATE_FORMAT = "%d/%m/%Y"


def format_currency(amount: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render an amount as e.g. ``£1,234.50`` or ``-£3.00``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_balance_line(account: Account, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    balance = account.balance
    direction = "owes" if balance < 0 else "is owed"
    return f"  {account.owner} {direction} {format_currency(abs(balance), symbol)}"


def format_statement_line(
    tx: Transaction,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    return (
        f"  {tx.date.strftime(date_format)}: {tx.from_account} paid {tx.to_account} "
        f"{format_currency(tx.amount, symbol)} for {tx.narrative}"
    )
