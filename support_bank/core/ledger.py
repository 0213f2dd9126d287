# support_bank/core/ledger.py
from decimal import Decimal
from typing import Dict, Iterable

from support_bank.core.errors import UnknownAccountError
from support_bank.core.models import Account, Transaction
from support_bank.logging_setup import get_logger

logger = get_logger(__name__)


def get_or_create_account(accounts: Dict[str, Account], owner: str) -> Account:
    """Return the account for ``owner``, adding an empty one if it is new."""
    account = accounts.get(owner)
    if account is None:
        logger.debug("Adding account for %s", owner)
        account = Account(owner)
        accounts[owner] = account
    return account


def build_accounts(transactions: Iterable[Transaction]) -> Dict[str, Account]:
    """
    Fold transactions into accounts keyed by owner.

    Each transaction is appended to the payer's outgoing history and the
    payee's incoming history. Accounts appear in order of first mention.
    """
    accounts: Dict[str, Account] = {}
    for tx in transactions:
        get_or_create_account(accounts, tx.from_account).outgoing.append(tx)
        get_or_create_account(accounts, tx.to_account).incoming.append(tx)
    return accounts


def find_account(accounts: Dict[str, Account], name: str) -> Account:
    try:
        return accounts[name]
    except KeyError:
        raise UnknownAccountError(name) from None


def total_balance(accounts: Dict[str, Account]) -> Decimal:
    return sum((account.balance for account in accounts.values()), Decimal("0"))
