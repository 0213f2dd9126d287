# support_bank/core/models.py
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class Transaction:
    date: date
    from_account: str
    to_account: str
    narrative: str
    amount: Decimal


@dataclass
class Account:
    """
    A named party and the transactions it has sent and received.
    Transactions are shared with the account on the other side, never copied.
    """
    owner: str
    incoming: List[Transaction] = field(default_factory=list)
    outgoing: List[Transaction] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        """Amount owed to this account; negative when it owes money."""
        received = sum((tx.amount for tx in self.incoming), Decimal("0"))
        paid = sum((tx.amount for tx in self.outgoing), Decimal("0"))
        return received - paid

    def statement(self) -> List[Transaction]:
        """
        Incoming and outgoing transactions, oldest first.
        A payment to oneself is listed once. Same-day transactions keep
        the order they were loaded in (incoming before outgoing).
        """
        seen = set()
        combined = []
        for tx in self.incoming + self.outgoing:
            if id(tx) in seen:
                continue
            seen.add(id(tx))
            combined.append(tx)
        return sorted(combined, key=lambda tx: tx.date)
