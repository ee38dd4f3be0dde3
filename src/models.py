from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from money import Money

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


class InvalidRecord(ValueError):
    """Raised when a transaction record is structurally invalid."""


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def moves_funds(self) -> bool:
        """Deposits and withdrawals carry an amount and can be disputed."""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class TransactionStatus(Enum):
    NORMAL = "normal"
    DISPUTED = "disputed"
    CHARGEDBACK = "chargedback"


class ProcessingResult(Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Metadata:
    client_id: int
    transaction_id: int

    def __post_init__(self):
        if not 0 <= self.client_id <= MAX_CLIENT_ID:
            raise InvalidRecord(f"client id out of range: {self.client_id}")
        if not 0 <= self.transaction_id <= MAX_TRANSACTION_ID:
            raise InvalidRecord(f"transaction id out of range: {self.transaction_id}")


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    meta: Metadata
    amount: Optional[Money] = None

    def __post_init__(self):
        if self.transaction_type.moves_funds and self.amount is None:
            raise InvalidRecord(f"{self.transaction_type.value} tx {self.meta.transaction_id} has no amount")
        if not self.transaction_type.moves_funds and self.amount is not None:
            raise InvalidRecord(f"{self.transaction_type.value} tx {self.meta.transaction_id} must not carry an amount")

    @property
    def client_id(self) -> int:
        return self.meta.client_id

    @property
    def transaction_id(self) -> int:
        return self.meta.transaction_id

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class HistoryEntry:
    """A deposit or withdrawal kept for dispute lookups, with its dispute status."""

    transaction: Transaction
    status: TransactionStatus = TransactionStatus.NORMAL

    @property
    def amount(self) -> Money:
        return self.transaction.amount

    @property
    def client_id(self) -> int:
        return self.transaction.client_id


@dataclass
class ClientAccount:
    client_id: int
    available: Money = field(default_factory=Money.zero)
    held: Money = field(default_factory=Money.zero)
    locked: bool = False

    @property
    def total(self) -> Money:
        return self.available + self.held

    def credit(self, amount: Money) -> None:
        self.available += amount

    def debit(self, amount: Money) -> None:
        self.available -= amount

    def hold(self, amount: Money) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Money) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Money) -> None:
        self.held -= amount

    def lock(self) -> None:
        self.locked = True


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.applied = 0
        self.rejected = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.APPLIED:
            self.applied += 1
        else:
            self.rejected += 1

    @property
    def processed(self) -> int:
        return self.applied + self.rejected
