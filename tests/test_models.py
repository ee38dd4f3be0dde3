import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    Transaction,
    TransactionType,
    TransactionStatus,
    Metadata,
    ClientAccount,
    HistoryEntry,
    InvalidRecord,
    ProcessingResult,
    ProcessingStats,
)
from money import Money


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            meta=Metadata(client_id=1, transaction_id=1),
            amount=Money.parse("100.0"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Money.parse("100")

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            meta=Metadata(client_id=1, transaction_id=1),
        )
        assert transaction.amount is None

    @pytest.mark.parametrize("transaction_type", [TransactionType.DEPOSIT, TransactionType.WITHDRAWAL])
    def test_transfer_without_amount_is_invalid(self, transaction_type):
        with pytest.raises(InvalidRecord):
            Transaction(transaction_type, Metadata(1, 1))

    def test_dispute_with_amount_is_invalid(self):
        with pytest.raises(InvalidRecord):
            Transaction(TransactionType.RESOLVE, Metadata(1, 1), Money.parse("1"))

    def test_negative_deposit_is_a_valid_record(self):
        transaction = Transaction(TransactionType.DEPOSIT, Metadata(1, 1), Money.parse("-5"))
        assert transaction.amount.is_negative()

    def test_immutable(self):
        transaction = Transaction(TransactionType.DEPOSIT, Metadata(1, 1), Money.parse("1"))
        with pytest.raises(AttributeError):
            transaction.amount = Money.parse("2")

    def test_repr(self):
        transaction = Transaction(TransactionType.WITHDRAWAL, Metadata(3, 7), Money.parse("1.5"))
        assert repr(transaction) == "Transaction(withdrawal, client=3, tx=7, amount=1.5)"


class TestMetadata:
    def test_bounds(self):
        meta = Metadata(client_id=65535, transaction_id=4294967295)
        assert meta.client_id == 65535
        assert meta.transaction_id == 4294967295

    @pytest.mark.parametrize("client_id, transaction_id", [(65536, 1), (-1, 1), (1, 4294967296), (1, -1)])
    def test_out_of_range(self, client_id, transaction_id):
        with pytest.raises(InvalidRecord):
            Metadata(client_id=client_id, transaction_id=transaction_id)


class TestTransactionType:
    def test_moves_funds(self):
        assert TransactionType.DEPOSIT.moves_funds
        assert TransactionType.WITHDRAWAL.moves_funds
        assert not TransactionType.DISPUTE.moves_funds
        assert not TransactionType.RESOLVE.moves_funds
        assert not TransactionType.CHARGEBACK.moves_funds


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Money.zero()
        assert account.held == Money.zero()
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Money.parse("100"),
            held=Money.parse("50"),
        )
        assert account.total == Money.parse("150")

    def test_hold_and_release(self):
        account = ClientAccount(client_id=1, available=Money.parse("10"))
        account.hold(Money.parse("4"))
        assert account.available == Money.parse("6")
        assert account.held == Money.parse("4")
        account.release_hold(Money.parse("4"))
        assert account.available == Money.parse("10")
        assert account.held == Money.zero()

    def test_lock(self):
        account = ClientAccount(client_id=1)
        account.lock()
        assert account.locked is True


class TestHistoryEntry:
    def test_defaults_to_normal(self):
        transaction = Transaction(TransactionType.DEPOSIT, Metadata(2, 9), Money.parse("3"))
        entry = HistoryEntry(transaction)
        assert entry.status == TransactionStatus.NORMAL
        assert entry.amount == Money.parse("3")
        assert entry.client_id == 2


class TestProcessingStats:
    def test_record(self):
        stats = ProcessingStats()
        stats.record(ProcessingResult.APPLIED)
        stats.record(ProcessingResult.APPLIED)
        stats.record(ProcessingResult.REJECTED)
        assert stats.applied == 2
        assert stats.rejected == 1
        assert stats.processed == 3

    def test_enum_values(self):
        assert ProcessingResult.APPLIED.value == "applied"
        assert ProcessingResult.REJECTED.value == "rejected"
