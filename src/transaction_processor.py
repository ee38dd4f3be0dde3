import logging
from typing import Optional, Tuple

from models import Transaction, TransactionType, TransactionStatus, ClientAccount, HistoryEntry, ProcessingResult
from money import Money
from state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to ledger state, one handler per transaction type.
    A rejected transaction leaves the state exactly as it was.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            APPLIED: The ledger was updated
            REJECTED: Policy refused the transaction (locked account, insufficient funds,
                unknown or wrong-status dispute target); nothing changed
        """
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(transaction)
            case _:
                return ProcessingResult.REJECTED

    def _handle_deposit(self, transaction: Transaction) -> ProcessingResult:
        account = self._state.get_account(transaction.client_id)

        if account is not None and account.locked:
            logger.warning(f"Deposit tx {transaction.transaction_id}: account {transaction.client_id} is locked")
            return ProcessingResult.REJECTED

        # Deposits are not sign-checked; a negative amount debits the account.
        if transaction.amount.is_negative():
            logger.warning(f"Deposit tx {transaction.transaction_id}: applying negative amount {transaction.amount}")

        if account is None:
            self._state.open_account(transaction.client_id, transaction.amount)
        else:
            account.credit(transaction.amount)

        self._state.store_transaction(transaction)
        return ProcessingResult.APPLIED

    def _handle_withdrawal(self, transaction: Transaction) -> ProcessingResult:
        if transaction.amount.is_negative():
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: negative amount {transaction.amount}")
            return ProcessingResult.REJECTED

        account = self._state.get_account(transaction.client_id)

        if account is None:
            logger.debug(f"Withdrawal tx {transaction.transaction_id}: unknown client {transaction.client_id}")
            return ProcessingResult.REJECTED

        if account.locked:
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: account {transaction.client_id} is locked")
            return ProcessingResult.REJECTED

        if account.available < transaction.amount:
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: insufficient funds (available {account.available}, requested {transaction.amount})")
            return ProcessingResult.REJECTED

        account.debit(transaction.amount)
        self._state.store_transaction(transaction)
        return ProcessingResult.APPLIED

    def _handle_dispute(self, transaction: Transaction) -> ProcessingResult:
        target = self._find_target(transaction, TransactionStatus.NORMAL)
        if target is None:
            return ProcessingResult.REJECTED

        entry, account = target
        amount = entry.amount

        if account.available < amount:
            logger.error(f"Dispute for tx {transaction.transaction_id}: insufficient available funds to hold {amount} (available {account.available})")
            return ProcessingResult.REJECTED

        account.hold(amount)
        entry.status = TransactionStatus.DISPUTED
        return ProcessingResult.APPLIED

    def _handle_resolve(self, transaction: Transaction) -> ProcessingResult:
        target = self._find_target(transaction, TransactionStatus.DISPUTED)
        if target is None:
            return ProcessingResult.REJECTED

        entry, account = target
        amount = entry.amount

        if self._held_short(transaction, account, amount):
            return ProcessingResult.REJECTED

        account.release_hold(amount)
        entry.status = TransactionStatus.NORMAL
        return ProcessingResult.APPLIED

    def _handle_chargeback(self, transaction: Transaction) -> ProcessingResult:
        target = self._find_target(transaction, TransactionStatus.DISPUTED)
        if target is None:
            return ProcessingResult.REJECTED

        entry, account = target
        amount = entry.amount

        if self._held_short(transaction, account, amount):
            return ProcessingResult.REJECTED

        account.remove_held(amount)
        account.lock()
        entry.status = TransactionStatus.CHARGEDBACK
        return ProcessingResult.APPLIED

    def _find_target(
        self, transaction: Transaction, expected_status: TransactionStatus
    ) -> Optional[Tuple[HistoryEntry, ClientAccount]]:
        """
        Look up the history entry a dispute, resolve or chargeback refers to,
        together with the owning account. Returns None if the transaction must be ignored.
        """
        kind = transaction.transaction_type.value.capitalize()
        entry = self._state.get_history_entry(transaction.transaction_id)

        if entry is None:
            logger.debug(f"{kind} for tx {transaction.transaction_id}: transaction not found")
            return None

        if entry.status != expected_status:
            logger.debug(f"{kind} for tx {transaction.transaction_id}: transaction is {entry.status.value}, expected {expected_status.value}")
            return None

        if entry.client_id != transaction.client_id:
            logger.warning(f"{kind} for tx {transaction.transaction_id}: client mismatch (expected {entry.client_id}, got {transaction.client_id})")
            return None

        account = self._state.get_account(transaction.client_id)
        if account is None:
            logger.debug(f"{kind} for tx {transaction.transaction_id}: unknown client {transaction.client_id}")
            return None

        if account.locked:
            logger.warning(f"{kind} for tx {transaction.transaction_id}: account {transaction.client_id} is locked")
            return None

        return entry, account

    def _held_short(self, transaction: Transaction, account: ClientAccount, amount: Money) -> bool:
        """Holds are only released when the full disputed amount is still held."""
        if account.held < amount:
            kind = transaction.transaction_type.value
            logger.error(f"Cannot {kind} tx {transaction.transaction_id}: held funds {account.held} below disputed amount {amount}")
            return True
        return False
