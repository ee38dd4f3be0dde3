import logging
from typing import Iterable, Mapping, Optional

from models import Transaction, ClientAccount, HistoryEntry, ProcessingResult, ProcessingStats
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Orchestrates transaction processing over an ordered stream.
    Transactions are applied strictly in arrival order, one at a time.
    """

    def __init__(self):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process(self, transaction: Transaction) -> ProcessingResult:
        """Apply a single transaction to the ledger."""
        logger.debug(f"Processing {transaction!r}")
        result = self._processor.process_transaction(transaction)
        self._stats.record(result)
        return result

    def process_all(self, transactions: Iterable[Transaction]) -> Mapping[int, ClientAccount]:
        """Fold a stream of transactions into the ledger and return final account states."""
        for transaction in transactions:
            self.process(transaction)

        logger.info(f"Processed: {self._stats.processed}, Applied: {self._stats.applied}, Rejected: {self._stats.rejected}")
        return self.accounts()

    def accounts(self) -> Mapping[int, ClientAccount]:
        return self._state.get_all_accounts()

    def history(self) -> Mapping[int, HistoryEntry]:
        return self._state.get_history()

    def history_entry(self, transaction_id: int) -> Optional[HistoryEntry]:
        return self._state.get_history_entry(transaction_id)
