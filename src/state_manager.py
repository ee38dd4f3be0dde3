from types import MappingProxyType
from typing import Dict, Mapping, Optional

from models import Transaction, ClientAccount, HistoryEntry
from money import Money


class StateManager:
    """
    Ledger state: client accounts plus the history of deposits and withdrawals
    that disputes may refer to.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._history: Dict[int, HistoryEntry] = {}

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        """Retrieve an existing account; accounts are never created implicitly."""
        return self._accounts.get(client_id)

    def open_account(self, client_id: int, available: Money) -> ClientAccount:
        """Create an account holding an initial available balance."""
        account = ClientAccount(client_id=client_id, available=available)
        self._accounts[client_id] = account
        return account

    def store_transaction(self, transaction: Transaction) -> HistoryEntry:
        """
        Store a deposit or withdrawal for future dispute lookups.
        A repeated transaction id replaces the earlier entry.
        """
        entry = HistoryEntry(transaction=transaction)
        self._history[transaction.transaction_id] = entry
        return entry

    def get_history_entry(self, transaction_id: int) -> Optional[HistoryEntry]:
        """Retrieve stored transaction and its status by ID."""
        return self._history.get(transaction_id)

    def get_history(self) -> Mapping[int, HistoryEntry]:
        """Read-only view of stored deposits and withdrawals."""
        return MappingProxyType(self._history)

    def get_all_accounts(self) -> Mapping[int, ClientAccount]:
        """Read-only view of all accounts (for final output)."""
        return MappingProxyType(self._accounts)
