"""Transaction queries with per-account user isolation"""

import dataclasses
import logging
from typing import List

from accountstack.domain.access import require_identity
from accountstack.domain.exceptions import NotFoundError
from accountstack.domain.models import EntityKind, Transaction, TransactionFilters
from accountstack.features.flags import ADVANCED_FILTERS, FeatureFlags
from accountstack.infrastructure.memory.repository import InMemoryRepository
from accountstack.infrastructure.observability.metrics import transactions_returned_histogram

logger = logging.getLogger(__name__)


class TransactionService:
    """Business logic for transactions"""

    def __init__(self, repo: InMemoryRepository, flags: FeatureFlags):
        self.repo = repo
        self.flags = flags

    def get_transaction(self, txn_id: str) -> Transaction:
        txn = self.repo.get(EntityKind.TRANSACTION, txn_id)
        if txn is None:
            logger.warning("Transaction not found", extra={"txn_id": txn_id})
            raise NotFoundError("transaction", txn_id)
        return txn

    def list_transactions(self, user_id: str, filters: TransactionFilters) -> List[Transaction]:
        """
        List the caller's transactions, most recent first.

        The predicate is evaluated once per account the caller owns, with the
        account pinned, so transactions from other users' accounts can never
        appear whatever the filters say. A requested account the caller does
        not own yields nothing. Date, category and amount constraints are only
        honoured while the advanced_filters flag is on.
        """
        require_identity(user_id)
        account_ids = self.repo.get_account_ids_for_user(user_id)
        if not account_ids:
            logger.warning("No accounts found for user", extra={"user_id": user_id})
            return []

        if filters.account_id:
            account_ids = [account_id for account_id in account_ids if account_id == filters.account_id]

        if self.flags.is_enabled(ADVANCED_FILTERS):
            effective = filters
        else:
            if filters.has_advanced:
                logger.info(
                    "Advanced filters requested but feature flag is disabled, only accountId filter will be applied",
                    extra={"user_id": user_id},
                )
            effective = TransactionFilters(account_id=filters.account_id)

        logger.debug("Filtering transactions by user accounts", extra={"user_id": user_id, "account_ids": account_ids})

        results: List[Transaction] = []
        for account_id in account_ids:
            pinned = dataclasses.replace(effective, account_id=account_id)
            results.extend(self.repo.transactions_matching(pinned))

        # sorted() is stable with reverse=True, so equal dates keep insertion order
        results = sorted(results, key=lambda txn: txn.date, reverse=True)

        transactions_returned_histogram.observe(len(results))
        logger.info("Retrieved transactions for user", extra={"user_id": user_id, "count": len(results)})
        return results
