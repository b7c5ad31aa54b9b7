"""In-memory data access layer over the startup snapshot"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from accountstack.domain.alerts import derive_alerts
from accountstack.domain.exceptions import InternalError, SnapshotLoadError
from accountstack.domain.models import (
    Alert,
    EntityKind,
    Snapshot,
    Transaction,
    TransactionFilters,
    User,
)
from accountstack.utils.locks import ReadWriteLock

logger = logging.getLogger(__name__)

# Kinds that carry a direct user_id foreign key
USER_OWNED_KINDS = (EntityKind.ACCOUNT, EntityKind.INSIGHT, EntityKind.ALERT)


def _check_unique_ids(kind: EntityKind, entities) -> None:
    seen = set()
    for entity in entities:
        if entity.id in seen:
            raise SnapshotLoadError(f"Duplicate {kind.value} id: {entity.id}")
        seen.add(entity.id)


class InMemoryRepository:
    """
    Indexed store of users, accounts, transactions, insights and alerts.

    Populated once by load(); alerts are derived once by derive_alerts().
    After that the store is read-only, and every read takes the shared lock.
    Dicts keep snapshot order, so every listing is in load order.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._entities: Dict[EntityKind, Dict[str, object]] = {kind: {} for kind in EntityKind}
        self._by_user: Dict[EntityKind, Dict[str, List[object]]] = {
            kind: defaultdict(list) for kind in USER_OWNED_KINDS
        }
        self._users_by_email: Dict[str, User] = {}
        self._transactions_by_account: Dict[str, List[Transaction]] = defaultdict(list)
        self._loaded = False
        self._alerts_derived = False

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "InMemoryRepository":
        repo = cls()
        repo.load(snapshot)
        repo.derive_alerts()
        return repo

    def load(self, snapshot: Snapshot) -> None:
        """
        Bulk-load entities and build secondary indexes.

        Raises:
            SnapshotLoadError: Two entities of one kind share an id; nothing is loaded
        """
        with self._lock.write_locked():
            if self._loaded:
                raise InternalError("Repository is already loaded")

            _check_unique_ids(EntityKind.USER, snapshot.users)
            _check_unique_ids(EntityKind.ACCOUNT, snapshot.accounts)
            _check_unique_ids(EntityKind.TRANSACTION, snapshot.transactions)
            _check_unique_ids(EntityKind.INSIGHT, snapshot.insights)

            for user in snapshot.users:
                self._entities[EntityKind.USER][user.id] = user
                # Email is soft-unique: the first user with an address wins
                self._users_by_email.setdefault(user.email, user)

            for account in snapshot.accounts:
                self._entities[EntityKind.ACCOUNT][account.id] = account
                self._by_user[EntityKind.ACCOUNT][account.user_id].append(account)

            for txn in snapshot.transactions:
                self._entities[EntityKind.TRANSACTION][txn.id] = txn
                self._transactions_by_account[txn.account_id].append(txn)

            for insight in snapshot.insights:
                self._entities[EntityKind.INSIGHT][insight.id] = insight
                self._by_user[EntityKind.INSIGHT][insight.user_id].append(insight)

            self._loaded = True

        logger.info(
            "Repository loaded",
            extra={
                "users": len(snapshot.users),
                "accounts": len(snapshot.accounts),
                "transactions": len(snapshot.transactions),
                "insights": len(snapshot.insights),
            },
        )

    def derive_alerts(self) -> List[Alert]:
        """Generate alerts from actionable medium/high severity insights, once"""
        with self._lock.write_locked():
            if self._alerts_derived:
                raise InternalError("Alerts have already been derived")

            alerts = derive_alerts(self._entities[EntityKind.INSIGHT].values())
            for alert in alerts:
                self._entities[EntityKind.ALERT][alert.id] = alert
                self._by_user[EntityKind.ALERT][alert.user_id].append(alert)
            self._alerts_derived = True

        logger.info("Alerts derived", extra={"alerts": len(alerts)})
        return alerts

    def get(self, kind: EntityKind, entity_id: str) -> Optional[object]:
        with self._lock.read_locked():
            return self._entities[kind].get(entity_id)

    def get_by_user_id(self, kind: EntityKind, user_id: str) -> List[object]:
        if kind not in USER_OWNED_KINDS:
            raise ValueError(f"{kind.value} entities are not directly owned by a user")
        with self._lock.read_locked():
            return list(self._by_user[kind].get(user_id, ()))

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock.read_locked():
            return self._users_by_email.get(email)

    def get_account_ids_for_user(self, user_id: str) -> List[str]:
        with self._lock.read_locked():
            return [account.id for account in self._by_user[EntityKind.ACCOUNT].get(user_id, ())]

    def transactions_matching(self, filters: TransactionFilters) -> List[Transaction]:
        """Transactions satisfying the filters, in load order"""
        with self._lock.read_locked():
            if filters.account_id:
                candidates = self._transactions_by_account.get(filters.account_id, ())
            else:
                candidates = self._entities[EntityKind.TRANSACTION].values()
            return [txn for txn in candidates if filters.matches(txn)]

    def counts(self) -> Dict[str, int]:
        with self._lock.read_locked():
            return {kind.value: len(entities) for kind, entities in self._entities.items()}
