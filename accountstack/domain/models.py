"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class EntityKind(str, Enum):
    """Entity types held by the repository"""

    USER = "user"
    ACCOUNT = "account"
    TRANSACTION = "transaction"
    INSIGHT = "insight"
    ALERT = "alert"


@dataclass(frozen=True)
class User:
    """Customer profile"""

    id: str
    email: str
    name: str
    first_name: str
    last_name: str
    country: str  # ISO 3166-1 alpha-2 (US, UK, FR, ...)
    created_at: datetime
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class Account:
    """Bank account owned by exactly one user"""

    id: str
    user_id: str
    account_number: str
    account_type: str  # checking | savings | credit | investment | loan
    account_name: str
    balance: Decimal
    currency: str
    status: str
    opened_date: datetime
    last_activity: datetime
    credit_limit: Optional[Decimal] = None


@dataclass(frozen=True)
class Transaction:
    """Posted or pending transaction; owner is derived through the account"""

    id: str
    account_id: str
    date: datetime
    description: str
    amount: Decimal  # Negative for debits
    category: str
    merchant: str
    status: str
    type: str


@dataclass(frozen=True)
class Insight:
    """Financial insight or recommendation for a user"""

    id: str
    user_id: str
    type: str
    category: str
    title: str
    description: str
    severity: str  # low | medium | high
    created_at: datetime
    actionable: bool
    recommendation: Optional[str] = None


@dataclass(frozen=True)
class Alert:
    """Alert derived from an actionable insight"""

    id: str
    user_id: str
    type: str
    title: str
    message: str
    priority: str  # critical | high | medium
    created_at: datetime
    read: bool = False
    action_url: Optional[str] = None


@dataclass(frozen=True)
class TransactionFilters:
    """Predicate over transactions; unset constraints always hold"""

    account_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[str] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    def matches(self, txn: Transaction) -> bool:
        if self.account_id and txn.account_id != self.account_id:
            return False
        if self.start_date is not None and txn.date < self.start_date:
            return False
        if self.end_date is not None and txn.date > self.end_date:
            return False
        if self.category and txn.category != self.category:
            return False
        if self.min_amount is not None and txn.amount < self.min_amount:
            return False
        if self.max_amount is not None and txn.amount > self.max_amount:
            return False
        return True

    @property
    def has_advanced(self) -> bool:
        """True when any constraint other than the account is set"""
        return any(
            value is not None and value != ""
            for value in (self.start_date, self.end_date, self.category, self.min_amount, self.max_amount)
        )


@dataclass(frozen=True)
class Snapshot:
    """Entities loaded from the external data source at startup"""

    users: tuple = ()
    accounts: tuple = ()
    transactions: tuple = ()
    insights: tuple = ()
