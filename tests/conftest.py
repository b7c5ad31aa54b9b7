"""Pytest fixtures for testing"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from accountstack.api.main import create_app
from accountstack.config import Settings
from accountstack.domain.models import Account, Insight, Snapshot, Transaction, User
from accountstack.features.flags import FeatureFlags
from accountstack.infrastructure.auth.jwt import create_access_token
from accountstack.infrastructure.memory.repository import InMemoryRepository


def ts(day: int, hour: int = 12) -> datetime:
    """December 2024 timestamp in UTC"""
    return datetime(2024, 12, day, hour, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_user() -> Callable[..., User]:
    def _make(user_id: str, country: str = "US", email: str | None = None) -> User:
        return User(
            id=user_id,
            email=email or f"{user_id}@example.com",
            name=f"Name {user_id}",
            first_name="Name",
            last_name=user_id,
            country=country,
            created_at=ts(1),
        )

    return _make


@pytest.fixture
def make_account() -> Callable[..., Account]:
    def _make(
        account_id: str,
        user_id: str,
        balance: str = "1500.50",
        currency: str = "USD",
        credit_limit: str | None = None,
    ) -> Account:
        return Account(
            id=account_id,
            user_id=user_id,
            account_number=f"{account_id}-number",
            account_type="credit" if credit_limit else "checking",
            account_name=f"Account {account_id}",
            balance=Decimal(balance),
            currency=currency,
            credit_limit=Decimal(credit_limit) if credit_limit else None,
            status="active",
            opened_date=ts(1),
            last_activity=ts(10),
        )

    return _make


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    def _make(
        txn_id: str,
        account_id: str,
        day: int = 10,
        amount: str = "-50",
        category: str = "shopping",
    ) -> Transaction:
        return Transaction(
            id=txn_id,
            account_id=account_id,
            date=ts(day),
            description=f"Transaction {txn_id}",
            amount=Decimal(amount),
            category=category,
            merchant="Test Merchant",
            status="completed",
            type="debit" if Decimal(amount) < 0 else "credit",
        )

    return _make


@pytest.fixture
def make_insight() -> Callable[..., Insight]:
    def _make(
        insight_id: str,
        user_id: str,
        severity: str = "high",
        actionable: bool = True,
        title: str | None = None,
    ) -> Insight:
        return Insight(
            id=insight_id,
            user_id=user_id,
            type="spending",
            category="dining",
            title=title or f"Insight {insight_id}",
            description=f"Description {insight_id}",
            severity=severity,
            created_at=ts(5),
            actionable=actionable,
            recommendation=None,
        )

    return _make


@pytest.fixture
def snapshot(make_user, make_account, make_transaction, make_insight) -> Snapshot:
    """
    Two users with separate accounts:
    - user-001 (US): acc-001 checking, acc-002 credit card
    - user-002 (FR): acc-003 checking
    """
    return Snapshot(
        users=(
            make_user("user-001", country="US", email="john.doe@example.com"),
            make_user("user-002", country="FR", email="francois@example.fr"),
        ),
        accounts=(
            make_account("acc-001", "user-001"),
            make_account("acc-002", "user-001", balance="-250.00", credit_limit="5000"),
            make_account("acc-003", "user-002", balance="900", currency="EUR"),
        ),
        transactions=(
            make_transaction("txn-001", "acc-001", day=10, amount="-50", category="shopping"),
            make_transaction("txn-002", "acc-001", day=8, amount="2500", category="income"),
            make_transaction("txn-003", "acc-001", day=9, amount="-20", category="dining"),
            make_transaction("txn-004", "acc-002", day=9, amount="-75", category="shopping"),
            make_transaction("txn-005", "acc-003", day=10, amount="-30", category="shopping"),
        ),
        insights=(
            make_insight("insight-001", "user-001", severity="high"),
            make_insight("insight-002", "user-001", severity="low"),
            make_insight("insight-003", "user-002", severity="medium"),
            make_insight("insight-004", "user-001", severity="medium", actionable=False),
        ),
    )


@pytest.fixture
def repo(snapshot: Snapshot) -> InMemoryRepository:
    return InMemoryRepository.from_snapshot(snapshot)


@pytest.fixture
def flags() -> FeatureFlags:
    return FeatureFlags()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        auth_password="demo123",
        admin_token="admin-secret",
        log_level="WARNING",
    )


@pytest.fixture
def client(test_settings: Settings, repo: InMemoryRepository, flags: FeatureFlags) -> TestClient:
    """Create FastAPI test client over the in-memory fixture snapshot"""
    app = create_app(settings=test_settings, repo=repo, flags=flags)
    return TestClient(app)


@pytest.fixture
def auth_headers(test_settings: Settings) -> Callable[[str], Dict[str, str]]:
    def _headers(user_id: str) -> Dict[str, str]:
        token = create_access_token(user_id, f"{user_id}@example.com", test_settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers
