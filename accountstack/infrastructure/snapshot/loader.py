"""Snapshot loader for the JSON seed files each service reads at startup"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from accountstack.domain.exceptions import SnapshotLoadError
from accountstack.domain.models import Account, Insight, Snapshot, Transaction, User
from accountstack.utils.date_utils import parse_optional_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

SNAPSHOT_FILES = {
    "users": "users.json",
    "accounts": "accounts.json",
    "transactions": "transactions.json",
    "insights": "insights.json",
}


def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def parse_user(raw: Dict[str, Any]) -> User:
    return User(
        id=raw["id"],
        email=raw["email"],
        name=raw["name"],
        first_name=raw.get("firstName", ""),
        last_name=raw.get("lastName", ""),
        country=raw["country"],
        created_at=parse_timestamp(raw["createdAt"]),
        last_login=parse_optional_timestamp(raw.get("lastLogin")),
    )


def parse_account(raw: Dict[str, Any]) -> Account:
    return Account(
        id=raw["id"],
        user_id=raw["userId"],
        account_number=raw["accountNumber"],
        account_type=raw["accountType"],
        account_name=raw["accountName"],
        balance=Decimal(str(raw["balance"])),
        currency=raw["currency"],
        credit_limit=_optional_decimal(raw.get("creditLimit")),
        status=raw["status"],
        opened_date=parse_timestamp(raw["openedDate"]),
        last_activity=parse_timestamp(raw["lastActivity"]),
    )


def parse_transaction(raw: Dict[str, Any]) -> Transaction:
    return Transaction(
        id=raw["id"],
        account_id=raw["accountId"],
        date=parse_timestamp(raw["date"]),
        description=raw["description"],
        amount=Decimal(str(raw["amount"])),
        category=raw["category"],
        merchant=raw.get("merchant", ""),
        status=raw["status"],
        type=raw["type"],
    )


def parse_insight(raw: Dict[str, Any]) -> Insight:
    actionable = raw["actionable"]
    if not isinstance(actionable, bool):
        raise TypeError("actionable must be a boolean")
    return Insight(
        id=raw["id"],
        user_id=raw["userId"],
        type=raw["type"],
        category=raw["category"],
        title=raw["title"],
        description=raw["description"],
        severity=raw["severity"],
        created_at=parse_timestamp(raw["createdAt"]),
        actionable=actionable,
        recommendation=raw.get("recommendation"),
    )


PARSERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "users": parse_user,
    "accounts": parse_account,
    "transactions": parse_transaction,
    "insights": parse_insight,
}


def _load_file(path: Path, parser: Callable[[Dict[str, Any]], Any]) -> List[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)
    except OSError as e:
        raise SnapshotLoadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotLoadError(f"Malformed JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise SnapshotLoadError(f"Expected a JSON array in {path}")

    try:
        return [parser(item) for item in data]
    except (KeyError, ValueError, TypeError, ArithmeticError) as e:
        raise SnapshotLoadError(f"Invalid record in {path}: {e!r}") from e


def load_snapshot(data_path: str | Path, kinds: Iterable[str] = tuple(SNAPSHOT_FILES)) -> Snapshot:
    """
    Load the requested entity kinds from a snapshot directory.

    Raises:
        SnapshotLoadError: If a requested file is missing or any record is malformed
    """
    root = Path(data_path)
    loaded: Dict[str, tuple] = {}
    for kind in kinds:
        if kind not in SNAPSHOT_FILES:
            raise SnapshotLoadError(f"Unknown snapshot kind: {kind}")
        loaded[kind] = tuple(_load_file(root / SNAPSHOT_FILES[kind], PARSERS[kind]))

    logger.info(
        "Snapshot loaded",
        extra={"data_path": str(root), **{f"{kind}_count": len(items) for kind, items in loaded.items()}},
    )
    return Snapshot(**loaded)
