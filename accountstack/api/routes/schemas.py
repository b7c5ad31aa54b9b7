"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from accountstack.domain.models import Alert, Insight, Transaction, User
from accountstack.domain.shaping import AccountView


class CamelModel(BaseModel):
    """Serialises with camelCase keys, accepts either spelling on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    error: str
    message: str


class LoginRequest(CamelModel):
    """Request body for POST /login"""

    username: str = Field(..., min_length=1, description="User email")
    password: str = Field(..., min_length=1)


class LoginUser(CamelModel):
    id: str
    email: str
    name: str


class LoginResponse(CamelModel):
    """Response for POST /login"""

    token: str
    expires_in: int  # seconds
    user: LoginUser


class UserResponse(CamelModel):
    """Response for GET /me"""

    id: str
    email: str
    name: str
    first_name: str
    last_name: str
    country: str
    created_at: datetime
    last_login: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            first_name=user.first_name,
            last_name=user.last_name,
            country=user.country,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class AccountResponse(CamelModel):
    """Account as shown to its owner; amounts are numbers or a masked placeholder"""

    id: str
    user_id: str
    account_number: str
    account_type: str
    account_name: str
    balance: Union[float, str]
    currency: str
    credit_limit: Optional[Union[float, str]] = None
    status: str
    opened_date: datetime
    last_activity: datetime

    @classmethod
    def from_view(cls, view: AccountView) -> "AccountResponse":
        return cls(
            id=view.id,
            user_id=view.user_id,
            account_number=view.account_number,
            account_type=view.account_type,
            account_name=view.account_name,
            balance=view.balance.render(),
            currency=view.currency,
            credit_limit=view.credit_limit.render() if view.credit_limit is not None else None,
            status=view.status,
            opened_date=view.opened_date,
            last_activity=view.last_activity,
        )


class TransactionResponse(CamelModel):
    id: str
    account_id: str
    date: datetime
    description: str
    amount: float
    category: str
    merchant: str
    status: str
    type: str

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            id=txn.id,
            account_id=txn.account_id,
            date=txn.date,
            description=txn.description,
            amount=float(txn.amount),
            category=txn.category,
            merchant=txn.merchant,
            status=txn.status,
            type=txn.type,
        )


class InsightResponse(CamelModel):
    id: str
    user_id: str
    type: str
    category: str
    title: str
    description: str
    severity: str
    created_at: datetime
    actionable: bool
    recommendation: Optional[str] = None

    @classmethod
    def from_domain(cls, insight: Insight) -> "InsightResponse":
        return cls(
            id=insight.id,
            user_id=insight.user_id,
            type=insight.type,
            category=insight.category,
            title=insight.title,
            description=insight.description,
            severity=insight.severity,
            created_at=insight.created_at,
            actionable=insight.actionable,
            recommendation=insight.recommendation,
        )


class AlertResponse(CamelModel):
    id: str
    user_id: str
    type: str
    title: str
    message: str
    priority: str
    created_at: datetime
    read: bool
    action_url: Optional[str] = None

    @classmethod
    def from_domain(cls, alert: Alert) -> "AlertResponse":
        return cls(
            id=alert.id,
            user_id=alert.user_id,
            type=alert.type,
            title=alert.title,
            message=alert.message,
            priority=alert.priority,
            created_at=alert.created_at,
            read=alert.read,
            action_url=alert.action_url,
        )


class FlagsUpdate(CamelModel):
    """Request body for PUT /admin/flags"""

    flags: Dict[str, bool] = Field(..., min_length=1)


class FlagsResponse(CamelModel):
    flags: Dict[str, bool]
