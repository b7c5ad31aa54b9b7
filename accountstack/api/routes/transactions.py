"""Transactions service: GET /transactions, GET /transactions/{txn_id}"""

import time
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from accountstack.api.dependencies import ServiceContainer, get_container, get_current_user_id, get_request_id
from accountstack.api.routes.schemas import TransactionResponse
from accountstack.domain.filters import build_filters
from accountstack.infrastructure.observability.logging import log_request_outcome

router = APIRouter()


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(
    request: Request,
    account_id: Optional[str] = Query(None, alias="accountId"),
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD or RFC3339"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD or RFC3339"),
    category: Optional[str] = Query(None),
    min_amount: Optional[str] = Query(None, alias="minAmount"),
    max_amount: Optional[str] = Query(None, alias="maxAmount"),
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    """
    List the caller's transactions, most recent first.

    Only transactions on the caller's own accounts are returned. Date,
    category and amount filters require the advanced_filters flag.
    """
    start_time = time.time()
    filters = build_filters(
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
        category=category,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    transactions = container.transactions.list_transactions(user_id, filters)

    log_request_outcome(
        get_request_id(request),
        user_id,
        operation="list_transactions",
        outcome="ok",
        duration_ms=(time.time() - start_time) * 1000,
        count=len(transactions),
    )
    return [TransactionResponse.from_domain(txn) for txn in transactions]


@router.get("/transactions/{txn_id}", response_model=TransactionResponse)
def get_transaction(
    txn_id: str,
    user_id: str = Depends(get_current_user_id),
    container: ServiceContainer = Depends(get_container),
):
    """Fetch one transaction by id"""
    return TransactionResponse.from_domain(container.transactions.get_transaction(txn_id))
