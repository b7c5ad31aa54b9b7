"""Unit tests for the service layer: isolation, ownership and flag gating"""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from accountstack.domain.exceptions import (
    FeatureDisabledError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
)
from accountstack.domain.models import EntityKind, Snapshot, TransactionFilters
from accountstack.domain.shaping import INSIGHTS_V2_SUFFIX, MASK_PLACEHOLDER
from accountstack.features.flags import ADVANCED_FILTERS, ALERTS_ENABLED, INSIGHTS_V2, MASK_AMOUNTS
from accountstack.infrastructure.memory.repository import InMemoryRepository
from accountstack.services.accounts import AccountService, UserService
from accountstack.services.insights import AlertsService, InsightsService
from accountstack.services.transactions import TransactionService


class TestAccounts:
    def test_get_user(self, repo):
        assert UserService(repo).get_user("user-001").email == "john.doe@example.com"

    def test_get_missing_user(self, repo):
        with pytest.raises(NotFoundError):
            UserService(repo).get_user("user-404")

    def test_empty_identity_is_unauthenticated(self, repo, flags):
        with pytest.raises(UnauthenticatedError):
            AccountService(repo, flags).list_accounts("")

    def test_list_accounts_for_caller(self, repo, flags):
        views = AccountService(repo, flags).list_accounts("user-001")
        assert [v.id for v in views] == ["acc-001", "acc-002"]

    def test_user_without_accounts_gets_empty_list(self, repo, flags):
        assert AccountService(repo, flags).list_accounts("user-404") == []

    def test_foreign_account_is_forbidden_not_missing(self, repo, flags):
        service = AccountService(repo, flags)

        for caller, foreign in [("user-001", "acc-003"), ("user-002", "acc-001"), ("user-002", "acc-002")]:
            with pytest.raises(ForbiddenError):
                service.get_account(caller, foreign)

    def test_missing_account_is_not_found(self, repo, flags):
        with pytest.raises(NotFoundError):
            AccountService(repo, flags).get_account("user-001", "acc-999")

    def test_masking_follows_flag_changes(self, repo, flags):
        service = AccountService(repo, flags)

        assert service.get_account("user-001", "acc-002").balance.render() == -250.0

        flags.set(MASK_AMOUNTS, True)
        view = service.get_account("user-001", "acc-002")
        assert view.balance.render() == MASK_PLACEHOLDER
        assert view.credit_limit.render() == MASK_PLACEHOLDER
        assert repo.get_account_ids_for_user("user-001") == ["acc-001", "acc-002"]

    def test_currency_follows_caller_country(self, repo, flags):
        view = AccountService(repo, flags).get_account("user-002", "acc-003")
        assert view.currency == "EUR"


class TestTransactions:
    def test_sorted_by_date_descending(self, make_user, make_account, make_transaction, flags):
        repo = InMemoryRepository.from_snapshot(
            Snapshot(
                users=(make_user("u1"),),
                accounts=(make_account("a1", "u1"),),
                transactions=(
                    make_transaction("t-10", "a1", day=10),
                    make_transaction("t-08", "a1", day=8),
                    make_transaction("t-09", "a1", day=9),
                ),
            )
        )

        result = TransactionService(repo, flags).list_transactions("u1", TransactionFilters())

        assert [t.date.day for t in result] == [10, 9, 8]

    def test_equal_dates_keep_insertion_order(self, make_user, make_account, make_transaction, flags):
        repo = InMemoryRepository.from_snapshot(
            Snapshot(
                users=(make_user("u1"),),
                accounts=(make_account("a1", "u1"), make_account("a2", "u1")),
                transactions=(
                    make_transaction("first", "a1", day=5),
                    make_transaction("second", "a1", day=5),
                    make_transaction("third", "a2", day=5),
                ),
            )
        )

        result = TransactionService(repo, flags).list_transactions("u1", TransactionFilters())

        assert [t.id for t in result] == ["first", "second", "third"]

    def test_only_own_accounts_are_returned(self, repo, flags):
        result = TransactionService(repo, flags).list_transactions("user-001", TransactionFilters())
        assert {t.id for t in result} == {"txn-001", "txn-002", "txn-003", "txn-004"}

    @pytest.mark.parametrize(
        "filters",
        [
            TransactionFilters(),
            TransactionFilters(category="shopping"),
            TransactionFilters(min_amount=Decimal("-100"), max_amount=Decimal("-10")),
            TransactionFilters(account_id="acc-003"),
        ],
    )
    def test_result_is_union_of_pinned_account_matches(self, repo, flags, snapshot, filters):
        flags.set(ADVANCED_FILTERS, True)
        owned = set(repo.get_account_ids_for_user("user-001"))

        result = TransactionService(repo, flags).list_transactions("user-001", filters)

        expected = {
            txn.id
            for txn in snapshot.transactions
            if txn.account_id in owned
            and (not filters.account_id or filters.account_id == txn.account_id)
            and filters.matches(txn)
        }
        assert {t.id for t in result} == expected

    def test_requested_foreign_account_yields_nothing(self, repo, flags):
        filters = TransactionFilters(account_id="acc-003")
        assert TransactionService(repo, flags).list_transactions("user-001", filters) == []

    def test_requested_own_account_narrows_results(self, repo, flags):
        filters = TransactionFilters(account_id="acc-002")
        result = TransactionService(repo, flags).list_transactions("user-001", filters)
        assert [t.id for t in result] == ["txn-004"]

    def test_advanced_filters_ignored_while_flag_off(self, repo, flags):
        filters = TransactionFilters(category="shopping")
        service = TransactionService(repo, flags)

        assert len(service.list_transactions("user-001", filters)) == 4

        flags.set(ADVANCED_FILTERS, True)
        assert [t.id for t in service.list_transactions("user-001", filters)] == ["txn-001", "txn-004"]

    def test_user_without_accounts_gets_empty_list(self, repo, flags):
        assert TransactionService(repo, flags).list_transactions("user-404", TransactionFilters()) == []

    def test_get_transaction(self, repo, flags):
        service = TransactionService(repo, flags)
        assert service.get_transaction("txn-005").account_id == "acc-003"
        with pytest.raises(NotFoundError):
            service.get_transaction("txn-999")


class TestInsights:
    def test_list_insights_for_caller(self, repo, flags):
        insights = InsightsService(repo, flags).list_insights("user-002")
        assert [i.id for i in insights] == ["insight-003"]

    def test_v2_titles_never_mutate_storage(self, repo, flags):
        flags.set(INSIGHTS_V2, True)
        service = InsightsService(repo, flags)
        original = repo.get_by_user_id(EntityKind.INSIGHT, "user-001")[0].title

        for _ in range(3):
            shaped = service.get_insight("user-001", "insight-001")

        assert shaped.title == original + INSIGHTS_V2_SUFFIX
        assert repo.get_by_user_id(EntityKind.INSIGHT, "user-001")[0].title == original

    def test_foreign_insight_is_forbidden(self, repo, flags):
        with pytest.raises(ForbiddenError):
            InsightsService(repo, flags).get_insight("user-002", "insight-001")

    def test_missing_insight_is_not_found(self, repo, flags):
        with pytest.raises(NotFoundError):
            InsightsService(repo, flags).get_insight("user-001", "insight-999")


class TestAlerts:
    def test_list_alerts(self, repo, flags):
        alerts = AlertsService(repo, flags).list_alerts("user-002")
        assert [(a.id, a.priority) for a in alerts] == [("alert-002", "high")]

    def test_disabled_alerts_fail_before_repository_access(self, flags):
        repo = Mock(spec=InMemoryRepository)
        flags.set(ALERTS_ENABLED, False)

        with pytest.raises(FeatureDisabledError):
            AlertsService(repo, flags).list_alerts("user-001")

        assert repo.mock_calls == []
