"""User and account lookups for the accounts service"""

import logging
from typing import List, Optional

from accountstack.domain.access import require_identity, require_owner
from accountstack.domain.exceptions import NotFoundError
from accountstack.domain.models import EntityKind, User
from accountstack.domain.shaping import AccountView, shape_account
from accountstack.features.flags import FeatureFlags
from accountstack.infrastructure.memory.repository import InMemoryRepository

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for users"""

    def __init__(self, repo: InMemoryRepository):
        self.repo = repo

    def get_user(self, user_id: str) -> User:
        require_identity(user_id)
        user = self.repo.get(EntityKind.USER, user_id)
        if user is None:
            logger.warning("User not found", extra={"user_id": user_id})
            raise NotFoundError("user", user_id)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.repo.get_user_by_email(email)


class AccountService:
    """Business logic for accounts: ownership checks plus masking and currency shaping"""

    def __init__(self, repo: InMemoryRepository, flags: FeatureFlags):
        self.repo = repo
        self.flags = flags

    def _caller_country(self, user_id: str) -> Optional[str]:
        user = self.repo.get(EntityKind.USER, user_id)
        if user is None:
            # Without a profile the stored account currency is shown
            logger.warning("User not found, using stored currency", extra={"user_id": user_id})
            return None
        return user.country

    def list_accounts(self, user_id: str) -> List[AccountView]:
        require_identity(user_id)
        accounts = self.repo.get_by_user_id(EntityKind.ACCOUNT, user_id)
        flags = self.flags.snapshot()
        country = self._caller_country(user_id)

        logger.debug(
            "Retrieving accounts",
            extra={"user_id": user_id, "user_country": country, "count": len(accounts), "flags": flags},
        )
        return [shape_account(account, flags, country) for account in accounts]

    def get_account(self, user_id: str, account_id: str) -> AccountView:
        """
        Fetch one account owned by the caller.

        Raises:
            NotFoundError: No account with this id
            ForbiddenError: The account belongs to another user
        """
        require_identity(user_id)
        account = self.repo.get(EntityKind.ACCOUNT, account_id)
        if account is None:
            logger.warning("Account not found", extra={"account_id": account_id, "user_id": user_id})
            raise NotFoundError("account", account_id)

        require_owner("account", account_id, account.user_id, user_id)

        flags = self.flags.snapshot()
        return shape_account(account, flags, self._caller_country(user_id))
