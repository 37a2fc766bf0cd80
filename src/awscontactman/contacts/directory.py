"""Organization roster and caller identity lookups.

Both lookups happen before any cell is processed, so every failure here is
fatal to the run once retries are exhausted.
"""

import logging
from typing import Any, Dict, List, Optional

from .classifier import ErrorKind
from .exceptions import (
    CallerIdentityError,
    ListAccountsError,
    NoAccountIdError,
    OrganizationsAccessDeniedError,
    OrganizationsUnavailableError,
)
from .retry import RetryExecutor

logger = logging.getLogger(__name__)


async def fetch_organization_accounts(
    organizations_client, executor: RetryExecutor
) -> List[Dict[str, Any]]:
    """
    Fetch every account of the caller's organization.

    Each page is fetched through the retry executor.

    Args:
        organizations_client: OrganizationsClientWrapper
        executor: Retry executor

    Returns:
        Raw account dictionaries (Id, Name, Email, Status, ...) in API order

    Raises:
        OrganizationsAccessDeniedError: If the Organizations API denies access
        OrganizationsUnavailableError: If the service stays unavailable
        ListAccountsError: For any other failure
    """
    accounts: List[Dict[str, Any]] = []
    next_token: Optional[str] = None

    while True:
        token = next_token
        try:
            response = await executor.execute(
                "list_accounts", lambda: organizations_client.list_accounts_page(token)
            )
        except Exception as e:
            kind = executor.classifier.classify(e).kind
            if kind == ErrorKind.ACCESS_DENIED:
                raise OrganizationsAccessDeniedError() from e
            if kind == ErrorKind.SERVICE_UNAVAILABLE:
                raise OrganizationsUnavailableError() from e
            raise ListAccountsError(str(e)) from e

        accounts.extend(account for account in response.get("Accounts", []) if account.get("Id"))

        next_token = response.get("NextToken")
        if not next_token:
            break

    logger.info(f"Found {len(accounts)} accounts in organization")
    return accounts


async def list_organization_accounts(organizations_client, executor: RetryExecutor) -> List[str]:
    """List every account ID in the caller's organization, in API order."""
    accounts = await fetch_organization_accounts(organizations_client, executor)
    return [account["Id"] for account in accounts]


async def get_caller_account_id(sts_client, executor: RetryExecutor) -> str:
    """
    Resolve the account ID of the current credentials.

    Raises:
        CallerIdentityError: If GetCallerIdentity fails
        NoAccountIdError: If the response has no account
    """
    try:
        response = await executor.execute("get_caller_identity", sts_client.get_caller_identity)
    except Exception as e:
        raise CallerIdentityError(str(e)) from e

    account_id = response.get("Account")
    if not account_id:
        raise NoAccountIdError()

    logger.debug(f"Current account ID: {account_id}")
    return account_id
