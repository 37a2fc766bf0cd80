"""Input validation for batch selectors."""

import re
from typing import Iterable, List, Sequence

from .exceptions import (
    AccountNotInOrganizationError,
    InvalidAccountIdError,
    NoAccountsProvidedError,
    UnknownContactTypeError,
)
from .models import ContactType

ACCOUNT_ID_PATTERN = re.compile(r"[0-9]{12}")


def is_valid_account_id(account_id: str) -> bool:
    """Check whether a string is exactly 12 ASCII digits."""
    return bool(ACCOUNT_ID_PATTERN.fullmatch(account_id))


def validate_account_ids(accounts: Sequence[str]) -> None:
    """
    Check that accounts were selected and are well formed, without a roster.

    Lets the CLI reject malformed input before making any AWS call.

    Raises:
        NoAccountsProvidedError: If no accounts were selected
        InvalidAccountIdError: If an account ID is not exactly 12 digits
    """
    if not accounts:
        raise NoAccountsProvidedError()
    for account_id in accounts:
        if not is_valid_account_id(account_id):
            raise InvalidAccountIdError(account_id)


def validate_accounts(accounts: Sequence[str], roster: Iterable[str]) -> None:
    """
    Validate selected account IDs against the organization roster.

    Checks each account in order and stops at the first problem found.

    Args:
        accounts: Account IDs selected for the batch
        roster: Account IDs belonging to the caller's organization

    Raises:
        NoAccountsProvidedError: If no accounts were selected
        InvalidAccountIdError: If an account ID is not exactly 12 digits
        AccountNotInOrganizationError: If an account is not in the roster
    """
    if not accounts:
        raise NoAccountsProvidedError()

    members = set(roster)
    for account_id in accounts:
        if not is_valid_account_id(account_id):
            raise InvalidAccountIdError(account_id)
        if account_id not in members:
            raise AccountNotInOrganizationError(account_id)


def parse_contact_type(name: str) -> ContactType:
    """
    Parse a contact type name case-insensitively.

    Args:
        name: Free text such as "billing" or "Security"

    Returns:
        The matching ContactType

    Raises:
        UnknownContactTypeError: If the name is not a known contact type
    """
    try:
        return ContactType(name.strip().upper())
    except ValueError:
        raise UnknownContactTypeError(name.strip().upper()) from None


def is_valid_email(value: str) -> bool:
    """Loose email check: the Account API does the real validation."""
    return "@" in value


def is_valid_phone_number(value: str) -> bool:
    """A phone number needs at least 8 digits; separators and '+' are allowed."""
    return sum(1 for c in value if c.isdigit()) >= 8


def parse_account_ids(raw: str) -> List[str]:
    """Split a comma separated account list, dropping blanks."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def normalize_contact_types(names: Iterable[str]) -> List[str]:
    """
    Canonicalize contact type names and drop duplicates, keeping first occurrences.

    Known names become their display form ("billing" -> "Billing"); unknown
    names are kept stripped so they surface as per-cell errors when the batch
    runs.
    """
    normalized: List[str] = []
    seen = set()
    for name in names:
        try:
            canonical = parse_contact_type(name).display_name
        except UnknownContactTypeError:
            canonical = name.strip()
        if canonical.upper() in seen:
            continue
        seen.add(canonical.upper())
        normalized.append(canonical)
    return normalized


def expand_contact_types(names: Sequence[str]) -> List[str]:
    """Expand ``all`` in place into every contact type, then normalize.

    An empty selection means every contact type.
    """
    if not names:
        names = ["all"]

    expanded: List[str] = []
    for name in names:
        if name.strip().lower() == "all":
            expanded.extend(contact_type.display_name for contact_type in ContactType)
        else:
            expanded.append(name)
    return normalize_contact_types(expanded)
