"""Custom exception classes for alternate contact operations."""

from typing import Any, Dict, Optional


class ContactManagerError(Exception):
    """Base exception for awscontactman operations."""

    def __init__(
        self,
        message: str,
        account_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize contact manager error.

        Args:
            message: Error message
            account_id: Account ID related to the error
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.account_id = account_id
        self.context = context or {}


# Validation errors


class ValidationError(ContactManagerError):
    """Exception raised when batch input fails validation."""


class NoAccountsProvidedError(ValidationError):
    """Exception raised when the account selection is empty."""

    def __init__(self):
        super().__init__("No accounts provided")


class InvalidAccountIdError(ValidationError):
    """Exception raised when an account ID is not exactly 12 digits."""

    def __init__(self, account_id: str):
        """Initialize invalid account ID error.

        Args:
            account_id: The malformed account ID
        """
        super().__init__(
            f"Invalid AWS Account ID '{account_id}': must be exactly 12 digits",
            account_id=account_id,
        )


class AccountNotInOrganizationError(ValidationError):
    """Exception raised when an account is not part of the caller's organization."""

    def __init__(self, account_id: str):
        """Initialize account not in organization error.

        Args:
            account_id: The account ID missing from the organization roster
        """
        super().__init__(
            f"Account ID '{account_id}' does not belong to your AWS Organization",
            account_id=account_id,
        )


class UnknownContactTypeError(ContactManagerError):
    """Exception raised when a contact type name cannot be parsed."""

    def __init__(self, contact_type: str):
        super().__init__(
            f"Unknown alternate contact type: {contact_type}",
            context={"contact_type": contact_type},
        )
        self.contact_type = contact_type


class UserInputError(ContactManagerError):
    """Exception raised when interactive input cannot be collected."""


# Organizations / STS errors


class OrganizationsError(ContactManagerError):
    """Base exception for AWS Organizations failures."""


class ListAccountsError(OrganizationsError):
    """Exception raised when the organization roster cannot be listed."""

    def __init__(self, message: str):
        super().__init__(f"Failed to list accounts: {message}")


class OrganizationsAccessDeniedError(OrganizationsError):
    """Exception raised when the Organizations API denies access."""

    def __init__(self):
        super().__init__(
            "Access denied to Organizations API. Ensure you have the required permissions."
        )


class OrganizationsUnavailableError(OrganizationsError):
    """Exception raised when the Organizations API stays unavailable after retries."""

    def __init__(self):
        super().__init__("Organizations service unavailable. Please retry later.")


class StsError(ContactManagerError):
    """Base exception for AWS STS failures."""


class CallerIdentityError(StsError):
    """Exception raised when GetCallerIdentity fails."""

    def __init__(self, message: str):
        super().__init__(f"Failed to get caller identity: {message}")


class NoAccountIdError(StsError):
    """Exception raised when the caller identity carries no account ID."""

    def __init__(self):
        super().__init__("No account ID found in caller identity response")


# Account API errors


class AccountError(ContactManagerError):
    """Base exception for AWS Account API failures on a single cell."""

    operation = "process"

    def __init__(
        self,
        account_id: str,
        contact_type: str,
        message: str,
    ):
        """Initialize account operation error.

        Args:
            account_id: Target account ID
            contact_type: Alternate contact type name
            message: Underlying error message
        """
        super().__init__(
            f"Failed to {self.operation} alternate contact for account {account_id}, "
            f"type {contact_type}: {message}",
            account_id=account_id,
            context={"contact_type": contact_type, "detail": message},
        )
        self.contact_type = contact_type


class GetAlternateContactError(AccountError):
    """Exception raised when reading an alternate contact fails."""

    operation = "get"


class PutAlternateContactError(AccountError):
    """Exception raised when updating an alternate contact fails."""

    operation = "update"


class DeleteAlternateContactError(AccountError):
    """Exception raised when deleting an alternate contact fails."""

    operation = "delete"


class AccountAccessDeniedError(ContactManagerError):
    """Exception raised when the Account API denies access to a member account."""

    def __init__(self, account_id: str, contact_type: Optional[str] = None):
        super().__init__(
            f"Access denied to account {account_id}. Check trusted access and permissions.",
            account_id=account_id,
            context={"contact_type": contact_type} if contact_type else None,
        )
        self.contact_type = contact_type


class TooManyRequestsError(ContactManagerError):
    """Exception raised when throttling persists after all retries."""

    def __init__(self, account_id: Optional[str] = None, contact_type: Optional[str] = None):
        super().__init__(
            "Too many requests. Please slow down and retry.",
            account_id=account_id,
            context={"contact_type": contact_type} if contact_type else None,
        )
        self.contact_type = contact_type


# S3 export errors


class S3Error(ContactManagerError):
    """Base exception for S3 export failures."""

    def __init__(self, message: str, bucket: str, key: Optional[str] = None):
        super().__init__(message, context={"bucket": bucket, "key": key})
        self.bucket = bucket
        self.key = key


class S3UploadError(S3Error):
    """Exception raised when PutObject fails."""

    def __init__(self, bucket: str, key: str, message: str):
        super().__init__(
            f"Failed to upload to S3 bucket '{bucket}', key '{key}': {message}", bucket, key
        )


class S3BucketNotFoundError(S3Error):
    """Exception raised when the export bucket does not exist."""

    def __init__(self, bucket: str):
        super().__init__(f"S3 bucket '{bucket}' does not exist", bucket)


class S3AccessDeniedError(S3Error):
    """Exception raised when the export bucket denies access."""

    def __init__(self, bucket: str):
        super().__init__(f"Access denied to S3 bucket '{bucket}'", bucket)
