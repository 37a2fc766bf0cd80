"""AWS client utilities for awscontactman."""

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

logger = logging.getLogger(__name__)

console = Console(stderr=True)


class AWSClientManager:
    """Manages AWS client connections for alternate contact operations."""

    def __init__(
        self,
        profile: Optional[str] = None,
        region: Optional[str] = None,
    ):
        """
        Initialize the AWS client manager.

        Args:
            profile: AWS profile name to use
            region: AWS region to use
        """
        self.profile = profile
        self.region = region
        self.session = None
        self._init_session()

    def _init_session(self) -> None:
        """Initialize the AWS session."""
        session_kwargs = {}
        if self.profile:
            session_kwargs["profile_name"] = self.profile

        # Always explicitly set region_name to override AWS_DEFAULT_REGION
        if self.region:
            session_kwargs["region_name"] = self.region
        elif self.profile:
            try:
                temp_session = boto3.Session(profile_name=self.profile)
                profile_region = temp_session.region_name
                if profile_region:
                    session_kwargs["region_name"] = profile_region
            except BotoCoreError as e:
                console.print(
                    f"[yellow]Warning: Could not get region from profile: {str(e)}[/yellow]"
                )

        self.session = boto3.Session(**session_kwargs)

    def validate_session(self) -> bool:
        """
        Validate that the AWS session is active and credentials are valid.

        Returns:
            True if the session is valid, False otherwise

        Raises:
            RuntimeError: If session is not initialized
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")

        try:
            self.session.client("sts").get_caller_identity()
            return True
        except (BotoCoreError, ClientError) as e:
            logger.debug(f"Session validation failed: {e}")
            return False

    def get_client(self, service_name: str) -> Any:
        """
        Get an AWS service client.

        Args:
            service_name: Name of the AWS service

        Returns:
            AWS service client
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")
        return self.session.client(service_name)

    def get_organizations_client(self) -> "OrganizationsClientWrapper":
        """Get an Organizations client wrapper."""
        return OrganizationsClientWrapper(self)

    def get_sts_client(self) -> "StsClientWrapper":
        """Get an STS client wrapper."""
        return StsClientWrapper(self)

    def get_account_client(self, current_account_id: Optional[str] = None) -> "AccountClientWrapper":
        """
        Get an Account API client wrapper.

        Args:
            current_account_id: Account ID of the caller, used to decide when
                the AccountId parameter must be omitted

        Returns:
            AccountClientWrapper bound to this session
        """
        return AccountClientWrapper(self, current_account_id)

    def get_s3_client(self) -> "S3ClientWrapper":
        """Get an S3 client wrapper."""
        return S3ClientWrapper(self)


class _LazyClientWrapper:
    """Creates the underlying boto3 client on first use."""

    service_name = ""

    def __init__(self, client_manager: AWSClientManager):
        """
        Initialize the client wrapper.

        Args:
            client_manager: AWSClientManager instance for session management
        """
        self.client_manager = client_manager
        self._client = None

    @property
    def client(self) -> Any:
        """Get the boto3 client, creating it if needed."""
        if self._client is None:
            self._client = self.client_manager.get_client(self.service_name)
        return self._client


class OrganizationsClientWrapper(_LazyClientWrapper):
    """Wrapper for the AWS Organizations client.

    Errors are not handled here; they propagate as botocore exceptions so the
    caller can classify and retry them.
    """

    service_name = "organizations"

    def list_accounts_page(self, next_token: Optional[str] = None) -> Dict[str, Any]:
        """
        Fetch one page of organization accounts.

        Args:
            next_token: Pagination token from the previous page

        Returns:
            Raw ListAccounts response
        """
        kwargs = {"NextToken": next_token} if next_token else {}
        return self.client.list_accounts(**kwargs)


class StsClientWrapper(_LazyClientWrapper):
    """Wrapper for the AWS STS client."""

    service_name = "sts"

    def get_caller_identity(self) -> Dict[str, Any]:
        """Return the raw GetCallerIdentity response."""
        return self.client.get_caller_identity()


class AccountClientWrapper(_LazyClientWrapper):
    """Wrapper for the AWS Account client (alternate contacts)."""

    service_name = "account"

    def __init__(self, client_manager: AWSClientManager, current_account_id: Optional[str] = None):
        super().__init__(client_manager)
        self.current_account_id = current_account_id

    def _target(self, account_id: str, contact_type: str) -> Dict[str, str]:
        # The Account API rejects AccountId when it names the calling account.
        kwargs = {"AlternateContactType": contact_type}
        if account_id != self.current_account_id:
            kwargs["AccountId"] = account_id
        return kwargs

    def get_alternate_contact(self, account_id: str, contact_type: str) -> Optional[Dict[str, Any]]:
        """
        Get an alternate contact.

        Args:
            account_id: Target account ID
            contact_type: BILLING, OPERATIONS or SECURITY

        Returns:
            The AlternateContact dictionary, or None if the response carries none

        Raises:
            ClientError: If the API call fails
        """
        response = self.client.get_alternate_contact(**self._target(account_id, contact_type))
        return response.get("AlternateContact")

    def put_alternate_contact(
        self, account_id: str, contact_type: str, contact: Dict[str, str]
    ) -> None:
        """
        Create or replace an alternate contact.

        Args:
            account_id: Target account ID
            contact_type: BILLING, OPERATIONS or SECURITY
            contact: Dictionary with EmailAddress, Name, PhoneNumber and Title

        Raises:
            ClientError: If the API call fails
        """
        self.client.put_alternate_contact(**self._target(account_id, contact_type), **contact)

    def delete_alternate_contact(self, account_id: str, contact_type: str) -> None:
        """
        Delete an alternate contact.

        Raises:
            ClientError: If the API call fails
        """
        self.client.delete_alternate_contact(**self._target(account_id, contact_type))


class S3ClientWrapper(_LazyClientWrapper):
    """Wrapper for the S3 client used by the export path."""

    service_name = "s3"

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        """
        Upload an object.

        Raises:
            ClientError: If the API call fails
        """
        self.client.put_object(Bucket=bucket, Key=key, Body=body)

    def list_buckets(self) -> List[str]:
        """List bucket names, returning an empty list if listing is not possible."""
        try:
            response = self.client.list_buckets()
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Could not list S3 buckets: {e}")
            return []
        return [bucket["Name"] for bucket in response.get("Buckets", []) if bucket.get("Name")]

    def list_folders(self, bucket: str, prefix: str = "") -> List[str]:
        """
        List the immediate "folders" (common prefixes) under a prefix.

        Args:
            bucket: Bucket name
            prefix: Prefix to list under, ending with "/" or empty for the root

        Returns:
            Common prefixes, empty if listing is not possible
        """
        kwargs = {"Bucket": bucket, "Delimiter": "/"}
        if prefix:
            kwargs["Prefix"] = prefix
        try:
            response = self.client.list_objects_v2(**kwargs)
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Could not list S3 folders: {e}")
            return []
        return [cp["Prefix"] for cp in response.get("CommonPrefixes", []) if cp.get("Prefix")]
