"""Tests for the AWS client manager and service wrappers."""
from unittest.mock import MagicMock, Mock, patch

import pytest
from botocore.exceptions import ClientError

from awscontactman.aws_clients.manager import (
    AccountClientWrapper,
    AWSClientManager,
    OrganizationsClientWrapper,
    S3ClientWrapper,
)

CALLER = "111111111111"
MEMBER = "222222222222"


@pytest.fixture
def boto_client():
    return MagicMock()


@pytest.fixture
def client_manager(boto_client):
    manager = Mock()
    manager.get_client.return_value = boto_client
    return manager


class TestAWSClientManager:
    """Test session creation."""

    @patch("awscontactman.aws_clients.manager.boto3")
    def test_profile_and_region(self, mock_boto3):
        manager = AWSClientManager(profile="org-admin", region="eu-west-1")

        mock_boto3.Session.assert_called_once_with(profile_name="org-admin", region_name="eu-west-1")
        assert manager.session is mock_boto3.Session.return_value

    @patch("awscontactman.aws_clients.manager.boto3")
    def test_region_taken_from_profile(self, mock_boto3):
        profile_session = Mock(region_name="us-west-2")
        mock_boto3.Session.side_effect = [profile_session, Mock()]

        AWSClientManager(profile="org-admin")

        assert mock_boto3.Session.call_args_list[-1].kwargs == {
            "profile_name": "org-admin",
            "region_name": "us-west-2",
        }

    @patch("awscontactman.aws_clients.manager.boto3")
    def test_wrappers_share_session(self, mock_boto3):
        manager = AWSClientManager()
        account_client = manager.get_account_client(CALLER)

        assert isinstance(account_client, AccountClientWrapper)
        assert account_client.current_account_id == CALLER
        account_client.client
        mock_boto3.Session.return_value.client.assert_called_once_with("account")

    @patch("awscontactman.aws_clients.manager.boto3")
    def test_validate_session(self, mock_boto3):
        manager = AWSClientManager()
        assert manager.validate_session() is True

        mock_boto3.Session.return_value.client.return_value.get_caller_identity.side_effect = (
            ClientError({"Error": {"Code": "ExpiredToken"}}, "GetCallerIdentity")
        )
        assert manager.validate_session() is False


class TestAccountClientWrapper:
    """Test Account API calls."""

    def test_member_account_passes_account_id(self, client_manager, boto_client):
        boto_client.get_alternate_contact.return_value = {"AlternateContact": {"Name": "Jane"}}
        wrapper = AccountClientWrapper(client_manager, CALLER)

        assert wrapper.get_alternate_contact(MEMBER, "BILLING") == {"Name": "Jane"}
        boto_client.get_alternate_contact.assert_called_once_with(
            AlternateContactType="BILLING", AccountId=MEMBER
        )

    def test_caller_account_omits_account_id(self, client_manager, boto_client):
        wrapper = AccountClientWrapper(client_manager, CALLER)

        wrapper.delete_alternate_contact(CALLER, "SECURITY")

        boto_client.delete_alternate_contact.assert_called_once_with(AlternateContactType="SECURITY")

    def test_missing_contact_in_response(self, client_manager, boto_client):
        boto_client.get_alternate_contact.return_value = {}
        wrapper = AccountClientWrapper(client_manager, CALLER)

        assert wrapper.get_alternate_contact(MEMBER, "OPERATIONS") is None

    def test_put_passes_contact_fields(self, client_manager, boto_client):
        wrapper = AccountClientWrapper(client_manager, CALLER)
        contact = {
            "EmailAddress": "ops@example.com",
            "Name": "Ops",
            "PhoneNumber": "+15550100200",
            "Title": "SRE",
        }

        wrapper.put_alternate_contact(MEMBER, "OPERATIONS", contact)

        boto_client.put_alternate_contact.assert_called_once_with(
            AlternateContactType="OPERATIONS", AccountId=MEMBER, **contact
        )

    def test_errors_propagate(self, client_manager, boto_client):
        boto_client.get_alternate_contact.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException"}}, "GetAlternateContact"
        )
        wrapper = AccountClientWrapper(client_manager, CALLER)

        with pytest.raises(ClientError):
            wrapper.get_alternate_contact(MEMBER, "BILLING")


class TestOrganizationsClientWrapper:
    """Test ListAccounts paging."""

    def test_token_only_sent_when_present(self, client_manager, boto_client):
        wrapper = OrganizationsClientWrapper(client_manager)

        wrapper.list_accounts_page()
        wrapper.list_accounts_page("t1")

        assert boto_client.list_accounts.call_args_list[0].kwargs == {}
        assert boto_client.list_accounts.call_args_list[1].kwargs == {"NextToken": "t1"}


class TestS3ClientWrapper:
    """Test S3 helpers."""

    def test_put_object(self, client_manager, boto_client):
        S3ClientWrapper(client_manager).put_object("bucket", "key.json", b"{}")

        boto_client.put_object.assert_called_once_with(Bucket="bucket", Key="key.json", Body=b"{}")

    def test_list_buckets(self, client_manager, boto_client):
        boto_client.list_buckets.return_value = {"Buckets": [{"Name": "a"}, {"Name": "b"}]}

        assert S3ClientWrapper(client_manager).list_buckets() == ["a", "b"]

    def test_list_buckets_failure_is_empty(self, client_manager, boto_client):
        boto_client.list_buckets.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied"}}, "ListBuckets"
        )

        assert S3ClientWrapper(client_manager).list_buckets() == []

    def test_list_folders(self, client_manager, boto_client):
        boto_client.list_objects_v2.return_value = {
            "CommonPrefixes": [{"Prefix": "reports/"}, {"Prefix": "archive/"}]
        }

        folders = S3ClientWrapper(client_manager).list_folders("bucket", "exports/")

        assert folders == ["reports/", "archive/"]
        boto_client.list_objects_v2.assert_called_once_with(
            Bucket="bucket", Delimiter="/", Prefix="exports/"
        )
