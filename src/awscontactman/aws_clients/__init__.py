"""AWS service client management.

This package provides the boto3 session manager and the thin service
wrappers (Organizations, STS, Account, S3) used by the contact operations.
"""

from .manager import (
    AccountClientWrapper,
    AWSClientManager,
    OrganizationsClientWrapper,
    S3ClientWrapper,
    StsClientWrapper,
)

__all__ = [
    "AWSClientManager",
    "AccountClientWrapper",
    "OrganizationsClientWrapper",
    "S3ClientWrapper",
    "StsClientWrapper",
]
