"""Command modules for awscontactman."""

from . import contacts, org

__all__ = [
    "contacts",
    "org",
]
