"""Alternate contact batch operations.

This package holds the core of awscontactman:
- validator: account ID and contact type validation
- classifier: mapping of AWS failures onto a small error taxonomy
- retry: retry policy and executor with exponential backoff
- orchestrator: per-cell processing and outcome aggregation
- export: upload of List results to S3
"""

from .classifier import Classification, ErrorClassifier, ErrorKind, classify
from .models import (
    BatchMode,
    BatchResult,
    Cancelled,
    CellResult,
    ContactRecord,
    ContactType,
    Failure,
    OperationOutcome,
    PartialSuccess,
    Success,
)
from .orchestrator import BatchOrchestrator, run_batch
from .retry import RetryExecutor, RetryPolicy
from .validator import parse_account_ids, parse_contact_type, validate_accounts

__all__ = [
    "BatchMode",
    "BatchOrchestrator",
    "BatchResult",
    "Cancelled",
    "CellResult",
    "Classification",
    "ContactRecord",
    "ContactType",
    "ErrorClassifier",
    "ErrorKind",
    "Failure",
    "OperationOutcome",
    "PartialSuccess",
    "RetryExecutor",
    "RetryPolicy",
    "Success",
    "classify",
    "parse_account_ids",
    "parse_contact_type",
    "run_batch",
    "validate_accounts",
]
