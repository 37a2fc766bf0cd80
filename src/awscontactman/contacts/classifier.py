"""Error classification for AWS API failures.

Maps the open set of failures raised by boto3/botocore onto the small closed
taxonomy the retry executor and batch orchestrator reason about. Callers only
ever look at an ``ErrorKind``; swapping in another ``ErrorClassifier`` changes
the classification without touching them.

Classes:
    ErrorKind: Semantic error categories
    Classification: Result of classifying a single failure
    ErrorClassifier: Maps exceptions onto ErrorKind values
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from botocore.exceptions import ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotocoreConnectionError


class ErrorKind(str, Enum):
    """Semantic categories for remote call failures."""

    ACCESS_DENIED = "AccessDenied"
    THROTTLED = "Throttled"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    NOT_FOUND = "NotFound"
    OTHER = "Other"

    @property
    def is_transient(self) -> bool:
        """Whether a retry is expected to help."""
        return self in (ErrorKind.THROTTLED, ErrorKind.SERVICE_UNAVAILABLE)


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a failure.

    ``code`` is the structured error code (the AWS ``Error.Code`` or the
    exception class name) and ``message`` the human readable detail kept for
    ``ErrorKind.OTHER``.
    """

    kind: ErrorKind
    code: str
    message: str

    @property
    def is_transient(self) -> bool:
        return self.kind.is_transient


ACCESS_DENIED_CODES = frozenset(
    {
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedAccess",
        "UnauthorizedAccessException",
        "UnauthorizedException",
        "AuthorizationError",
        "AuthorizationErrorException",
    }
)

THROTTLING_CODES = frozenset(
    {
        "TooManyRequestsException",
        "TooManyRequests",
        "Throttling",
        "ThrottlingException",
        "ThrottledException",
        "RequestLimitExceeded",
        "SlowDown",
    }
)

SERVICE_UNAVAILABLE_CODES = frozenset(
    {
        "ServiceUnavailable",
        "ServiceUnavailableException",
        "InternalError",
        "InternalFailure",
        "InternalServerError",
        "InternalServerException",
        "RequestTimeout",
        "RequestTimeoutException",
    }
)

NOT_FOUND_CODES = frozenset(
    {
        "ResourceNotFoundException",
        "ResourceNotFound",
        "NoSuchBucket",
    }
)

# Connection, timeout, proxy and SSL failures all derive from these two.
TRANSPORT_ERRORS = (BotocoreConnectionError, HTTPClientError)


class ErrorClassifier:
    """Classifies exceptions raised by AWS calls into ``ErrorKind`` values."""

    def classify(self, error: BaseException) -> Classification:
        """Classify an exception.

        Never raises: anything unrecognised becomes ``ErrorKind.OTHER`` carrying
        the original message.

        Args:
            error: Exception raised by a remote call

        Returns:
            Classification for the error
        """
        message = str(error)

        if isinstance(error, TRANSPORT_ERRORS):
            return Classification(ErrorKind.SERVICE_UNAVAILABLE, type(error).__name__, message)

        if isinstance(error, ClientError):
            code = self._error_code(error)
            kind = self.kind_for_code(code)
            if kind is None:
                kind = self._kind_for_status(error)
            return Classification(kind or ErrorKind.OTHER, code, message)

        code = type(error).__name__
        return Classification(self.kind_for_code(code) or ErrorKind.OTHER, code, message)

    def kind_for_code(self, code: str) -> Optional[ErrorKind]:
        """Look up the kind for a structured error code, or None if unknown."""
        if code in ACCESS_DENIED_CODES:
            return ErrorKind.ACCESS_DENIED
        if code in THROTTLING_CODES:
            return ErrorKind.THROTTLED
        if code in SERVICE_UNAVAILABLE_CODES:
            return ErrorKind.SERVICE_UNAVAILABLE
        if code in NOT_FOUND_CODES:
            return ErrorKind.NOT_FOUND
        return None

    def _error_code(self, error: ClientError) -> str:
        return error.response.get("Error", {}).get("Code", "Unknown") or "Unknown"

    def _kind_for_status(self, error: ClientError) -> Optional[ErrorKind]:
        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status == 429:
            return ErrorKind.THROTTLED
        if status in (500, 502, 503, 504):
            return ErrorKind.SERVICE_UNAVAILABLE
        return None


default_classifier = ErrorClassifier()


def classify(error: BaseException) -> Classification:
    """Classify an exception with the default classifier."""
    return default_classifier.classify(error)
