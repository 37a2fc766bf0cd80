"""Tests for error classification."""
import pytest
from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    HTTPClientError,
    ProxyConnectionError,
    ReadTimeoutError,
    SSLError,
)

from awscontactman.contacts.classifier import (
    Classification,
    ErrorClassifier,
    ErrorKind,
    classify,
)

ENDPOINT = "https://account.us-east-1.amazonaws.com"


class ThrottlingException(Exception):
    """Stand-in for a modeled service exception class."""


class TestClientErrorCodes:
    """Test the error code table."""

    @pytest.mark.parametrize(
        "code,kind",
        [
            ("AccessDeniedException", ErrorKind.ACCESS_DENIED),
            ("UnauthorizedException", ErrorKind.ACCESS_DENIED),
            ("AuthorizationErrorException", ErrorKind.ACCESS_DENIED),
            ("TooManyRequestsException", ErrorKind.THROTTLED),
            ("ThrottlingException", ErrorKind.THROTTLED),
            ("SlowDown", ErrorKind.THROTTLED),
            ("ServiceUnavailableException", ErrorKind.SERVICE_UNAVAILABLE),
            ("InternalServerException", ErrorKind.SERVICE_UNAVAILABLE),
            ("RequestTimeout", ErrorKind.SERVICE_UNAVAILABLE),
            ("ResourceNotFoundException", ErrorKind.NOT_FOUND),
            ("NoSuchBucket", ErrorKind.NOT_FOUND),
        ],
    )
    def test_known_codes(self, client_error, code, kind):
        classification = classify(client_error(code))
        assert classification.kind == kind
        assert classification.code == code

    def test_unknown_code_is_other_with_message(self, client_error):
        error = client_error("ValidationException", "Phone number is invalid")
        classification = classify(error)
        assert classification.kind == ErrorKind.OTHER
        assert "Phone number is invalid" in classification.message

    def test_status_fallback_for_unknown_codes(self, client_error):
        assert classify(client_error("Weird", status=429)).kind == ErrorKind.THROTTLED
        assert classify(client_error("Weird", status=503)).kind == ErrorKind.SERVICE_UNAVAILABLE
        assert classify(client_error("Weird", status=500)).kind == ErrorKind.SERVICE_UNAVAILABLE
        assert classify(client_error("Weird", status=404)).kind == ErrorKind.OTHER

    def test_code_takes_precedence_over_status(self, client_error):
        error = client_error("AccessDeniedException", status=503)
        assert classify(error).kind == ErrorKind.ACCESS_DENIED

    def test_empty_response_does_not_raise(self):
        classification = classify(ClientError({}, "GetAlternateContact"))
        assert classification.kind == ErrorKind.OTHER
        assert classification.code == "Unknown"


class TestOtherExceptions:
    """Test classification of exceptions that are not ClientError."""

    def test_transport_errors_are_unavailable(self):
        assert (
            classify(EndpointConnectionError(endpoint_url=ENDPOINT)).kind
            == ErrorKind.SERVICE_UNAVAILABLE
        )
        assert (
            classify(ConnectTimeoutError(endpoint_url=ENDPOINT)).kind
            == ErrorKind.SERVICE_UNAVAILABLE
        )

    @pytest.mark.parametrize(
        "error",
        [
            ProxyConnectionError(proxy_url="http://proxy.internal:3128", error="refused"),
            SSLError(endpoint_url=ENDPOINT, error="certificate verify failed"),
            HTTPClientError(error="connection pool is closed"),
            ReadTimeoutError(endpoint_url=ENDPOINT),
            ConnectionClosedError(endpoint_url=ENDPOINT),
        ],
        ids=lambda error: type(error).__name__,
    )
    def test_every_transport_failure_is_unavailable(self, error):
        classification = classify(error)
        assert classification.kind == ErrorKind.SERVICE_UNAVAILABLE
        assert classification.code == type(error).__name__

    def test_class_name_is_used_as_code(self):
        classification = classify(ThrottlingException("slow down"))
        assert classification.kind == ErrorKind.THROTTLED
        assert classification.code == "ThrottlingException"

    def test_arbitrary_exception_is_other(self):
        classification = classify(ValueError("boom"))
        assert classification == Classification(ErrorKind.OTHER, "ValueError", "boom")


class TestTransience:
    """Test which kinds are retried."""

    def test_transient_kinds(self):
        assert ErrorKind.THROTTLED.is_transient
        assert ErrorKind.SERVICE_UNAVAILABLE.is_transient
        assert not ErrorKind.ACCESS_DENIED.is_transient
        assert not ErrorKind.NOT_FOUND.is_transient
        assert not ErrorKind.OTHER.is_transient

    def test_classifier_kind_for_code(self):
        classifier = ErrorClassifier()
        assert classifier.kind_for_code("Throttling") == ErrorKind.THROTTLED
        assert classifier.kind_for_code("SomethingElse") is None
