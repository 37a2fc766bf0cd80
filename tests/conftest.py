"""Shared fixtures for awscontactman tests."""
import io
import logging

import pytest
from botocore.exceptions import ClientError
from rich.console import Console


def make_client_error(code, message="Something went wrong", operation="GetAlternateContact", status=400):
    """Build a botocore ClientError the way boto3 raises it."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


@pytest.fixture
def client_error():
    """Factory fixture for botocore ClientError instances."""
    return make_client_error


@pytest.fixture
def quiet_console():
    """Console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the configuration at an empty temporary file path."""
    config_path = tmp_path / "config.yaml"
    monkeypatch.setenv("AWSCONTACTMAN_CONFIG", str(config_path))
    monkeypatch.delenv("AWSCONTACTMAN_RETRY_MAX_ATTEMPTS", raising=False)
    return config_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging so caplog keeps working."""
    yield
    root_logger = logging.getLogger("awscontactman")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.propagate = True
    root_logger.setLevel(logging.NOTSET)
