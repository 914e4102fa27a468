"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from table_catalog.models import TableHandle, TableMetadata

AWS_ENV_VARS = [
    "AWS_ENDPOINT_URL",
    "AWS_REGION",
    "AWS_WEB_IDENTITY_TOKEN_FILE",
    "AWS_ROLE_ARN",
    "AWS_ROLE_SESSION_NAME",
]


@pytest.fixture(autouse=True)
def clean_aws_env(monkeypatch):
    """Keep the developer's AWS environment out of the tests."""
    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def glue_client():
    """Mock boto3 Glue client."""
    return MagicMock()


@pytest.fixture
def table_handle():
    return TableHandle(table_uri="file:///tmp/t")


@pytest.fixture
def table_metadata():
    return TableMetadata(
        id="5fba94ed-9794-4965-ba6e-6ee3c0d22af9",
        name="events",
        description="Raw click events",
    )


def make_client_error(code: str, operation: str, message: str = "boom") -> ClientError:
    """Build a botocore ClientError as Glue would raise it."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def client_error():
    return make_client_error
