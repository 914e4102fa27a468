"""Tests for Glue client bootstrap: region and credential branch selection."""

from unittest.mock import MagicMock, patch

import botocore.session
import pytest
from botocore.config import Config
from botocore.credentials import CredentialResolver, DeferredRefreshableCredentials

from table_catalog.catalog.glue import GlueDataCatalog
from table_catalog.catalog.glue_client import (
    GlueClientFactory,
    WebIdentityCredentialProvider,
    build_web_identity_provider,
    create_glue_client,
)
from table_catalog.config import (
    DefaultChain,
    FederatedIdentity,
    GlueClientSettings,
    RegionConfig,
)
from table_catalog.errors import ClientConstructionError


class FakeClientFactory(GlueClientFactory):
    """Records which construction branch was taken."""

    def __init__(self):
        self.calls = []

    def default_chain(self, region):
        self.calls.append(("default_chain", region))
        return "default-client"

    def web_identity(self, region, strategy, http_config):
        self.calls.append(("web_identity", region, strategy, http_config))
        return "web-identity-client"


@pytest.fixture
def factory():
    return FakeClientFactory()


ENVIRONMENTS = [
    ({}, "default_chain", None, None),
    ({"AWS_REGION": "eu-west-1"}, "default_chain", None, None),
    (
        {"AWS_ENDPOINT_URL": "http://localhost:4566"},
        "default_chain",
        "custom",
        "http://localhost:4566",
    ),
    (
        {"AWS_ENDPOINT_URL": "http://localhost:4566", "AWS_REGION": "eu-west-1"},
        "default_chain",
        "eu-west-1",
        "http://localhost:4566",
    ),
    (
        {"AWS_WEB_IDENTITY_TOKEN_FILE": "/var/run/secrets/token"},
        "web_identity",
        None,
        None,
    ),
    (
        {
            "AWS_WEB_IDENTITY_TOKEN_FILE": "/var/run/secrets/token",
            "AWS_ENDPOINT_URL": "http://localhost:4566",
        },
        "web_identity",
        "custom",
        "http://localhost:4566",
    ),
    # Empty values count as set.
    ({"AWS_ENDPOINT_URL": ""}, "default_chain", "custom", ""),
    (
        {"AWS_ENDPOINT_URL": "http://localhost:4566", "AWS_REGION": ""},
        "default_chain",
        "",
        "http://localhost:4566",
    ),
    ({"AWS_WEB_IDENTITY_TOKEN_FILE": ""}, "web_identity", None, None),
]


@pytest.mark.parametrize("environ,branch,region_name,endpoint_url", ENVIRONMENTS)
def test_branch_selection(factory, environ, branch, region_name, endpoint_url):
    settings = GlueClientSettings.from_env(environ)

    client = create_glue_client(settings, factory)

    assert len(factory.calls) == 1
    assert factory.calls[0][0] == branch
    region = factory.calls[0][1]
    assert region.name == region_name
    assert region.endpoint_url == endpoint_url
    assert client == ("default-client" if branch == "default_chain" else "web-identity-client")


def test_web_identity_branch_receives_transport_and_strategy(factory):
    settings = GlueClientSettings.from_env(
        {
            "AWS_WEB_IDENTITY_TOKEN_FILE": "/var/run/secrets/token",
            "AWS_ROLE_ARN": "arn:aws:iam::123456789012:role/lake-reader",
            "AWS_ROLE_SESSION_NAME": "reader",
        }
    )

    create_glue_client(settings, factory)

    _, _, strategy, http_config = factory.calls[0]
    assert strategy == FederatedIdentity(
        token_file="/var/run/secrets/token",
        role_arn="arn:aws:iam::123456789012:role/lake-reader",
        role_session_name="reader",
    )
    assert isinstance(http_config, Config)
    assert http_config.max_pool_connections == 10


def test_environment_read_from_os_environ(monkeypatch, factory):
    monkeypatch.setenv("AWS_WEB_IDENTITY_TOKEN_FILE", "/var/run/secrets/token")

    create_glue_client(factory=factory)

    assert factory.calls[0][0] == "web_identity"


def test_factory_failure_is_construction_error():
    factory = FakeClientFactory()
    cause = RuntimeError("no transport")
    factory.web_identity = MagicMock(side_effect=cause)
    settings = GlueClientSettings(
        credentials=FederatedIdentity(token_file="/var/run/secrets/token")
    )

    with pytest.raises(ClientConstructionError) as exc_info:
        create_glue_client(settings, factory)

    assert exc_info.value.__cause__ is cause


def test_catalog_construction_error_propagates():
    factory = FakeClientFactory()
    factory.default_chain = MagicMock(side_effect=ValueError("bad region"))

    with pytest.raises(ClientConstructionError):
        GlueDataCatalog(settings=GlueClientSettings(), factory=factory)


def test_catalog_owns_constructed_client(factory):
    catalog = GlueDataCatalog(settings=GlueClientSettings(), factory=factory)

    assert catalog.client == "default-client"
    assert factory.calls[0][0] == "default_chain"


class TestGlueClientFactory:
    """The real factory against boto3, without network calls."""

    @patch("table_catalog.catalog.glue_client.boto3.client")
    def test_default_chain_passes_region_only(self, mock_boto_client):
        region = RegionConfig.custom("http://localhost:4566")

        GlueClientFactory().default_chain(region)

        mock_boto_client.assert_called_once_with(
            "glue", region_name="custom", endpoint_url="http://localhost:4566"
        )

    @patch("table_catalog.catalog.glue_client.boto3.Session")
    def test_web_identity_registers_refreshing_provider(self, mock_session_cls):
        strategy = FederatedIdentity(
            token_file="/var/run/secrets/token",
            role_arn="arn:aws:iam::123456789012:role/lake-reader",
        )
        http_config = Config(max_pool_connections=4)

        GlueClientFactory().web_identity(
            RegionConfig(name="us-east-1"), strategy, http_config
        )

        botocore_session = mock_session_cls.call_args[1]["botocore_session"]
        resolver = botocore_session.get_component("credential_provider")
        assert isinstance(resolver, CredentialResolver)
        assert isinstance(resolver.providers[0], WebIdentityCredentialProvider)
        mock_session_cls.return_value.client.assert_called_once_with(
            "glue",
            region_name="us-east-1",
            endpoint_url=None,
            config=http_config,
        )


def test_web_identity_provider_is_deferred_and_refreshing():
    provider = build_web_identity_provider(
        botocore.session.get_session(),
        FederatedIdentity(
            token_file="/var/run/secrets/token",
            role_arn="arn:aws:iam::123456789012:role/lake-reader",
        ),
    )

    credentials = provider.load()

    assert isinstance(credentials, DeferredRefreshableCredentials)
    assert credentials.method == "assume-role-with-web-identity"


def test_web_identity_provider_requires_role_arn():
    with pytest.raises(ClientConstructionError, match="AWS_ROLE_ARN"):
        build_web_identity_provider(
            botocore.session.get_session(),
            FederatedIdentity(token_file="/var/run/secrets/token"),
        )


def test_settings_default_to_default_chain():
    settings = GlueClientSettings.from_env({})

    assert settings.credentials == DefaultChain()
    assert settings.region == RegionConfig()
    assert not settings.region.is_custom
