"""Construction of the boto3 client backing the Glue data catalog."""

import logging
from typing import Any, Optional

import boto3
import botocore.session
from botocore.config import Config
from botocore.credentials import (
    AssumeRoleWithWebIdentityCredentialFetcher,
    CredentialProvider,
    CredentialResolver,
    DeferredRefreshableCredentials,
)
from botocore.utils import FileWebIdentityTokenLoader

from ..config import FederatedIdentity, GlueClientSettings, RegionConfig
from ..errors import ClientConstructionError

logger = logging.getLogger(__name__)

GLUE_SERVICE_NAME = "glue"


class WebIdentityCredentialProvider(CredentialProvider):
    """Credential provider backed by AssumeRoleWithWebIdentity.

    Credentials are fetched lazily and refreshed by botocore before they
    expire, re-reading the token file on every refresh.
    """

    METHOD = "assume-role-with-web-identity"
    CANONICAL_NAME = "AssumeRoleWithWebIdentity"

    def __init__(self, fetcher: AssumeRoleWithWebIdentityCredentialFetcher):
        super().__init__()
        self._fetcher = fetcher

    def load(self) -> DeferredRefreshableCredentials:
        return DeferredRefreshableCredentials(
            method=self.METHOD,
            refresh_using=self._fetcher.fetch_credentials,
        )


def build_web_identity_provider(
    botocore_session: botocore.session.Session,
    strategy: FederatedIdentity,
) -> WebIdentityCredentialProvider:
    """Build an auto-refreshing web identity provider for ``strategy``.

    Raises:
        ClientConstructionError: If the role ARN is missing or botocore
            rejects the provider setup
    """
    if not strategy.role_arn:
        raise ClientConstructionError(
            "Web identity credentials require a role ARN (AWS_ROLE_ARN)",
            details={"token_file": strategy.token_file},
        )

    extra_args = {}
    if strategy.role_session_name:
        extra_args["RoleSessionName"] = strategy.role_session_name

    try:
        fetcher = AssumeRoleWithWebIdentityCredentialFetcher(
            client_creator=botocore_session.create_client,
            web_identity_token_loader=FileWebIdentityTokenLoader(strategy.token_file),
            role_arn=strategy.role_arn,
            extra_args=extra_args,
        )
    except Exception as e:
        raise ClientConstructionError(
            f"Failed to build web identity credential provider: {e}",
            details={"token_file": strategy.token_file, "role_arn": strategy.role_arn},
        ) from e

    return WebIdentityCredentialProvider(fetcher)


class GlueClientFactory:
    """Builds Glue clients, one method per credential strategy.

    Tests substitute this factory to observe which branch was taken.
    """

    def default_chain(self, region: RegionConfig) -> Any:
        """Client relying on boto3's default credential provider chain."""
        return boto3.client(
            GLUE_SERVICE_NAME,
            region_name=region.name,
            endpoint_url=region.endpoint_url,
        )

    def web_identity(
        self,
        region: RegionConfig,
        strategy: FederatedIdentity,
        http_config: Config,
    ) -> Any:
        """Client with an explicit transport and web identity credentials."""
        botocore_session = botocore.session.get_session()
        if region.name:
            botocore_session.set_config_variable("region", region.name)

        provider = build_web_identity_provider(botocore_session, strategy)
        botocore_session.register_component(
            "credential_provider", CredentialResolver(providers=[provider])
        )

        session = boto3.Session(botocore_session=botocore_session)
        return session.client(
            GLUE_SERVICE_NAME,
            region_name=region.name,
            endpoint_url=region.endpoint_url,
            config=http_config,
        )


def create_glue_client(
    settings: Optional[GlueClientSettings] = None,
    factory: Optional[GlueClientFactory] = None,
) -> Any:
    """Create a Glue client for the resolved region and credential strategy.

    Args:
        settings: Resolved settings (defaults to ``GlueClientSettings.from_env()``)
        factory: Client factory (defaults to ``GlueClientFactory()``)

    Returns:
        boto3 Glue client

    Raises:
        ClientConstructionError: If the transport or credential provider
            could not be built
    """
    settings = settings or GlueClientSettings.from_env()
    factory = factory or GlueClientFactory()
    region = settings.region
    strategy = settings.credentials

    try:
        if isinstance(strategy, FederatedIdentity):
            http_config = settings.transport.to_botocore(region)
            client = factory.web_identity(region, strategy, http_config)
        else:
            client = factory.default_chain(region)
    except ClientConstructionError as e:
        logger.error(f"Failed to create Glue client: {e}")
        raise
    except Exception as e:
        logger.error(f"Failed to create Glue client: {e}")
        raise ClientConstructionError(
            f"Failed to create Glue client: {e}",
            details={"credentials": strategy.kind, "region": region.name},
        ) from e

    logger.info(
        f"Created Glue client using {strategy.kind} credentials",
        extra={
            "extra_data": {
                "region": region.name,
                "endpoint_url": region.endpoint_url,
                "credentials": strategy.kind,
            }
        },
    )
    return client
