"""Configuration models for catalog clients and catalog backends.

Environment variables are read exactly once, by ``GlueClientSettings.from_env``,
into a tagged settings model. Client construction then dispatches on the
settings alone, so nothing downstream touches ``os.environ``.
"""

import os
from pathlib import Path
from typing import Annotated, Literal, Mapping, Optional, Union

import yaml
from botocore.config import Config
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ClientConstructionError

ENDPOINT_URL_ENV = "AWS_ENDPOINT_URL"
REGION_ENV = "AWS_REGION"
WEB_IDENTITY_TOKEN_FILE_ENV = "AWS_WEB_IDENTITY_TOKEN_FILE"
ROLE_ARN_ENV = "AWS_ROLE_ARN"
ROLE_SESSION_NAME_ENV = "AWS_ROLE_SESSION_NAME"

# Region name used with a custom endpoint when AWS_REGION is unset
CUSTOM_REGION_NAME = "custom"

# Database that table registrations land in unless the caller names one
DEFAULT_DATABASE_NAME = "unknown"


class RegionConfig(BaseModel):
    """Region the catalog client is bound to.

    ``name=None`` leaves region resolution to the SDK (AWS_DEFAULT_REGION,
    shared config files, instance metadata).
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    endpoint_url: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return self.endpoint_url is not None

    @classmethod
    def custom(cls, endpoint_url: str, name: Optional[str] = None) -> "RegionConfig":
        if name is None:
            name = CUSTOM_REGION_NAME
        return cls(name=name, endpoint_url=endpoint_url)

    @classmethod
    def default(cls) -> "RegionConfig":
        return cls()


class DefaultChain(BaseModel):
    """Let boto3 walk its default credential provider chain."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["default_chain"] = "default_chain"


class FederatedIdentity(BaseModel):
    """Exchange a mounted web identity token for temporary credentials.

    This is the setup injected into Kubernetes pods using IAM roles for
    service accounts.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["federated_identity"] = "federated_identity"
    token_file: str
    role_arn: Optional[str] = None
    role_session_name: Optional[str] = None


CredentialStrategy = Annotated[
    Union[DefaultChain, FederatedIdentity], Field(discriminator="kind")
]


class TransportConfig(BaseModel):
    """HTTP transport settings handed to botocore."""

    model_config = ConfigDict(frozen=True)

    connect_timeout: float = Field(default=60, gt=0)
    read_timeout: float = Field(default=60, gt=0)
    max_pool_connections: int = Field(default=10, ge=1)

    def to_botocore(self, region: Optional[RegionConfig] = None) -> Config:
        """Build the botocore ``Config`` for this transport.

        Raises:
            ClientConstructionError: If botocore rejects the settings
        """
        kwargs = {
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
            "max_pool_connections": self.max_pool_connections,
        }
        if region is not None and region.name:
            kwargs["region_name"] = region.name
        try:
            return Config(**kwargs)
        except (TypeError, ValueError) as e:
            raise ClientConstructionError(
                f"Failed to build HTTP transport configuration: {e}",
                details={"transport": self.model_dump()},
            ) from e


class GlueClientSettings(BaseModel):
    """Resolved region and credential strategy for a Glue client."""

    model_config = ConfigDict(frozen=True)

    region: RegionConfig = Field(default_factory=RegionConfig.default)
    credentials: CredentialStrategy = Field(default_factory=DefaultChain)
    transport: TransportConfig = Field(default_factory=TransportConfig)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        transport: Optional[TransportConfig] = None,
    ) -> "GlueClientSettings":
        """Resolve settings from environment variables.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)
            transport: Optional transport override

        Returns:
            Settings with the region and credential branch decided
        """
        env = os.environ if environ is None else environ

        # A variable set to an empty string still counts as present.
        if ENDPOINT_URL_ENV in env:
            region = RegionConfig.custom(env[ENDPOINT_URL_ENV], env.get(REGION_ENV))
        else:
            region = RegionConfig.default()

        if WEB_IDENTITY_TOKEN_FILE_ENV in env:
            credentials: Union[DefaultChain, FederatedIdentity] = FederatedIdentity(
                token_file=env[WEB_IDENTITY_TOKEN_FILE_ENV],
                role_arn=env.get(ROLE_ARN_ENV),
                role_session_name=env.get(ROLE_SESSION_NAME_ENV),
            )
        else:
            credentials = DefaultChain()

        return cls(
            region=region,
            credentials=credentials,
            transport=transport or TransportConfig(),
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    redaction: bool = False
    level: str = "INFO"


class CatalogConfig(BaseModel):
    """Catalog backend selection and registration defaults."""

    type: str = "glue"
    catalog_id: Optional[str] = None
    default_database: str = DEFAULT_DATABASE_NAME
    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("default_database")
    @classmethod
    def validate_default_database(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_database must not be empty")
        return v

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "CatalogConfig":
        """Load catalog configuration from a YAML file.

        The file may hold the settings at the top level or under a
        ``catalog`` key.

        Raises:
            ValueError: If the file is missing or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ValueError(f"Catalog config not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Catalog config must be a mapping: {path}")
        if isinstance(data.get("catalog"), dict):
            data = data["catalog"]

        try:
            return cls(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid catalog config {path}: {e}") from e
