"""AWS Glue Data Catalog backend."""

import asyncio
import logging
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..config import DEFAULT_DATABASE_NAME, GlueClientSettings
from ..errors import (
    CreateTableError,
    GetTableError,
    InconsistentMetadataError,
    MissingMetadataError,
)
from ..location import normalize_storage_location
from ..models import TableHandle, TableIdentity, TableMetadata
from .base import DataCatalog
from .glue_client import GlueClientFactory, create_glue_client

logger = logging.getLogger(__name__)


def build_create_table_request(
    catalog_id: Optional[str],
    database_name: str,
    table: TableHandle,
    metadata: TableMetadata,
) -> Dict[str, Any]:
    """Map a created table onto a Glue CreateTable request.

    Only existence and location are registered: columns, partition keys,
    owner, retention and serde info are left for Glue to default.

    Raises:
        InconsistentMetadataError: If metadata has no name
        ValueError: If database_name is empty
    """
    if not metadata.name:
        raise InconsistentMetadataError("name", details={"table_uri": table.table_uri})
    if not database_name or not database_name.strip():
        raise ValueError("database_name must not be empty")

    table_input: Dict[str, Any] = {
        "Name": metadata.name,
        "StorageDescriptor": {"Location": table.table_uri},
    }
    if metadata.description is not None:
        table_input["Description"] = metadata.description

    request: Dict[str, Any] = {
        "DatabaseName": database_name,
        "TableInput": table_input,
    }
    if catalog_id:
        request["CatalogId"] = catalog_id
    return request


class GlueDataCatalog(DataCatalog):
    """Data catalog backed by AWS Glue."""

    name = "glue"

    def __init__(
        self,
        client: Any = None,
        settings: Optional[GlueClientSettings] = None,
        default_database: str = DEFAULT_DATABASE_NAME,
        factory: Optional[GlueClientFactory] = None,
    ):
        """Initialize the Glue catalog.

        Args:
            client: Ready boto3 Glue client; built from ``settings`` when omitted
            settings: Client settings (defaults to the environment)
            default_database: Database used by registrations that name none
            factory: Client factory used when building the client

        Raises:
            ClientConstructionError: If the Glue client could not be built
        """
        if client is None:
            client = create_glue_client(settings, factory)
        self._client = client
        self.default_database = default_database

    @classmethod
    def from_client(cls, client: Any, **kwargs: Any) -> "GlueDataCatalog":
        return cls(client=client, **kwargs)

    @property
    def client(self) -> Any:
        return self._client

    async def get_table_storage_location(
        self,
        catalog_id: Optional[str],
        database_name: str,
        table_name: str,
    ) -> str:
        identity = TableIdentity(
            catalog_id=catalog_id,
            database_name=database_name,
            table_name=table_name,
        )
        request = {"DatabaseName": identity.database_name, "Name": identity.table_name}
        if identity.catalog_id:
            request["CatalogId"] = identity.catalog_id

        try:
            response = await asyncio.to_thread(self._client.get_table, **request)
        except (BotoCoreError, ClientError) as e:
            logger.error(
                f"Glue get_table failed for {identity.fqn}: {e}",
                extra={
                    "extra_data": {
                        "catalog": self.name,
                        "catalog_id": catalog_id,
                        "database": database_name,
                        "table": table_name,
                    }
                },
            )
            raise GetTableError(
                f"Failed to get Glue table {identity.fqn}: {e}",
                source=e,
                details={"database": database_name, "table": table_name},
            ) from e

        table = response.get("Table")
        if table is None:
            raise MissingMetadataError("Table", details={"table": identity.fqn})
        storage_descriptor = table.get("StorageDescriptor")
        if storage_descriptor is None:
            raise MissingMetadataError(
                "Storage Descriptor", details={"table": identity.fqn}
            )
        location = storage_descriptor.get("Location")
        if location is None:
            raise MissingMetadataError("Location", details={"table": identity.fqn})

        resolved = normalize_storage_location(location)
        logger.debug(
            f"Resolved {identity.fqn} to {resolved}",
            extra={
                "extra_data": {
                    "catalog": self.name,
                    "database": database_name,
                    "table": table_name,
                }
            },
        )
        return resolved

    async def record_table_storage_location(
        self,
        catalog_id: str,
        table: TableHandle,
        metadata: TableMetadata,
        database_name: Optional[str] = None,
    ) -> None:
        database = self.default_database if database_name is None else database_name
        request = build_create_table_request(catalog_id, database, table, metadata)

        try:
            await asyncio.to_thread(self._client.create_table, **request)
        except (BotoCoreError, ClientError) as e:
            logger.error(
                f"Glue create_table failed for {database}.{metadata.name}: {e}",
                extra={
                    "extra_data": {
                        "catalog": self.name,
                        "catalog_id": catalog_id,
                        "database": database,
                        "table": metadata.name,
                    }
                },
            )
            raise CreateTableError(
                f"Failed to create Glue table {database}.{metadata.name}: {e}",
                source=e,
                details={"database": database, "table": metadata.name},
            ) from e

        logger.info(
            f"Registered {database}.{metadata.name} at {table.table_uri}",
            extra={
                "extra_data": {
                    "catalog": self.name,
                    "database": database,
                    "table": metadata.name,
                    "event_type": "table_registered",
                }
            },
        )
