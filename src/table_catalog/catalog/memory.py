"""In-memory data catalog for tests and local runs."""

import logging
from typing import Dict, Optional

from ..config import DEFAULT_DATABASE_NAME
from ..errors import CreateTableError, InconsistentMetadataError, MissingMetadataError
from ..location import normalize_storage_location
from ..models import TableHandle, TableIdentity, TableMetadata
from .base import DataCatalog

logger = logging.getLogger(__name__)


class TableAlreadyExistsError(Exception):
    """Raised inside the in-memory store when a table is registered twice."""


def _identity(
    catalog_id: Optional[str], database_name: str, table_name: str
) -> TableIdentity:
    # An empty catalog ID addresses the account default, as in Glue.
    return TableIdentity(
        catalog_id=catalog_id or None,
        database_name=database_name,
        table_name=table_name,
    )


class InMemoryDataCatalog(DataCatalog):
    """Dict-backed catalog with the same semantics as the remote backends."""

    name = "memory"

    def __init__(self, default_database: str = DEFAULT_DATABASE_NAME):
        self.default_database = default_database
        self._locations: Dict[TableIdentity, str] = {}

    def seed(
        self,
        database_name: str,
        table_name: str,
        location: str,
        catalog_id: Optional[str] = None,
    ) -> None:
        """Store a raw (unnormalized) location, as a catalog writer would."""
        self._locations[_identity(catalog_id, database_name, table_name)] = location

    def __len__(self) -> int:
        return len(self._locations)

    async def get_table_storage_location(
        self,
        catalog_id: Optional[str],
        database_name: str,
        table_name: str,
    ) -> str:
        identity = _identity(catalog_id, database_name, table_name)
        location = self._locations.get(identity)
        if location is None:
            raise MissingMetadataError("Table", details={"table": identity.fqn})
        return normalize_storage_location(location)

    async def record_table_storage_location(
        self,
        catalog_id: str,
        table: TableHandle,
        metadata: TableMetadata,
        database_name: Optional[str] = None,
    ) -> None:
        if not metadata.name:
            raise InconsistentMetadataError("name", details={"table_uri": table.table_uri})
        if database_name is None:
            database_name = self.default_database

        identity = _identity(catalog_id, database_name, metadata.name)
        if identity in self._locations:
            cause = TableAlreadyExistsError(f"Table already exists: {identity.fqn}")
            raise CreateTableError(
                f"Failed to create table {identity.fqn}: {cause}", source=cause
            ) from cause

        self._locations[identity] = table.table_uri
        logger.info(
            f"Registered {identity.fqn} at {table.table_uri}",
            extra={
                "extra_data": {
                    "catalog": self.name,
                    "database": identity.database_name,
                    "table": identity.table_name,
                    "event_type": "table_registered",
                }
            },
        )
