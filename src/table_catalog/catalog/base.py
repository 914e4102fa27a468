"""Base interface every data catalog backend implements."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import TableHandle, TableMetadata


class DataCatalog(ABC):
    """Resolves table names to storage locations and records new tables.

    Callers hold a ``DataCatalog`` and never a concrete backend. Both
    operations are single remote exchanges: no caching, no retries.
    """

    name: str = "data_catalog"

    @abstractmethod
    async def get_table_storage_location(
        self,
        catalog_id: Optional[str],
        database_name: str,
        table_name: str,
    ) -> str:
        """Get the storage location of a table.

        Args:
            catalog_id: Catalog to query, or None for the account default
            database_name: Database holding the table
            table_name: Table to resolve

        Returns:
            Normalized storage location URI

        Raises:
            ValueError: If database_name or table_name is empty
            MissingMetadataError: If the catalog entry lacks the table, its
                storage descriptor or its location
            GetTableError: If the remote lookup failed
        """
        pass

    @abstractmethod
    async def record_table_storage_location(
        self,
        catalog_id: str,
        table: TableHandle,
        metadata: TableMetadata,
        database_name: Optional[str] = None,
    ) -> None:
        """Register a newly created table and its location in the catalog.

        Args:
            catalog_id: Catalog to register the table in
            table: Handle of the created table; its URI becomes the location
            metadata: Table metadata; must carry a name
            database_name: Target database, or None for the backend default

        Raises:
            InconsistentMetadataError: If metadata has no name
            CreateTableError: If the remote create call failed
        """
        pass

    def __repr__(self) -> str:
        return self.__class__.__name__
