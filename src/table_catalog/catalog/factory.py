"""Factory for creating data catalog backends."""

import logging
from typing import Any, Optional

from ..config import CatalogConfig, GlueClientSettings
from ..errors import InvalidDataCatalogError
from .base import DataCatalog

logger = logging.getLogger(__name__)

SUPPORTED_CATALOGS = ("glue", "memory")


def get_data_catalog(
    data_catalog: str,
    config: Optional[CatalogConfig] = None,
    client: Any = None,
) -> DataCatalog:
    """Create a data catalog backend by name.

    Args:
        data_catalog: Backend name ("glue" or "memory")
        config: Catalog configuration (defaults to ``CatalogConfig()``)
        client: Optional ready client for backends that need one

    Returns:
        Data catalog instance

    Raises:
        InvalidDataCatalogError: If the backend name is not supported
        ClientConstructionError: If the backend's client could not be built
    """
    config = config or CatalogConfig(type=data_catalog)
    catalog_type = data_catalog.strip().lower()

    if catalog_type == "glue":
        from .glue import GlueDataCatalog

        settings = None
        if client is None:
            settings = GlueClientSettings.from_env(transport=config.transport)
        return GlueDataCatalog(
            client=client,
            settings=settings,
            default_database=config.default_database,
        )
    elif catalog_type == "memory":
        from .memory import InMemoryDataCatalog

        return InMemoryDataCatalog(default_database=config.default_database)
    else:
        logger.error(
            f"Unsupported data catalog: {data_catalog}. "
            f"Supported catalogs: {', '.join(SUPPORTED_CATALOGS)}"
        )
        raise InvalidDataCatalogError(data_catalog)
