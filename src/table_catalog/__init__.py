"""Pluggable table catalog: resolve and register table storage locations."""

import re
from pathlib import Path

from .catalog import DataCatalog, GlueDataCatalog, InMemoryDataCatalog, get_data_catalog
from .errors import (
    ClientConstructionError,
    CreateTableError,
    DataCatalogError,
    GetTableError,
    InconsistentMetadataError,
    InvalidDataCatalogError,
    MissingMetadataError,
    RemoteOperationError,
)
from .models import TableHandle, TableIdentity, TableMetadata

# Try to get version from installed package first
try:
    from importlib.metadata import version, PackageNotFoundError
    try:
        __version__ = version("table-catalog")
    except PackageNotFoundError:
        raise
except (ImportError, PackageNotFoundError):
    # Package not installed, read from pyproject.toml
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        with open(pyproject_path, "r", encoding="utf-8") as f:
            content = f.read()
            match = re.search(r'version\s*=\s*["\']([^"\']+)["\']', content)
            if match:
                __version__ = match.group(1)
            else:
                __version__ = "0.1.0"  # Fallback
    else:
        __version__ = "0.1.0"  # Fallback

__all__ = [
    "ClientConstructionError",
    "CreateTableError",
    "DataCatalog",
    "DataCatalogError",
    "GetTableError",
    "GlueDataCatalog",
    "InMemoryDataCatalog",
    "InconsistentMetadataError",
    "InvalidDataCatalogError",
    "MissingMetadataError",
    "RemoteOperationError",
    "TableHandle",
    "TableIdentity",
    "TableMetadata",
    "__version__",
    "get_data_catalog",
]
