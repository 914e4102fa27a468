"""Data catalog backends resolving table names to storage locations.

Supports:
- AWS Glue
- In-memory (tests and local runs)

Each backend implements the DataCatalog interface for:
- Resolving a table's storage location
- Recording a newly created table's location
"""

from .base import DataCatalog
from .factory import get_data_catalog
from .glue import GlueDataCatalog
from .memory import InMemoryDataCatalog

__all__ = [
    "DataCatalog",
    "GlueDataCatalog",
    "InMemoryDataCatalog",
    "get_data_catalog",
]
