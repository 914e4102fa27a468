"""Table identity and the storage engine types the catalog consumes."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TableIdentity(BaseModel):
    """Key of a catalog lookup: (optional catalog id, database, table)."""

    model_config = ConfigDict(frozen=True)

    catalog_id: Optional[str] = None
    database_name: str
    table_name: str

    @field_validator("database_name", "table_name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def fqn(self) -> str:
        return f"{self.database_name}.{self.table_name}"


class TableHandle(BaseModel):
    """Handle to a table opened or created by the storage engine."""

    table_uri: str
    version: Optional[int] = None


class TableMetadata(BaseModel):
    """Metadata the storage engine keeps for a table."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    partition_columns: List[str] = Field(default_factory=list)
    configuration: Dict[str, Any] = Field(default_factory=dict)
    created_time: Optional[int] = None  # epoch millis
