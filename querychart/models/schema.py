# querychart/models/schema.py
"""Schema description models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RelationshipType(str, Enum):
    """Relationship type enumeration."""

    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


class ColumnDefinition(BaseModel):
    """Column information model."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    primary_key: bool = False
    not_null: bool = False
    default: Optional[str] = None
    unique: bool = False


class ForeignKeyReference(BaseModel):
    """Referenced side of a foreign key."""

    model_config = ConfigDict(frozen=True)

    table: str
    columns: list[str]


class ForeignKey(BaseModel):
    """Foreign key, composite keys kept as one unit."""

    model_config = ConfigDict(frozen=True)

    columns: list[str]
    references: ForeignKeyReference

    @model_validator(mode="after")
    def _check_arity(self) -> "ForeignKey":
        if len(self.columns) != len(self.references.columns):
            raise ValueError("foreign key column lists differ in length")
        return self


class TableDefinition(BaseModel):
    """Table information model."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[ColumnDefinition]
    foreign_keys: list[ForeignKey] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_columns(self) -> "TableDefinition":
        names = [col.name for col in self.columns]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate column names in table {self.name}")
        return self

    @property
    def primary_key(self) -> list[str]:
        return [col.name for col in self.columns if col.primary_key]


class Relationship(BaseModel):
    """Relationship inferred from a foreign key.

    ``from`` names the referenced side and ``to`` the referencing side, both
    as ``"table.col1,col2"``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: RelationshipType
    from_: str = Field(alias="from")
    to: str
    through: Optional[str] = None

    @model_validator(mode="after")
    def _check_through(self) -> "Relationship":
        if self.through is not None and self.type != RelationshipType.MANY_TO_MANY:
            raise ValueError("'through' is only valid for many-to-many relationships")
        return self


class SchemaDescription(BaseModel):
    """Structured description of a database's tables and relationships."""

    model_config = ConfigDict(frozen=True)

    tables: list[TableDefinition] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)

    def get_table(self, name: str) -> Optional[TableDefinition]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def to_prompt_dict(self) -> dict:
        """Dump the description the way prompts embed it."""
        return {"schema": self.model_dump(mode="json", by_alias=True, exclude_none=True)}
