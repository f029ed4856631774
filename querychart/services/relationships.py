# querychart/services/relationships.py
"""Relationship classification strategies for schema descriptions."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from querychart.models.schema import (
    ForeignKey,
    Relationship,
    RelationshipType,
    TableDefinition,
)


def _side(table: str, columns: Sequence[str]) -> str:
    return f"{table}.{','.join(columns)}"


class RelationshipClassifier(ABC):
    """Turns a foreign key into a relationship entry."""

    @abstractmethod
    def classify(
        self,
        table: TableDefinition,
        foreign_key: ForeignKey,
        tables: Sequence[TableDefinition]
    ) -> Relationship:
        """Classify one foreign key of ``table``.

        Args:
            table: The referencing table.
            foreign_key: The foreign key being classified.
            tables: Every table of the description, in description order.

        Returns:
            The relationship, ``from`` the referenced side ``to`` the
            referencing side.
        """


class HeuristicRelationshipClassifier(RelationshipClassifier):
    """Join-table heuristic, then primary-key matching, then one-to-many.

    Any other table that also references the foreign key's target is taken
    as a join table, which misclassifies unrelated tables sharing a common
    target as many-to-many.
    """

    def classify(
        self,
        table: TableDefinition,
        foreign_key: ForeignKey,
        tables: Sequence[TableDefinition]
    ) -> Relationship:
        source = _side(foreign_key.references.table, foreign_key.references.columns)
        target = _side(table.name, foreign_key.columns)

        through = self._find_join_table(table, foreign_key, tables)
        if through is not None:
            return Relationship(
                type=RelationshipType.MANY_TO_MANY,
                from_=source,
                to=target,
                through=through.name,
            )

        if self._links_primary_keys(table, foreign_key, tables):
            return Relationship(type=RelationshipType.ONE_TO_ONE, from_=source, to=target)

        return Relationship(type=RelationshipType.ONE_TO_MANY, from_=source, to=target)

    def _find_join_table(
        self,
        table: TableDefinition,
        foreign_key: ForeignKey,
        tables: Sequence[TableDefinition]
    ) -> Optional[TableDefinition]:
        target = foreign_key.references.table
        for other in tables:
            if other.name == table.name:
                continue
            if any(fk.references.table == target for fk in other.foreign_keys):
                return other
        return None

    def _links_primary_keys(
        self,
        table: TableDefinition,
        foreign_key: ForeignKey,
        tables: Sequence[TableDefinition]
    ) -> bool:
        local_pk = set(table.primary_key)
        if not local_pk or set(foreign_key.columns) != local_pk:
            return False

        referenced = next(
            (t for t in tables if t.name == foreign_key.references.table), None
        )
        if referenced is None:
            return False

        remote_pk = set(referenced.primary_key)
        return bool(remote_pk) and set(foreign_key.references.columns) == remote_pk
