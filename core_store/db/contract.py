# core_store/db/contract.py

"""
Field-to-constraint table derived from the mapped models.

The table is read from SQLAlchemy metadata, so it always describes the
schema that ``init_db`` would actually create:

    >>> from core_store.db.contract import contract_for
    >>> [f.field for f in contract_for("CoreEntity")]
    ['id', 'title', 'content', 'ownerId', 'createdAt', 'updatedAt']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from sqlalchemy import Column, MetaData, String, Table, Text, Uuid
from sqlalchemy.types import DateTime, TypeDecorator

from core_store.db.models import Base


@dataclass(frozen=True)
class FieldContract:
    entity: str
    field: str
    type: str
    constraints: Tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.entity}.{self.field}: {self.type} [{', '.join(self.constraints)}]"


def _type_name(column: Column) -> str:
    col_type = column.type
    if isinstance(col_type, TypeDecorator):
        col_type = col_type.impl
    if isinstance(col_type, Uuid):
        return "UUID"
    if isinstance(col_type, DateTime):
        return "timestamp"
    # Text is a String subclass, so test it first
    if isinstance(col_type, Text):
        return "text"
    if isinstance(col_type, String):
        return "string"
    return str(col_type).lower()


def _entity_names(metadata: MetaData) -> Dict[str, str]:
    """Map table name -> mapped class name for the declarative registry."""
    names: Dict[str, str] = {}
    if metadata is Base.metadata:
        for mapper in Base.registry.mappers:
            table = mapper.local_table
            if isinstance(table, Table):
                names[table.name] = mapper.class_.__name__
    return names


def _constraints(
    column: Column, table: Table, entity_names: Dict[str, str]
) -> Tuple[str, ...]:
    out: List[str] = []
    managed = column.info.get("managed")

    if column.primary_key:
        out.append("primary key")
    if managed == "generated":
        out.append("generated")

    for fk in column.foreign_keys:
        ref_table = fk.column.table.name
        ref_table = entity_names.get(ref_table, ref_table)
        out.append(f"foreign key -> {ref_table}.{fk.column.name}")

    if column.unique or any(
        idx.unique and [c.name for c in idx.columns] == [column.name]
        for idx in table.indexes
    ):
        out.append("unique")

    if managed == "auto":
        out.append("auto-managed")
    elif not column.nullable and not column.primary_key and column.default is None:
        out.append("required")

    if column.default is not None and managed is None and column.default.is_scalar:
        out.append(f'default "{column.default.arg}"')

    return tuple(out)


def schema_contract(metadata: Optional[MetaData] = None) -> List[FieldContract]:
    """
    Return one ``FieldContract`` per column, tables in dependency order.
    """
    metadata = metadata if metadata is not None else Base.metadata
    entity_names = _entity_names(metadata)

    contract: List[FieldContract] = []
    for table in metadata.sorted_tables:
        entity = entity_names.get(table.name, table.name)
        for column in table.columns:
            contract.append(
                FieldContract(
                    entity=entity,
                    field=column.name,
                    type=_type_name(column),
                    constraints=_constraints(column, table, entity_names),
                )
            )
    return contract


def contract_for(entity: str, metadata: Optional[MetaData] = None) -> List[FieldContract]:
    return [f for f in schema_contract(metadata) if f.entity == entity]


__all__ = ["FieldContract", "schema_contract", "contract_for"]
