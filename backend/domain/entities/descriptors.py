"""
Field descriptor table for entity types.

Every merge, replace and required-field check walks the descriptors returned by
fields_of() instead of naming fields by hand, so a column added to a model is
picked up everywhere without further changes.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import MANYTOONE

from constants import IDENTIFIER_FIELD, VERSION_FIELD


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One writable field of an entity type.

    Attributes:
        name: Column attribute name, also the request DTO field name
        nullable: False when the store requires a value
        association: Relationship name when the column is a foreign key
        target: Model class the foreign key points at
    """

    name: str
    nullable: bool
    association: Optional[str] = None
    target: Optional[type] = None

    @property
    def required(self) -> bool:
        return not self.nullable

    @property
    def is_reference(self) -> bool:
        return self.association is not None

    @property
    def label(self) -> str:
        """Name used when reporting this field to a caller."""
        return self.association or self.name

    def read(self, entity: Any) -> Any:
        """
        Current value of the field on an entity.

        For references the related object wins over the raw foreign key, so an
        association assigned or cleared in memory but not yet flushed is still
        seen.
        """
        if self.is_reference:
            related = getattr(entity, self.association)
            if related is not None:
                return related.id
            if inspect(entity).attrs[self.association].history.has_changes():
                return None
        return getattr(entity, self.name)

    def is_null(self, entity: Any) -> bool:
        """True when neither the related object nor the raw value is set."""
        if self.is_reference and getattr(entity, self.association) is not None:
            return False
        return self.read(entity) is None


@lru_cache(maxsize=None)
def fields_of(model: type) -> Tuple[FieldDescriptor, ...]:
    """
    Writable fields of a mapped model, in declaration order.

    The identifier and the version counter are owned by the store and are
    never part of the table.

    Args:
        model: SQLAlchemy mapped class

    Returns:
        Tuple of field descriptors
    """
    mapper = inspect(model)
    references = {}
    for rel in mapper.relationships:
        if rel.direction is MANYTOONE:
            for column in rel.local_columns:
                references[column.key] = rel

    descriptors = []
    for attr in mapper.column_attrs:
        if attr.key in (IDENTIFIER_FIELD, VERSION_FIELD):
            continue
        column = attr.columns[0]
        rel = references.get(column.key)
        descriptors.append(FieldDescriptor(
            name=attr.key,
            nullable=bool(column.nullable),
            association=rel.key if rel is not None else None,
            target=rel.mapper.class_ if rel is not None else None,
        ))
    return tuple(descriptors)


def field_named(model: type, name: str) -> Optional[FieldDescriptor]:
    """Look up a descriptor by column or association name."""
    for descriptor in fields_of(model):
        if name in (descriptor.name, descriptor.association):
            return descriptor
    return None


def dependants_of(model: type) -> List[Tuple[type, FieldDescriptor]]:
    """
    Models holding a foreign key to ``model``.

    Args:
        model: Referenced model class

    Returns:
        (dependant model, referencing field) pairs, ordered by model name
    """
    result = []
    mappers = sorted(inspect(model).registry.mappers, key=lambda m: m.class_.__name__)
    for mapper in mappers:
        for descriptor in fields_of(mapper.class_):
            if descriptor.target is model:
                result.append((mapper.class_, descriptor))
    return result
