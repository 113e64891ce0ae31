"""
Required-field checks.

A field is required when its column is NOT NULL. Foreign keys are reported
under their association name (``customer_details`` rather than
``customer_details_id``).
"""

from typing import Any, Dict, List

from exceptions import RequiredFieldsError
from .entities.descriptors import fields_of


def validate_required(entity: Any) -> List[str]:
    """
    Names of required fields that are null on an entity, in declaration order.

    Args:
        entity: Mapped entity instance

    Returns:
        Missing field names; empty when the entity is complete
    """
    return [
        descriptor.label
        for descriptor in fields_of(type(entity))
        if descriptor.required and descriptor.is_null(entity)
    ]


def missing_required(model: type, state: Dict[str, Any]) -> List[str]:
    """Same check as validate_required, over a field -> value mapping."""
    return [
        descriptor.label
        for descriptor in fields_of(model)
        if descriptor.required and state.get(descriptor.name) is None
    ]


def require_fields(model: type, state: Dict[str, Any]) -> None:
    """
    Raises:
        RequiredFieldsError: Naming every missing required field
    """
    missing = missing_required(model, state)
    if missing:
        raise RequiredFieldsError(model.__name__, missing)
