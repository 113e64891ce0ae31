"""
Merge-Patch Engine

One partial-update algorithm for every entity type. For each writable field
``f`` of the target's descriptor table:

    M[f] = P.f  if the patch supplied f
    M[f] = T.f  otherwise

"Supplied" means the field name is in the pydantic model's
``model_fields_set``, so an absent field and an explicit null are different:
sending ``{"payment_reference": null}`` clears the value, leaving the key out
keeps it. The identifier always comes from the target. Child collections are
not columns and never appear in the result.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from constants import IDENTIFIER_FIELD
from exceptions import MergeTypeError
from .entities.descriptors import fields_of


def _check_patch_type(target: Any, patch: Any) -> None:
    if not isinstance(patch, BaseModel) or getattr(type(patch), "entity_type", None) is not type(target):
        raise MergeTypeError(type(target).__name__, type(patch).__name__)


def snapshot(entity: Any) -> Dict[str, Any]:
    """
    Current field values of an entity, identifier included.

    References are given as the id of the referenced entity.
    """
    state = {IDENTIFIER_FIELD: entity.id}
    for descriptor in fields_of(type(entity)):
        state[descriptor.name] = descriptor.read(entity)
    return state


def merge(target: Any, patch: BaseModel) -> Dict[str, Any]:
    """
    Compute the merged state of ``target`` and ``patch``.

    The target is not modified.

    Args:
        target: Persisted entity
        patch: Request DTO registered for the target's type

    Returns:
        Field -> value mapping, with ``id`` equal to ``target.id``

    Raises:
        MergeTypeError: If the patch DTO belongs to another entity type
    """
    _check_patch_type(target, patch)
    supplied = patch.model_fields_set
    state = {IDENTIFIER_FIELD: target.id}
    for descriptor in fields_of(type(target)):
        if descriptor.name in supplied:
            state[descriptor.name] = getattr(patch, descriptor.name)
        else:
            state[descriptor.name] = descriptor.read(target)
    return state


def full_state(patch: BaseModel, model: Optional[type] = None) -> Dict[str, Any]:
    """
    State described by a full-replace body: every omitted field is null.

    Args:
        patch: Request DTO
        model: Entity type; defaults to the DTO's registered type

    Returns:
        Field -> value mapping, with ``id`` taken from the body
    """
    model = model or type(patch).entity_type
    state = {IDENTIFIER_FIELD: getattr(patch, IDENTIFIER_FIELD, None)}
    for descriptor in fields_of(model):
        state[descriptor.name] = getattr(patch, descriptor.name, None)
    return state


def apply_state(entity: Any, state: Dict[str, Any]) -> Any:
    """
    Write the scalar fields of ``state`` onto ``entity``.

    References are left alone; they are reassigned through the relationship
    manager so both sides of an association move together.
    """
    for descriptor in fields_of(type(entity)):
        if descriptor.is_reference or descriptor.name not in state:
            continue
        setattr(entity, descriptor.name, state[descriptor.name])
    return entity


def changed_fields(entity: Any, state: Dict[str, Any]) -> list:
    """Names of the fields whose value in ``state`` differs from the entity's."""
    return [
        descriptor.name
        for descriptor in fields_of(type(entity))
        if descriptor.name in state and state[descriptor.name] != descriptor.read(entity)
    ]
