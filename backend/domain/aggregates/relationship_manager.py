"""
Relationship Manager

Keeps both sides of a parent/child association in agreement: a child is in its
parent's set exactly when the child's back-reference is that parent.

Each operation resolves its association from the association table, runs with
autoflush suspended, and puts every touched child back on its previous parent
if anything fails part way.

Nothing here flushes. Unlinking a child whose back-reference is required leaves
an in-memory orphan; the caller decides whether that state is ever persisted.
"""

import logging
from contextlib import contextmanager, nullcontext
from typing import Any, Iterable, Optional, Set

from sqlalchemy.orm import object_session

from domain.entities.descriptors import field_named
from exceptions import ValidationError
from .associations import Association, association_between, association_of, association_for_reference

logger = logging.getLogger(__name__)


def _session_of(*entities: Any):
    for entity in entities:
        session = object_session(entity)
        if session is not None:
            return session
    return None


@contextmanager
def _atomic(association: Association, parent: Any, children: Iterable[Any]):
    children = list(children)
    session = _session_of(parent, *children)
    with session.no_autoflush if session is not None else nullcontext():
        saved = [(child, getattr(child, association.back_reference)) for child in children]
        try:
            yield
        except Exception:
            logger.warning(
                f"Restoring {len(saved)} {association.child.__name__} link(s) after failed update of {association.name}"
            )
            for child, previous in reversed(saved):
                setattr(child, association.back_reference, previous)
            raise


def _link(association: Association, parent: Any, child: Any) -> None:
    if getattr(child, association.back_reference) is not parent:
        # Back-populates moves the child out of its old parent's set and into this one
        setattr(child, association.back_reference, parent)
    children = getattr(parent, association.collection)
    if child not in children:
        children.add(child)


def _unlink(association: Association, parent: Any, child: Any) -> None:
    getattr(parent, association.collection).discard(child)
    if getattr(child, association.back_reference) is parent:
        setattr(child, association.back_reference, None)


def link_child(parent: Any, child: Any) -> Any:
    """
    Attach a child to a parent.

    Re-linking an already linked pair changes nothing. A child owned by another
    parent leaves that parent's set.

    Args:
        parent: Owning entity
        child: Entity to attach

    Returns:
        The child

    Raises:
        ValidationError: If no association joins the two types
    """
    association = association_between(type(parent), type(child))
    with _atomic(association, parent, [child]):
        _link(association, parent, child)
    return child


def unlink_child(parent: Any, child: Any) -> Any:
    """
    Detach a child from a parent.

    The child's back-reference is cleared only if it currently points at
    ``parent``; otherwise only the parent's set is touched.

    Raises:
        ValidationError: If no association joins the two types
    """
    association = association_between(type(parent), type(child))
    with _atomic(association, parent, [child]):
        _unlink(association, parent, child)
    return child


def replace_children(parent: Any, new_children: Iterable[Any], collection: Optional[str] = None) -> Set[Any]:
    """
    Make a parent's child set exactly ``new_children``.

    Members no longer wanted are unlinked, new members are linked.

    Args:
        parent: Owning entity
        new_children: Desired child set
        collection: Collection name, needed only if the parent owns several

    Returns:
        The parent's child set after the update

    Raises:
        ValidationError: If a member's type does not belong to the association
    """
    association = association_of(type(parent), collection)
    wanted = list(new_children)
    for child in wanted:
        if association_between(type(parent), type(child)) is not association:
            raise ValidationError(
                f"{type(child).__name__} cannot be a member of {association.name}",
                field="association",
                reason="unknown",
                entity=type(parent).__name__,
            )

    current = list(getattr(parent, association.collection))
    removed = [child for child in current if child not in wanted]
    with _atomic(association, parent, removed + wanted):
        for child in removed:
            _unlink(association, parent, child)
        for child in wanted:
            _link(association, parent, child)
    logger.debug(f"{association.name}: -{len(removed)} / {len(wanted)} member(s)")
    return getattr(parent, association.collection)


def set_singular_association(entity: Any, name: str, target: Any) -> Any:
    """
    Point a singular association of ``entity`` at ``target``.

    One-directional references are a plain assignment. A back-reference of a
    declared parent/child association goes through link_child/unlink_child so
    the parent's set follows.

    Args:
        entity: Entity holding the reference
        name: Association name (or its foreign key column name)
        target: New referenced entity, or None

    Returns:
        The entity

    Raises:
        ValidationError: If the association is unknown, required and target is
            None, or target has the wrong type
    """
    entity_name = type(entity).__name__
    descriptor = field_named(type(entity), name)
    if descriptor is None or not descriptor.is_reference:
        raise ValidationError(
            f"{entity_name} has no association '{name}'",
            field=name,
            reason="unknown",
            entity=entity_name,
        )
    if target is None and descriptor.required:
        raise ValidationError(
            f"{entity_name}.{descriptor.association} is required",
            field=descriptor.association,
            reason="required",
            entity=entity_name,
        )
    if target is not None and not isinstance(target, descriptor.target):
        raise ValidationError(
            f"{entity_name}.{descriptor.association} must be a {descriptor.target.__name__}",
            field=descriptor.association,
            reason="invalidtype",
            entity=entity_name,
        )

    association = association_for_reference(type(entity), descriptor.association)
    if association is None:
        setattr(entity, descriptor.association, target)
    elif target is not None:
        link_child(target, entity)
    else:
        current = getattr(entity, descriptor.association)
        if current is not None:
            unlink_child(current, entity)
    return entity


def children_of(parent: Any, collection: Optional[str] = None) -> Set[Any]:
    """Copy of a parent's current child set."""
    association = association_of(type(parent), collection)
    return set(getattr(parent, association.collection))
