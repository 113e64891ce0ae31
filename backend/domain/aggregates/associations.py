"""
Association table of the order aggregate.

Each entry declares one collection-valued association and the back-reference
on the child that owns the foreign key. The relationship manager resolves every
operation against this table, keyed by (parent type, child type).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from domain.entities.descriptors import field_named
from exceptions import ValidationError
from models import CustomerDetails, ShoppingCart, ProductOrder


@dataclass(frozen=True)
class Association:
    """
    A bidirectional parent/child association.

    Attributes:
        parent: Owning entity type
        child: Owned entity type
        collection: Name of the child set on the parent
        back_reference: Name of the parent reference on the child
        required: True when a persisted child must always have a parent
    """

    parent: type
    child: type
    collection: str
    back_reference: str
    required: bool

    @classmethod
    def declare(cls, parent: type, child: type, collection: str, back_reference: str) -> "Association":
        """Build an association, reading required-ness from the child's mapping."""
        descriptor = field_named(child, back_reference)
        return cls(parent, child, collection, back_reference, required=descriptor.required)

    @property
    def name(self) -> str:
        return f"{self.parent.__name__}.{self.collection}"


ASSOCIATIONS: Tuple[Association, ...] = (
    Association.declare(CustomerDetails, ShoppingCart, "carts", "customer_details"),
    Association.declare(ShoppingCart, ProductOrder, "orders", "cart"),
)


def _unknown(parent_type: type, detail: str) -> ValidationError:
    return ValidationError(
        f"No association declared for {parent_type.__name__} {detail}",
        field="association",
        reason="unknown",
        entity=parent_type.__name__,
    )


def association_between(parent_type: type, child_type: type) -> Association:
    """
    Resolve the association for a parent/child type pair.

    Raises:
        ValidationError: If the pair is not declared
    """
    for association in ASSOCIATIONS:
        if association.parent is parent_type and association.child is child_type:
            return association
    raise _unknown(parent_type, f"and {child_type.__name__}")


def association_of(parent_type: type, collection: Optional[str] = None) -> Association:
    """
    Resolve an association from the parent side.

    Args:
        parent_type: Owning entity type
        collection: Collection name; may be omitted when the parent owns exactly one

    Raises:
        ValidationError: If nothing, or more than one association, matches
    """
    matches = [
        a for a in ASSOCIATIONS
        if a.parent is parent_type and (collection is None or a.collection == collection)
    ]
    if len(matches) != 1:
        raise _unknown(parent_type, f"collection '{collection}'" if collection else "(no collection)")
    return matches[0]


def association_for_reference(child_type: type, back_reference: str) -> Optional[Association]:
    """Association whose back-reference is ``back_reference`` on ``child_type``, if any."""
    for association in ASSOCIATIONS:
        if association.child is child_type and association.back_reference == back_reference:
            return association
    return None
