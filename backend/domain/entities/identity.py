"""
Identity-based equality for persisted entities.
"""


class IdentityMixin:
    """
    Equality by store-assigned identifier.

    Two entities of the same type are equal when both carry the same non-null
    ``id``. An entity without an id equals only itself. The hash depends on the
    class alone, so an entity placed in a set before its first flush is still
    found there after the store assigns its id.
    """

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"<{type(self).__name__} id={self.id}>"
