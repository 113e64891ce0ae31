"""
Domain Entities

Entities are business objects with identity and lifecycle.
They are mutable and have a unique identifier that persists through their lifetime.

The mapped classes themselves live in models.py; this package holds what they
share:
- IdentityMixin: equality by store-assigned identifier
- FieldDescriptor / fields_of: per-type table of writable fields
"""

from .identity import IdentityMixin
from .descriptors import FieldDescriptor, fields_of, field_named, dependants_of

__all__ = ["IdentityMixin", "FieldDescriptor", "fields_of", "field_named", "dependants_of"]
