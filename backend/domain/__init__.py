"""
Domain Layer

This package contains the core business domain logic, separated from
persistence concerns and infrastructure.

Structure:
- entities/: Identity and field descriptors shared by the mapped entities
- value_objects/: Immutable value types without identity
- aggregates/: Association table and relationship manager
- merge_patch.py: Generic partial-update engine
- required_fields.py: Required-field validation
"""
