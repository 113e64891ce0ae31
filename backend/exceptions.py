"""
Custom exception classes for the application.

This module defines the error taxonomy of the order aggregate. The API layer
maps each class to an HTTP status in utils/error_handlers.py; failures raised
by SQLAlchemy itself are not wrapped and surface as server errors.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ConflictError(ApplicationError):
    """Raised when a write conflicts with the current state of the store"""


class ValidationError(ApplicationError):
    """Raised when a request breaks an identity or required-field rule"""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        reason: str | None = None,
        entity: str | None = None,
    ):
        self.field = field
        self.reason = reason
        self.entity = entity
        details = {k: v for k, v in (("entity", entity), ("field", field), ("reason", reason)) if v is not None}
        super().__init__(message, details)


class RequiredFieldsError(ValidationError):
    """Raised when one or more required fields are null"""

    def __init__(self, entity: str, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Missing required field(s) on {entity}: {', '.join(self.missing_fields)}",
            field=self.missing_fields[0] if self.missing_fields else None,
            reason="required",
            entity=entity,
        )
        self.details["missing_fields"] = self.missing_fields


class IdentifierExistsError(ValidationError, ConflictError):
    """Raised when a new entity already carries a store-assigned identifier"""

    def __init__(self, entity: str, id: int):
        super().__init__(
            f"A new {entity} cannot already have an ID",
            field="id",
            reason="idexists",
            entity=entity,
        )
        self.details["id"] = id


class NotFoundError(ApplicationError):
    """Raised when an identifier is unknown to the store"""

    def __init__(self, entity: str, id: int):
        self.entity = entity
        self.id = id
        super().__init__(f"{entity} {id} not found", {"entity": entity, "id": id, "reason": "idnotfound"})


class StaleVersionError(ConflictError):
    """Raised when a write is based on an outdated version of the entity"""

    def __init__(self, entity: str, id: int, expected: int | None = None, actual: int | None = None):
        details = {"entity": entity, "id": id, "reason": "stale"}
        if expected is not None:
            details["expected_version"] = expected
        if actual is not None:
            details["actual_version"] = actual
        super().__init__(f"{entity} {id} was modified by another request", details)


class DeleteBlockedError(ConflictError):
    """Raised when deleting an entity that other entities still depend on"""

    def __init__(self, entity: str, id: int, dependants: dict[str, int]):
        self.dependants = dependants
        summary = ", ".join(f"{count} {name}" for name, count in dependants.items())
        super().__init__(
            f"{entity} {id} cannot be deleted while it is referenced by {summary}",
            {"entity": entity, "id": id, "reason": "haschildren", "dependants": dependants},
        )


class MergeTypeError(ApplicationError):
    """Raised when a patch payload does not belong to the target's entity type"""

    def __init__(self, target_type: str, patch_type: str):
        super().__init__(
            f"Cannot merge a {patch_type} patch into a {target_type}",
            {"target_type": target_type, "patch_type": patch_type},
        )
