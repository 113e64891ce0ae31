"""
Entity Service

Create, replace, partial update, delete and find for every resource, enforcing
the identity and existence rules before anything is written:

- create refuses a body that already carries an id
- replace and partial update require the body id to match the path id
- a body ``version`` must match the stored version
- required fields are checked on the complete new state
- referenced ids must resolve to existing entities

Scalars are written by the merge-patch engine; references are reassigned
through the relationship manager so parent collections follow.
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from config.settings import is_cascade_delete_enabled
from domain.aggregates.relationship_manager import set_singular_association
from domain.entities.descriptors import FieldDescriptor, fields_of, dependants_of
from domain.merge_patch import merge, full_state, apply_state, changed_fields
from domain.required_fields import require_fields
from dtos.internal import PageRequest
from dtos.request import EntityDTO
from exceptions import (
    ValidationError,
    NotFoundError,
    IdentifierExistsError,
    StaleVersionError,
    DeleteBlockedError,
    MergeTypeError,
)
from repositories import repository_for
from repositories.specifications import FieldEquals
from services.resources import Resource
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class EntityService:
    """Service for the write and read operations of one resource."""

    def __init__(self, db: Session, resource: Resource, cascade_delete: Optional[bool] = None):
        """
        Initialize EntityService.

        Args:
            db: Database session
            resource: Resource descriptor
            cascade_delete: Delete dependants instead of refusing; defaults to configuration
        """
        self.db = db
        self.resource = resource
        self.model = resource.model
        self.repository = repository_for(db, resource.model)
        self.cascade_delete = is_cascade_delete_enabled() if cascade_delete is None else cascade_delete

    @property
    def entity_name(self) -> str:
        return self.resource.entity_name

    @log_operation("create")
    def create(self, dto: EntityDTO) -> Any:
        """
        Create a new entity.

        Args:
            dto: Request body; every omitted field is null

        Returns:
            The persisted entity with its assigned id

        Raises:
            IdentifierExistsError: If the body carries an id
            ValidationError: If required fields are missing or a referenced id is unknown
        """
        self._check_dto(dto)
        if dto.id is not None:
            raise IdentifierExistsError(self.entity_name, dto.id)

        state = full_state(dto, self.model)
        require_fields(self.model, state)

        entity = self.model()
        with self._transaction():
            self._write(entity, state)
            self.repository.create(entity)
        logger.info(f"Created {self.entity_name} {entity.id}", extra={"entity_id": entity.id})
        return entity

    @log_operation("replace")
    def replace(self, id: int, dto: EntityDTO) -> Any:
        """
        Overwrite every field of an entity.

        Args:
            id: Path id
            dto: Full body; omitted fields become null

        Returns:
            The updated entity

        Raises:
            ValidationError: If the body id is null or differs from ``id``,
                or required fields are missing
            NotFoundError: If ``id`` is unknown
            StaleVersionError: If the body version is outdated
        """
        self._check_dto(dto)
        self._check_identity(id, dto)
        entity = self._get_or_raise(id)
        self._check_version(entity, dto)

        state = full_state(dto, self.model)
        require_fields(self.model, state)
        return self._update(entity, state)

    @log_operation("partial_update")
    def partial_update(self, id: int, dto: EntityDTO) -> Any:
        """
        Merge-patch an entity: only the fields the caller sent change.

        Args:
            id: Path id
            dto: Patch body

        Returns:
            The updated entity

        Raises:
            ValidationError: If the body id is null or differs from ``id``,
                or the merged state misses required fields
            NotFoundError: If ``id`` is unknown
            StaleVersionError: If the body version is outdated
        """
        self._check_dto(dto)
        self._check_identity(id, dto)
        entity = self._get_or_raise(id)
        self._check_version(entity, dto)

        state = merge(entity, dto)
        require_fields(self.model, state)
        return self._update(entity, state)

    def find_one(self, id: int) -> Any:
        """
        Get one entity with its singular associations loaded.

        Raises:
            NotFoundError: If ``id`` is unknown
        """
        return self._get_or_raise(id, eager=True)

    def find_all(self, request: PageRequest) -> Tuple[List[Any], int]:
        """
        One page of entities; associations load lazily on access.

        Returns:
            (entities, total count)
        """
        return self.repository.find_page(request, eager=False)

    def find_all_eager(self, request: PageRequest) -> Tuple[List[Any], int]:
        """Same result as find_all, with singular associations joined into the query."""
        return self.repository.find_page(request, eager=True)

    @log_operation("delete")
    def delete(self, id: int) -> None:
        """
        Delete an entity.

        While other entities reference it, the delete is refused unless
        cascading is enabled. With cascading, dependants that require the
        reference are deleted (recursively) and optional references are
        cleared.

        Raises:
            NotFoundError: If ``id`` is unknown
            DeleteBlockedError: If dependants exist and cascading is off
        """
        entity = self._get_or_raise(id)
        with self._transaction(id):
            self._delete(entity)

    def _check_dto(self, dto: Any) -> None:
        if not isinstance(dto, self.resource.request_dto):
            raise MergeTypeError(self.entity_name, type(dto).__name__)

    def _check_identity(self, id: int, dto: EntityDTO) -> None:
        if dto.id is None:
            raise ValidationError("Invalid id", field="id", reason="idnull", entity=self.entity_name)
        if dto.id != id:
            raise ValidationError("Invalid ID", field="id", reason="idinvalid", entity=self.entity_name)

    def _check_version(self, entity: Any, dto: EntityDTO) -> None:
        if dto.version is not None and dto.version != entity.version:
            raise StaleVersionError(self.entity_name, entity.id, expected=dto.version, actual=entity.version)

    def _get_or_raise(self, id: int, eager: bool = False) -> Any:
        entity = self.repository.get_by_id(id, eager=eager)
        if entity is None:
            raise NotFoundError(self.entity_name, id)
        return entity

    def _resolve_references(self, state: Dict[str, Any]) -> List[Tuple[FieldDescriptor, Any]]:
        """Load the entity behind every referenced id in ``state``."""
        resolved = []
        for descriptor in fields_of(self.model):
            if not descriptor.is_reference:
                continue
            ref_id = state.get(descriptor.name)
            target = None
            if ref_id is not None:
                target = repository_for(self.db, descriptor.target).get_by_id(ref_id)
                if target is None:
                    raise ValidationError(
                        f"{descriptor.target.__name__} {ref_id} not found",
                        field=descriptor.name,
                        reason="referencenotfound",
                        entity=self.entity_name,
                    )
            resolved.append((descriptor, target))
        return resolved

    def _write(self, entity: Any, state: Dict[str, Any]) -> None:
        references = self._resolve_references(state)
        with self.db.no_autoflush:
            apply_state(entity, state)
            for descriptor, target in references:
                current = getattr(entity, descriptor.association)
                if current is not target:
                    set_singular_association(entity, descriptor.association, target)

    def _update(self, entity: Any, state: Dict[str, Any]) -> Any:
        changed = changed_fields(entity, state)
        with self._transaction(entity.id):
            self._write(entity, state)
            self.repository.update(entity)
        logger.info(
            f"Updated {self.entity_name} {entity.id}: {', '.join(changed) or 'no changes'}",
            extra={"entity_id": entity.id},
        )
        return entity

    def _dependants(self, entity: Any) -> List[Tuple[FieldDescriptor, List[Any]]]:
        found = []
        for model, descriptor in dependants_of(type(entity)):
            rows = repository_for(self.db, model).find_matching(FieldEquals(descriptor.name, entity.id))
            if rows:
                found.append((descriptor, rows))
        return found

    def _delete(self, entity: Any) -> None:
        dependants = self._dependants(entity)
        if dependants and not self.cascade_delete:
            counts = {type(rows[0]).__name__: len(rows) for _, rows in dependants}
            raise DeleteBlockedError(type(entity).__name__, entity.id, counts)

        for descriptor, rows in dependants:
            for row in rows:
                if descriptor.required:
                    self._delete(row)
                else:
                    set_singular_association(row, descriptor.association, None)
        if dependants:
            self.db.flush()
            # Collections loaded before the cascade still list removed rows
            self.db.expire(entity)
            logger.info(
                f"Cascaded delete of {type(entity).__name__} {entity.id} to "
                + ", ".join(f"{len(rows)} {type(rows[0]).__name__}" for _, rows in dependants)
            )

        repository_for(self.db, type(entity)).delete(entity)

    @contextmanager
    def _transaction(self, entity_id: Optional[int] = None):
        """Commit on success; roll back and translate stale-row errors on failure."""
        try:
            yield
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise StaleVersionError(self.entity_name, entity_id) from e
        except Exception:
            self.db.rollback()
            raise
