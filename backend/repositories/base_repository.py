"""
Base repository providing common CRUD and paging operations.
"""

from typing import Generic, TypeVar, List, Optional, Type, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import Session, joinedload

from constants import SortDirection, IDENTIFIER_FIELD
from dtos.internal import PageRequest
from exceptions import ValidationError
from .specifications import Specification

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Subclasses list the singular associations to load together with each row
    in ``eager_associations``.
    """

    eager_associations: Tuple[str, ...] = ()

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def eager_options(self) -> list:
        """Loader options joining every singular association in the same query."""
        return [joinedload(getattr(self.model, name)) for name in self.eager_associations]

    def create(self, obj: T) -> T:
        """
        Create a new record in the database.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance, with its id assigned
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: int, eager: bool = False) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value
            eager: Load singular associations in the same query

        Returns:
            Model instance or None if not found
        """
        query = self.db.query(self.model)
        if eager:
            query = query.options(*self.eager_options())
        return query.filter(self.model.id == id).first()

    def find_page(self, request: PageRequest, eager: bool = False) -> Tuple[List[T], int]:
        """
        Retrieve one page of records.

        Args:
            request: Page number, size and sort order
            eager: Load singular associations in the same query

        Returns:
            (records on the page, total number of records)

        Raises:
            ValidationError: If a sort field is not a column of the model
        """
        query = self.db.query(self.model)
        if eager:
            query = query.options(*self.eager_options())

        sortable = {attr.key for attr in inspect(self.model).column_attrs}
        order_by = []
        for order in request.effective_sort():
            if order.field not in sortable:
                raise ValidationError(
                    f"Cannot sort {self.model.__name__} by '{order.field}'",
                    field="sort",
                    reason="invalidsort",
                    entity=self.model.__name__,
                )
            column = getattr(self.model, order.field)
            order_by.append(column.desc() if order.direction is SortDirection.DESC else column.asc())
        if IDENTIFIER_FIELD not in {order.field for order in request.effective_sort()}:
            # Stable paging when the sort key has duplicates
            order_by.append(self.model.id.asc())

        total = self.db.query(self.model).count()
        items = query.order_by(*order_by).offset(request.offset).limit(request.size).all()
        return items, total

    def update(self, obj: T) -> T:
        """
        Flush pending changes of an existing record.

        Args:
            obj: Model instance with updated values

        Returns:
            Updated model instance
        """
        self.db.flush()
        return obj

    def delete(self, obj: T) -> None:
        """
        Delete a record from the database.

        Args:
            obj: Model instance to delete
        """
        self.db.delete(obj)
        self.db.flush()

    def count(self) -> int:
        """
        Count total records.

        Returns:
            Total number of records
        """
        return self.db.query(self.model).count()

    def exists(self, id: int) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).count() > 0

    def find_matching(self, spec: Specification[T]) -> List[T]:
        """
        Retrieve records satisfying a specification, ordered by id.

        Args:
            spec: Query criterion

        Returns:
            List of matching model instances
        """
        return self.db.query(self.model).filter(spec.to_sql_filter(self.model)).order_by(self.model.id).all()
