"""
RK Media Server v1.0.0 - Repository
Narrow persistence capability over one SQLAlchemy model
"""

from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar, Union

from sqlalchemy.orm import Session, selectinload

T = TypeVar("T")


class Repository(Generic[T]):
    """
    find_one / find / create / save / remove over a single model.

    Writes are committed immediately; callers needing several statements in
    one transaction use ``delete_where`` and ``remove`` with ``commit=False``
    and commit themselves.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def find_one(self, **criteria: Any) -> Optional[T]:
        return self.db.query(self.model).filter_by(**criteria).first()

    def find(self, relations: Iterable[str] = (), **criteria: Any) -> List[T]:
        query = self.db.query(self.model)
        for relation in relations:
            query = query.options(selectinload(getattr(self.model, relation)))
        if criteria:
            query = query.filter_by(**criteria)
        return query.all()

    def create(self, **fields: Any) -> T:
        """Build an unsaved instance"""
        return self.model(**fields)

    def save(self, entity: Union[T, List[T]]) -> Union[T, List[T]]:
        entities = entity if isinstance(entity, list) else [entity]
        try:
            self.db.add_all(entities)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for item in entities:
            self.db.refresh(item)
        return entity

    def remove(self, entity: T, commit: bool = True) -> None:
        self.db.delete(entity)
        if commit:
            self.db.commit()

    def delete_where(self, **criteria: Any) -> int:
        """Bulk delete matching rows without committing; returns row count"""
        return (
            self.db.query(self.model)
            .filter_by(**criteria)
            .delete(synchronize_session="fetch")
        )
