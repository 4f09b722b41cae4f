"""
Storage collaborator - generic record access over the four entity kinds

Records are returned as plain dicts so grading and statistics never hold ORM
state past the request.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assessment.exceptions import StorageError
from assessment.models import Question, Test, TestResult, User
from assessment.utils.identifiers import normalize_id

logger = logging.getLogger(__name__)


class StorageService:
    """Find-by-id, find-many and create over test/question/result/user"""

    MODELS = {
        "test": Test,
        "question": Question,
        "result": TestResult,
        "user": User,
    }

    def __init__(self, db: Session):
        self.db = db

    def _model(self, kind: str):
        try:
            return self.MODELS[kind]
        except KeyError:
            raise ValueError(f"Unknown record kind: {kind}")

    def find_by_id(self, kind: str, record_id: Any) -> Optional[Dict[str, Any]]:
        """
        Load one record

        Args:
            kind: Entity kind
            record_id: Raw or canonical id

        Returns:
            Record dict or None if missing
        """
        model = self._model(kind)
        record_id = normalize_id(record_id, field=f"{kind} id")

        try:
            record = self.db.get(model, record_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load {kind} {record_id}: {str(e)}")
            raise StorageError(f"Failed to load {kind}") from e

        return record.to_dict() if record is not None else None

    def find_many(
        self,
        kind: str,
        where: Optional[Dict[str, Any]] = None,
        ids: Optional[Sequence[int]] = None,
        limit: int = 100,
        sort: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Load records matching equality filters and/or an id list

        Args:
            kind: Entity kind
            where: {column: value} equality filters
            ids: Restrict to these canonical ids
            limit: Maximum number of records
            sort: Column name, "-" prefix for descending

        Returns:
            List of record dicts
        """
        model = self._model(kind)

        if ids is not None and not ids:
            return []

        try:
            query = self.db.query(model)

            for column, value in (where or {}).items():
                query = query.filter(getattr(model, column) == value)

            if ids is not None:
                query = query.filter(model.id.in_(list(ids)))

            if sort:
                descending = sort.startswith("-")
                column = getattr(model, sort.lstrip("-"))
                if descending:
                    query = query.order_by(column.desc(), model.id.desc())
                else:
                    query = query.order_by(column.asc(), model.id.asc())

            records = query.limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to query {kind}: {str(e)}")
            raise StorageError(f"Failed to load {kind} records") from e

        return [record.to_dict() for record in records]

    def create(self, kind: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one record and commit

        Returns:
            The stored record dict, with its assigned id
        """
        model = self._model(kind)

        try:
            record = model(**data)
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create {kind}: {str(e)}")
            self.db.rollback()
            raise StorageError(f"Failed to save {kind}") from e

        return record.to_dict()
