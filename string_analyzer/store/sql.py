import logging
from contextlib import contextmanager
from datetime import timezone
from typing import List, Tuple

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from string_analyzer.database import init_db, make_engine, make_session_factory
from string_analyzer.models.string_analysis import StringAnalysis
from string_analyzer.schemas.string import StringProperties, StringResource
from string_analyzer.services.analyzer import compute_sha256
from string_analyzer.services.filters import FilterSet, filter_resources
from string_analyzer.store.base import ReadWriteLock, StringStore, paginate
from string_analyzer.store.errors import (
    StorageError,
    StringAlreadyExistsError,
    StringNotFoundError,
)

logger = logging.getLogger(__name__)


def to_resource(row: StringAnalysis) -> StringResource:
    """Convert a database row into the API resource"""
    created_at = row.created_at
    # SQLite hands back naive datetimes; everything is stored in UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    return StringResource(
        id=row.id,
        value=row.value,
        properties=StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=row.character_frequency_map
        ),
        created_at=created_at
    )


def scalar_conditions(filters: FilterSet) -> list:
    """SQL conditions for the filters the database can evaluate directly"""
    conditions = []

    if filters.get("is_palindrome") is not None:
        conditions.append(StringAnalysis.is_palindrome == filters["is_palindrome"])

    if filters.get("min_length") is not None:
        conditions.append(StringAnalysis.length >= filters["min_length"])

    if filters.get("max_length") is not None:
        conditions.append(StringAnalysis.length <= filters["max_length"])

    if filters.get("word_count") is not None:
        conditions.append(StringAnalysis.word_count == filters["word_count"])

    return conditions


class SQLStringStore(StringStore):
    """SQLAlchemy-backed store.

    Scalar filters are pushed down into the query; the frequency-map lookup
    for ``contains_character`` runs through the shared predicate evaluator on
    the decoded rows, so both backends agree on every filter.
    """

    def __init__(self, database_url: str):
        self.engine = make_engine(database_url)
        self._session_factory = make_session_factory(self.engine)
        self._lock = ReadWriteLock()
        init_db(self.engine)

    @contextmanager
    def _session(self):
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error: {e}")
            raise StorageError(str(e)) from e
        finally:
            db.close()

    def _find(self, db: Session, value: str):
        # the primary key is the hash of the value; the value check guards collisions
        return db.query(StringAnalysis).filter(
            StringAnalysis.id == compute_sha256(value),
            StringAnalysis.value == value
        ).first()

    def create(self, resource: StringResource) -> StringResource:
        props = resource.properties
        db_string = StringAnalysis(
            id=resource.id,
            value=resource.value,
            length=props.length,
            is_palindrome=props.is_palindrome,
            unique_characters=props.unique_characters,
            word_count=props.word_count,
            sha256_hash=props.sha256_hash,
            character_frequency_map=dict(props.character_frequency_map),
            created_at=resource.created_at
        )

        with self._lock.write():
            db: Session = self._session_factory()
            try:
                db.add(db_string)
                db.commit()
            except IntegrityError:
                db.rollback()
                raise StringAlreadyExistsError(resource.value) from None
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error creating string analysis: {e}")
                raise StorageError(str(e)) from e
            finally:
                db.close()
        return resource

    def get(self, value: str) -> StringResource:
        with self._lock.read(), self._session() as db:
            row = self._find(db, value)
            if row is None:
                raise StringNotFoundError(value)
            return to_resource(row)

    def delete(self, value: str) -> None:
        with self._lock.write(), self._session() as db:
            row = self._find(db, value)
            if row is None:
                raise StringNotFoundError(value)
            db.delete(row)
            db.commit()

    def exists(self, value: str) -> bool:
        with self._lock.read(), self._session() as db:
            return self._find(db, value) is not None

    def count(self) -> int:
        with self._lock.read(), self._session() as db:
            return db.query(StringAnalysis).count()

    def list(self, filters: FilterSet, limit: int, offset: int) -> Tuple[List[StringResource], int]:
        with self._lock.read(), self._session() as db:
            query = db.query(StringAnalysis)

            conditions = scalar_conditions(filters)
            if conditions:
                query = query.filter(and_(*conditions))

            rows = query.order_by(StringAnalysis.created_at, StringAnalysis.id).all()
            resources = [to_resource(row) for row in rows]

        return paginate(filter_resources(resources, filters), limit, offset)

    def close(self) -> None:
        self.engine.dispose()
