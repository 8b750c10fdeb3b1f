"""SQL Foo Repository — four parameterized statements against the foos table.

Invariants:
    - One statement per call; writes commit immediately (no multi-statement transactions)
    - Rows are mapped to core Foo records before leaving this module
    - delete_foos removes EVERY row: there is no scoped delete
"""

import logging

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from foopoc.core.domain_types import Foo, FooId
from foopoc.core.errors import NotFoundError, StoreError
from foopoc.models.foo import Foo as FooRow

logger = logging.getLogger(__name__)


def _to_record(row) -> Foo:
    try:
        return Foo(id=FooId(int(row.id)), name=str(row.name))
    except (AttributeError, TypeError, ValueError) as e:
        raise StoreError("Decoding foo row", "R8DX2C") from e


class SqlFooRepository:
    """FooRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_foos(self) -> list[Foo]:
        try:
            result = await self._db.execute(
                select(FooRow.id, FooRow.name).order_by(FooRow.id),
            )
            rows = result.all()
        except SQLAlchemyError as e:
            raise StoreError("Querying foos from db", "R1QF7A") from e
        return [_to_record(row) for row in rows]

    async def create_foo(self, name: str) -> Foo:
        try:
            result = await self._db.execute(
                insert(FooRow)
                .values(name=name)
                .returning(FooRow.id, FooRow.name),
            )
            row = result.one()
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError("Inserting foo into db", "R2IN4B") from e
        return _to_record(row)

    async def delete_foos(self) -> int:
        try:
            result = await self._db.execute(
                delete(FooRow).execution_options(synchronize_session=False),
            )
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError("Deleting foos from db", "R3DL9C") from e
        deleted = result.rowcount or 0
        logger.info(f"Deleted {deleted} foos")
        return deleted

    async def update_foo(self, foo_id: FooId, name: str) -> Foo:
        try:
            result = await self._db.execute(
                update(FooRow)
                .where(FooRow.id == foo_id)
                .values(name=name)
                .returning(FooRow.id, FooRow.name)
                .execution_options(synchronize_session=False),
            )
            row = result.one_or_none()
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError("Updating foo in db", "R4UP6D") from e
        if row is None:
            raise NotFoundError("foo", foo_id, "R5NF0E")
        return _to_record(row)
