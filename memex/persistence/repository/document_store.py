"""PostgreSQL implementation of the document store.

Each batch runs inside a SAVEPOINT of the request's transaction, so a
failed batch leaves no trace while the rest of the request's work stays
intact. Relative field values are resolved in SQL:

- `Increment(n)` becomes `col = col + n`
- `ArrayUnion(vs)` appends each value not already present
- `ArrayRemove(vs)` becomes `array_remove(col, v)` per value
"""

from typing import Any, Sequence

import logfire
from sqlalchemy import Table, any_, case, delete, func, literal, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from memex.domain.repository.document_store import (
    ArrayRemove,
    ArrayUnion,
    DocumentStore,
    DuplicateValue,
    Increment,
    Write,
    WriteOperation,
    WriteRejected,
)
from memex.persistence.tables import COLLECTION_TABLES, UNIQUE_INDEX_FIELDS

UNIQUE_VIOLATION = "23505"


class PostgresDocumentStore(DocumentStore):
    """PostgreSQL implementation of DocumentStore."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def commit(self, writes: Sequence[Write]) -> None:
        """Apply every write in order inside one SAVEPOINT.

        Raises:
            WriteRejected: If any write fails; the SAVEPOINT is rolled back
        """
        try:
            async with self.session.begin_nested():
                for write in writes:
                    await self._apply(write)
        except WriteRejected:
            raise
        except IntegrityError as e:
            duplicate = self._duplicate(e)
            if duplicate is None:
                logfire.error("Document store write failed", error=str(e))
                raise WriteRejected(f"Database rejected batch: {e}") from e
            raise duplicate from e
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Document store write failed", error=str(e))
            raise WriteRejected(f"Database rejected batch: {e}") from e

    @staticmethod
    def _duplicate(error: IntegrityError) -> DuplicateValue | None:
        """Unique-index violations become `DuplicateValue`, others None."""
        driver_error = error.orig
        if getattr(driver_error, "sqlstate", None) != UNIQUE_VIOLATION:
            return None
        constraint = getattr(driver_error.__cause__, "constraint_name", None)
        field = UNIQUE_INDEX_FIELDS.get(constraint or "")
        if field is None:
            return None
        return DuplicateValue(f"Duplicate {field}: {driver_error}", field)

    async def _apply(self, write: Write) -> None:
        table = COLLECTION_TABLES[write.target.collection]
        doc_id = write.target.id

        if write.operation is WriteOperation.SET:
            values = self._plain_values(table, write)
            stmt = pg_insert(table).values(id=doc_id, **values)
            stmt = stmt.on_conflict_do_update(index_elements=[table.c.id], set_=values)
            await self.session.execute(stmt)

        elif write.operation is WriteOperation.UPDATE:
            values = {
                field: self._resolve(table, write, field, value)
                for field, value in write.payload.items()
            }
            result = await self.session.execute(
                update(table).where(table.c.id == doc_id).values(**values)
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                raise WriteRejected(f"No document to update: {write.target}", write.target)

        else:
            await self.session.execute(delete(table).where(table.c.id == doc_id))

    @staticmethod
    def _column(table: Table, write: Write, field: str):
        if field == "id" or field not in table.c:
            raise WriteRejected(f"Unknown field '{field}' for {write.target}", write.target)
        return table.c[field]

    def _plain_values(self, table: Table, write: Write) -> dict[str, Any]:
        values = {}
        for field, value in write.payload.items():
            self._column(table, write, field)
            if isinstance(value, (Increment, ArrayUnion, ArrayRemove)):
                raise WriteRejected(
                    f"Field transforms are only allowed in updates: {write.target}",
                    write.target,
                )
            values[field] = value
        return values

    def _resolve(self, table: Table, write: Write, field: str, value: Any) -> Any:
        column = self._column(table, write, field)

        if isinstance(value, Increment):
            return column + value.amount

        if isinstance(value, ArrayUnion):
            expr = column
            for item in value.values:
                item_literal = literal(item, column.type.item_type)
                expr = case(
                    (item_literal == any_(expr), expr),
                    else_=func.array_append(expr, item_literal, type_=column.type),
                )
            return expr

        if isinstance(value, ArrayRemove):
            expr = column
            for item in value.values:
                expr = func.array_remove(
                    expr, literal(item, column.type.item_type), type_=column.type
                )
            return expr

        return value
