import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.result import Result

logger = logging.getLogger(__name__)

# Tables a conditional update may target
UPDATABLE_TABLES = {"teams", "games"}

# Timestamp column bumped by every conditional update, per table
TOUCH_COLUMNS = {"teams": "updated"}


class BaseRepository:
    """
    Runs parameterized SQL on the request's session. Database errors never
    escape: they are logged, the session is rolled back and a FAILED result
    comes back instead.
    """

    def __init__(self, db: Session):
        self.db = db

    def query(
        self,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        write: bool = False,
        silent: bool = False,
    ) -> Result[Any]:
        """
        Returns Result.ok(list of row mappings). For statements without a
        result set (DELETE without RETURNING) the value is the rowcount.
        """
        params = params or {}
        try:
            cursor = self.db.execute(text(sql), params)
            if cursor.returns_rows:
                rows = [dict(row._mapping) for row in cursor.all()]
            else:
                rows = cursor.rowcount
            if write:
                self.db.commit()
            return Result.ok(rows)
        except SQLAlchemyError as e:
            self.db.rollback()
            if not silent:
                logger.error(f"unable to query: {e}")
                logger.info(f"{sql} {params}")
            return Result.failed("unable to query")

    def conditional_update(
        self,
        table: str,
        row_id: int,
        fields: Sequence[Optional[str]],
        values: Sequence[Any],
    ) -> Result[List[dict]]:
        """
        UPDATE only the fields whose name is present.

        `fields` and `values` are parallel; a None field name drops its slot
        together with the value at the same position. A present name without
        a value is a programmer error.
        Field names go into the SQL as identifiers, so callers must only pass
        static column names.
        """
        if table not in UPDATABLE_TABLES:
            raise ValueError(f"unknown table: {table}")

        if len(fields) != len(values):
            raise ValueError("fields and values must be of equal length")

        pairs = [(f, v) for f, v in zip(fields, values) if isinstance(f, str)]

        if not pairs:
            return Result.failed("no fields to update")

        if any(v is None for _, v in pairs):
            raise ValueError("every present field needs a value")

        updates = [f"{field} = :v{i}" for i, (field, _) in enumerate(pairs)]
        params: Dict[str, Any] = {f"v{i}": value for i, (_, value) in enumerate(pairs)}
        params["id"] = row_id

        touch = TOUCH_COLUMNS.get(table)
        if touch:
            updates.append(f"{touch} = CURRENT_TIMESTAMP")

        sql = f"UPDATE {table} SET {', '.join(updates)} WHERE id = :id RETURNING *"
        return self.query(sql, params, write=True)
