from typing import Any, TextIO
import logging
import sys

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql.elements import TextClause

from .database import SEQUENCE_TABLES
from .db_manager import DatabaseManager
from .interfaces import QueryExecutorInterface, Statement, Params


def as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class QueryExecutor(QueryExecutorInterface):
    """
    Runs statements over the single connection held for a session.

    Every call executes one statement, consumes its result and closes it
    before returning. The connection stays open until cleanup().
    """
    __slots__ = ("_connection", "_dialect", "_out", "_logger")

    def __init__(
            self,
            connection: AsyncConnection,
            dialect: str,
            out: TextIO | None = None,
            logger: logging.Logger | None = None
    ):
        self._connection = connection
        self._dialect = dialect
        self._out = out or sys.stdout
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    async def open(
            cls,
            db_manager: DatabaseManager,
            out: TextIO | None = None,
            logger: logging.Logger | None = None
    ) -> "QueryExecutor":
        connection = await db_manager.connect()
        return cls(connection, db_manager.dialect, out, logger)

    @property
    def dialect(self) -> str:
        return self._dialect

    async def _execute(self, statement: Statement, params: Params) -> Result:
        if not isinstance(statement, TextClause):
            statement = text(statement)
        self._logger.debug("Executing %s with %s", statement, params)
        return await self._connection.execute(statement, dict(params or {}))

    async def execute_update(self, statement: Statement, params: Params = None) -> None:
        try:
            result = await self._execute(statement, params)
            result.close()
        except Exception as e:
            self._logger.debug("Error executing update: %s", e)
            raise

    async def execute_query_count(self, statement: Statement, params: Params = None) -> int:
        try:
            result = await self._execute(statement, params)
            row = result.first()
            return 1 if row is not None else 0
        except Exception as e:
            self._logger.debug("Error executing query: %s", e)
            raise

    async def execute_query_print(self, statement: Statement, params: Params = None) -> int:
        try:
            result = await self._execute(statement, params)
            columns = list(result.keys())
            rows = result.fetchall()
        except Exception as e:
            self._logger.debug("Error executing query: %s", e)
            raise

        if rows:
            self._out.write("\t".join(columns) + "\t\n")
        for row in rows:
            self._out.write("".join(f"{as_text(value)}\t" for value in row) + "\n")
        self._out.flush()
        return len(rows)

    async def execute_query_rows(self, statement: Statement, params: Params = None) -> list[list[str | None]]:
        try:
            result = await self._execute(statement, params)
            return [[as_text(value) for value in row] for row in result.fetchall()]
        except Exception as e:
            self._logger.debug("Error executing query: %s", e)
            raise

    async def current_sequence_value(self, sequence_name: str) -> int:
        if self._dialect == "sqlite":
            table = SEQUENCE_TABLES.get(sequence_name)
            if table is None:
                self._logger.warning("Unknown sequence %s", sequence_name)
                return -1
            rows = await self.execute_query_rows(
                "SELECT seq FROM sqlite_sequence WHERE name = :name", {"name": table}
            )
        else:
            rows = await self.execute_query_rows(
                "SELECT currval(CAST(CAST(:name AS TEXT) AS regclass))", {"name": sequence_name}
            )

        if not rows or rows[0][0] is None:
            return -1
        return int(rows[0][0])

    async def cleanup(self) -> None:
        try:
            await self._connection.close()
        except Exception as e:
            self._logger.debug("Ignoring error while closing connection: %s", e)
