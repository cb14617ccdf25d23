from typing import Any, Mapping
from abc import ABC, abstractmethod

from sqlalchemy.sql.elements import TextClause

Statement = str | TextClause
Params = Mapping[str, Any] | None


class QueryExecutorInterface(ABC):
    @abstractmethod
    async def execute_update(
            self,
            statement: Statement,
            params: Params = None
    ) -> None:
        """
        Runs a mutating statement (INSERT, UPDATE, DELETE or DDL).
        :param statement:
        :param params:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def execute_query_count(
            self,
            statement: Statement,
            params: Params = None
    ) -> int:
        """
        Runs a SELECT and returns 1 if it produced at least one row, else 0.
        :param statement:
        :param params:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def execute_query_print(
            self,
            statement: Statement,
            params: Params = None
    ) -> int:
        """
        Runs a SELECT, prints a header and the rows tab-separated.
        :param statement:
        :param params:
        :return: number of rows printed
        """
        raise NotImplementedError()

    @abstractmethod
    async def execute_query_rows(
            self,
            statement: Statement,
            params: Params = None
    ) -> list[list[str | None]]:
        """
        Runs a SELECT and returns every row as a list of text values.
        :param statement:
        :param params:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def current_sequence_value(
            self,
            sequence_name: str
    ) -> int:
        """
        Gets the last value generated by a sequence in this session.
        :param sequence_name:
        :return: the value, or -1 if there is none
        """
        raise NotImplementedError()

    @abstractmethod
    async def cleanup(self) -> None:
        """
        Closes the held connection, ignoring failures.
        :return:
        """
        raise NotImplementedError()
