import io

import pytest
import pytest_asyncio

from messenger.config import Config, DBConfig, SessionConfig
from messenger.console import Console
from messenger.core.db_manager import create_database_manager
from messenger.core.executor import QueryExecutor
from messenger.handlers.account import AccountHandlers
from messenger.session.context import SessionContext


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        db=DBConfig(driver="sqlite", path=str(tmp_path / "messenger.db")),
        session=SessionConfig(page_size=10, clear_screen=False),
    )


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def err() -> io.StringIO:
    return io.StringIO()


@pytest_asyncio.fixture
async def db_manager(config):
    manager = create_database_manager(config)
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture
async def executor(db_manager, out):
    executor = await QueryExecutor.open(db_manager, out)
    yield executor
    await executor.cleanup()


@pytest.fixture
def make_ctx(executor, config, out, err):
    """Builds a session context whose console answers with the given lines."""
    def factory(*lines: str) -> SessionContext:
        stdin = io.StringIO("".join(f"{line}\n" for line in lines))
        console = Console(stdin=stdin, stdout=out, stderr=err, clear_screen=False)
        return SessionContext(executor=executor, console=console, settings=config.session)
    return factory


@pytest.fixture
def create_user(make_ctx):
    async def factory(login: str, password: str, phone: str):
        await AccountHandlers().create_user(make_ctx(login, password, phone))
    return factory


@pytest.fixture
def count_rows(executor):
    async def factory(statement: str, params: dict | None = None) -> int:
        return len(await executor.execute_query_rows(statement, params))
    return factory
