from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
import logging

from messenger.config import Config
from .database import Base


class DatabaseManager:
    def __init__(self, config: Config):
        self.config = config
        self.engine: AsyncEngine | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def dialect(self) -> str:
        return self.config.db.driver

    def get_url(self) -> str:
        raise NotImplementedError()

    def describe(self) -> str:
        raise NotImplementedError()

    async def initialize(self):
        # autocommit: every statement stands on its own
        self.engine = create_async_engine(
            url=self.get_url(),
            isolation_level="AUTOCOMMIT",
            echo=self.config.db.echo,
        )

    async def connect(self) -> AsyncConnection:
        """
        Open the connection held for the whole session
        :return: AsyncConnection
        """
        if not self.engine:
            await self.initialize()

        connection = await self.engine.connect()
        self._logger.info("Connected to %s", self.describe())
        return connection

    async def create_tables(self):
        if not self.engine:
            await self.initialize()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._logger.info("Schema provisioned on %s", self.describe())

    async def dispose(self):
        if self.engine:
            await self.engine.dispose()
            self.engine = None


class PostgresDatabaseManager(DatabaseManager):
    def get_url(self) -> str:
        db = self.config.db
        return f"postgresql+asyncpg://{db.user}:{db.password}@{db.host}:{db.port}/{db.name}"

    def describe(self) -> str:
        db = self.config.db
        return f"postgresql://{db.host}:{db.port}/{db.name}"


class SQLiteDatabaseManager(DatabaseManager):
    def get_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.config.db.path}"

    def describe(self) -> str:
        return f"sqlite:///{self.config.db.path}"

    async def initialize(self):
        await super().initialize()

        @event.listens_for(self.engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()


def create_database_manager(config: Config) -> DatabaseManager:
    if config.db.driver == "sqlite":
        return SQLiteDatabaseManager(config)
    return PostgresDatabaseManager(config)
