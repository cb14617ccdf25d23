from typing import AsyncIterable
from dishka import Provider, Scope, provide
import logging

from messenger.config import Config
from messenger.console import Console
from messenger.core.db_manager import DatabaseManager, create_database_manager
from messenger.core.executor import QueryExecutor
from messenger.handlers.account import AccountHandlers
from messenger.handlers.chats import ChatHandlers
from messenger.handlers.lists import ContactHandlers
from messenger.session.context import SessionContext
from messenger.session.machine import MessengerSession

class AdaptersProvider(Provider):
    def __init__(self, config: Config, console: Console | None = None):
        super().__init__()
        self._config = config
        self._console = console

    @provide(scope=Scope.APP)
    def get_config(self) -> Config:
        return self._config

    @provide(scope=Scope.APP)
    def get_logger(self) -> logging.Logger:
        return logging.getLogger("messenger")

    @provide(scope=Scope.APP)
    def get_console(self, config: Config) -> Console:
        return self._console or Console(clear_screen=config.session.clear_screen)

    @provide(scope=Scope.APP)
    async def get_db_manager(self, config: Config) -> AsyncIterable[DatabaseManager]:
        db_manager = create_database_manager(config)
        await db_manager.initialize()
        yield db_manager
        await db_manager.dispose()

    @provide(scope=Scope.APP)
    async def get_executor(
            self,
            db_manager: DatabaseManager,
            console: Console,
            logger: logging.Logger
    ) -> AsyncIterable[QueryExecutor]:
        executor = await QueryExecutor.open(db_manager, console.stdout, logger.getChild("executor"))
        yield executor
        await executor.cleanup()

class HandlersProvider(Provider):
    @provide(scope=Scope.APP)
    def get_account_handlers(self, logger: logging.Logger) -> AccountHandlers:
        return AccountHandlers(logger.getChild("account"))

    @provide(scope=Scope.APP)
    def get_contact_handlers(self, logger: logging.Logger) -> ContactHandlers:
        return ContactHandlers(logger.getChild("contacts"))

    @provide(scope=Scope.APP)
    def get_chat_handlers(self, logger: logging.Logger) -> ChatHandlers:
        return ChatHandlers(logger.getChild("chats"))

class SessionProvider(Provider):
    @provide(scope=Scope.APP)
    def get_context(
            self,
            executor: QueryExecutor,
            console: Console,
            config: Config
    ) -> SessionContext:
        return SessionContext(
            executor=executor,
            console=console,
            settings=config.session
        )

    @provide(scope=Scope.APP)
    def get_session(
            self,
            ctx: SessionContext,
            account: AccountHandlers,
            contacts: ContactHandlers,
            chats: ChatHandlers,
            logger: logging.Logger
    ) -> MessengerSession:
        return MessengerSession(
            ctx=ctx,
            account=account,
            contacts=contacts,
            chats=chats,
            logger=logger.getChild("session")
        )
