import argparse
import asyncio
import logging
import sys

from dishka import make_async_container

from messenger.config import Config, load_config
from messenger.console import Console
from messenger.core.db_manager import DatabaseManager
from messenger.providers.dishka_app import AdaptersProvider, HandlersProvider, SessionProvider
from messenger.session.machine import MessengerSession

GREETING = """

*******************************************************
              User Interface
*******************************************************
"""


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="messenger", description="Console messenger")
    parser.add_argument("dbname", help="database name (file path with DB_DRIVER=sqlite)")
    parser.add_argument("port", type=int, help="database server port")
    parser.add_argument("user", help="database user")
    parser.add_argument("--env-file", default=None, help="read settings from this .env file")
    parser.add_argument("--init-schema", action="store_true", help="create the tables before starting")
    return parser.parse_args(argv)


def setup_logging(config: Config) -> None:
    logging.basicConfig(
        level=config.log.level.upper(),
        filename=config.log.file,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


async def main(config: Config, init_schema: bool = False, console: Console | None = None) -> int:
    logger = logging.getLogger(__name__)
    console = console or Console(clear_screen=config.session.clear_screen)

    container = make_async_container(
        AdaptersProvider(config, console),
        HandlersProvider(),
        SessionProvider(),
    )
    connected = False
    try:
        console.write("Connecting to database...", end="")
        try:
            if init_schema:
                db_manager = await container.get(DatabaseManager)
                await db_manager.create_tables()
            session = await container.get(MessengerSession)
        except Exception as e:
            logger.error("Unable to connect to database: %s", e)
            console.error(f"Error - Unable to Connect to Database: {e}")
            console.error("Make sure you started postgres on this machine")
            return 1
        connected = True
        console.write("Done")

        try:
            await session.run()
        except Exception as e:
            logger.exception("Session aborted")
            console.error(str(e))
            return 1
        return 0
    finally:
        if connected:
            console.write("Disconnecting from database...", end="")
        try:
            await container.close()
        except Exception as e:
            logger.debug("Ignoring error while disconnecting: %s", e)
        if connected:
            console.write("Done\n\nBye !")


def run(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_config(args.dbname, args.port, args.user, args.env_file)
    setup_logging(config)

    print(GREETING)
    sys.exit(asyncio.run(main(config, args.init_schema)))


if __name__ == "__main__":
    run()
