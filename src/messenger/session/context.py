from dataclasses import dataclass
import logging

from messenger.config import SessionConfig
from messenger.console import Console
from messenger.core.executor import QueryExecutor


@dataclass
class SessionContext:
    """Everything a handler needs: the executor, the console and session settings."""
    executor: QueryExecutor
    console: Console
    settings: SessionConfig

    def report_failure(self, logger: logging.Logger, action: str, error: Exception):
        logger.error("%s failed: %s", action, error)
        self.console.error(str(error))
