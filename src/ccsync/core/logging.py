"""
ccsync structured logging.

Console output goes to stderr so it never mixes with sync summaries or
--json output on stdout. An optional daily file log always records at
DEBUG, whatever the console level.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog

from ccsync.core.errors import SyncAbortedException

if TYPE_CHECKING:
    from ccsync.core.config import LoggingConfig
    from ccsync.sync.result import SyncResult


_configured = False


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.level))
        handlers.append(console_handler)

    if config.file_enabled:
        config.log_directory.mkdir(parents=True, exist_ok=True)
        log_file = config.log_directory / f"ccsync_{datetime.now():%Y%m%d}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    return handlers or [logging.NullHandler()]


def setup_logging(config: LoggingConfig) -> None:
    """Configure structlog on top of stdlib logging. Only the first call takes effect."""
    global _configured

    if _configured:
        return

    logging.basicConfig(
        level=logging.DEBUG,
        handlers=_build_handlers(config),
        format="%(message)s",
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name or "ccsync")


class SyncRunLogger:
    """
    Logs the start and outcome of one sync run.

    The outcome line carries the run's counts once record() has been
    given the finished result:

    - "Sync completed" at INFO when the block exits normally.
    - "Sync aborted" at WARNING when the approver stopped the run.
    - "Sync failed" at ERROR for any other exception, including the
      SyncFailedError raised for a run with per-candidate errors.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        **context: Any,
    ):
        self.logger = logger or get_logger()
        self.context = context
        self.counts: dict[str, int] = {}
        self.start_time: datetime | None = None

    def __enter__(self) -> SyncRunLogger:
        self.start_time = datetime.now()
        self.logger.debug("Sync started", **self.context)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        duration = (datetime.now() - self.start_time).total_seconds() if self.start_time else 0
        fields = {**self.context, **self.counts, "duration_seconds": duration}

        if exc_type is None:
            self.logger.info("Sync completed", **fields)
        elif issubclass(exc_type, SyncAbortedException):
            self.logger.warning("Sync aborted", reason=getattr(exc_val, "reason", ""), **fields)
        else:
            self.logger.error(
                "Sync failed",
                error_type=exc_type.__name__,
                error=str(exc_val),
                **fields,
            )

    def record(self, result: SyncResult) -> None:
        """Attach the run's counts to the outcome line."""
        self.counts = {
            "created": result.created,
            "updated": result.updated,
            "skipped": result.skipped,
            "conflicts": result.conflicts,
            "errors": len(result.errors),
        }
