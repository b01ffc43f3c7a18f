"""Structured logging (structlog on top of stdlib logging).

Every log call made while a request is in flight carries ``request_id``, and the
company endpoints additionally bind ``company_id``. Values such as salaries and
identifiers are rendered as strings in JSON output.
"""

import logging
import sys
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers kept at WARNING unless SQL echo is requested
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "httpcore")


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal | UUID):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return repr(value)


def setup_logging(debug: bool = False, sql_echo: bool = False) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        debug: Colored console output at DEBUG level instead of JSON at INFO.
        sql_echo: Let SQLAlchemy statement logging through.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: structlog.typing.Processor
    if debug:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer(default=_json_default)
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None, method: str | None = None, path: str | None = None
) -> None:
    """Bind the correlation id (and, when given, HTTP method and path) to the log context."""
    if request_id:
        bind_contextvars(request_id=request_id)
    if method and path:
        bind_contextvars(method=method, path=path)


def bind_company_context(company_id: UUID) -> None:
    """Tag subsequent log calls in this context with the company being operated on."""
    bind_contextvars(company_id=str(company_id))


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
