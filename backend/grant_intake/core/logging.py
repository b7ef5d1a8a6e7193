"""Structured JSON Logging.

Every record is emitted as one JSON object carrying the request ID of the
request that produced it. Applicant contact details passed through ``extra``
are masked before they reach the output.
"""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger import jsonlogger

from ..utils.generators import generate_request_id
from ..utils.strings import sanitize_log_data
from .config import settings

request_id_var: ContextVar[str] = ContextVar('request_id', default='no-request-id')

# httpx logs full request URLs at INFO, and Telegram URLs embed the bot token
QUIET_LOGGERS = {
    'httpx': logging.WARNING,
    'httpcore': logging.WARNING,
}


class GrantIntakeJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding request correlation and source location."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record.update(sanitize_log_data(dict(log_record)))

        log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['request_id'] = request_id_var.get()
        log_record['source'] = f"{record.filename}:{record.lineno}"
        log_record['function'] = record.funcName
        log_record['process_id'] = record.process


def setup_logging(level: str | None = None) -> logging.Logger:
    """Route all logging through a single JSON handler on stdout.

    Args:
        level: Level name; defaults to settings.LOG_LEVEL
    """
    level_name = level or settings.LOG_LEVEL

    root = logging.getLogger()
    root.setLevel(level_name)
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level_name)
    handler.setFormatter(GrantIntakeJsonFormatter('%(message)s'))
    root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    root.info(
        "Logging configured",
        extra={'log_level': level_name, 'environment': settings.ENVIRONMENT}
    )
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_request_id(request_id: str | None = None) -> str:
    """Bind a request ID to the current context, generating one if needed."""
    if request_id is None:
        request_id = generate_request_id()
    request_id_var.set(request_id)
    return request_id


def get_request_id() -> str:
    return request_id_var.get()
