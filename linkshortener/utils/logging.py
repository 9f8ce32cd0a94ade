"""JSON logging for the lambda handlers and services

Every lambda package calls `initialize_logging()` from its `__init__.py`, so
records from the DAO, service and handler layers share one stdout stream in
which each line is a single JSON object. The level comes from `LOG_LEVEL`.

Fields passed through `extra` become top level keys, next to the standard ones.
The handlers attach an `event` code (e.g. `REDIRECT_SUCCESS`, `PERSISTENCE_ERROR`)
and the services attach identifiers such as `shortcode` or `row`:

    logger.info('Created short link.', extra={'shortcode': 'Gh71TCN', 'minutes': 30})

    {"timestamp": "2025-10-15T12:00:00.000Z", "level": "INFO",
     "logger": "linkshortener.services.link_store", "message": "Created short link.",
     "shortcode": "Gh71TCN", "minutes": 30}

Values that are not JSON serializable, such as datetimes, are written with `str()`,
and exceptions logged with `logger.exception()` land in an `exception` field.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and key not in log:
                log[key] = value

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Route all records through JsonFormatter to stdout at the `LOG_LEVEL` level"""
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
