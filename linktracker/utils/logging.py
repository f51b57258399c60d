"""JSON logging for the lambda handlers

`initialize_logging()` runs once, when `linktracker.lambdas` is imported, so
every handler module logs through the same root configuration. Each record is
one JSON line on stdout (picked up by CloudWatch as is). Keys passed through
`extra=` become top-level fields:

    >>> logger.info('Link invalidated. Responding with 200.', extra={'code': 'aBsJu', 'event': 'LINK_INVALIDATED'})
    {"timestamp": "2026-10-19T12:00:00.000Z", "level": "INFO", "logger": "linktracker.lambdas.invalidate_link.app",
     "message": "Link invalidated. Responding with 200.", "code": "aBsJu", "event": "LINK_INVALIDATED"}

The level comes from LOG_LEVEL (default INFO).
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linktracker.utils.constants import LOG_LEVEL_ENV


# Attributes every LogRecord carries; anything else on a record came from `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    """Send all records to stdout as JSON, at the level named by LOG_LEVEL"""
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                },
            },
            'root': {
                'level': os.getenv(LOG_LEVEL_ENV, 'INFO').upper(),
                'handlers': ['stdout'],
            },
        }
    )
