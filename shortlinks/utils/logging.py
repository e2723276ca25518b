"""JSON logging for the Lambda handlers

Every Lambda package calls `initialize_logging()` from its `__init__.py`, so
logging is configured before the handler module logs anything. Records are
written to stdout, one JSON object per line, for CloudWatch to pick up:

    {
        "timestamp": "2025-12-26T12:00:00.000Z",
        "level": "INFO",
        "logger": "shortlinks.lambdas.shorten_url.app",
        "message": "Shortened URL. Responding with 200.",
        "shortcode": "aZ3kQ1X",
        "event": "SHORT_URL_CREATED"
    }
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shortlinks.constants import ENV


# boto3 and its HTTP stack are chatty at DEBUG
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, including its `extra` fields, as one JSON line"""

    RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in self.RESERVED_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        # Extras aren't guaranteed to be JSON-serializable
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {'()': JsonFormatter},
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
