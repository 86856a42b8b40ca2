"""
Structured logging configuration for the marketplace API.

JSON lines (python-json-logger) when JSON_LOGS is set, readable text
otherwise. Every JSON record is stamped with the service name and the
deployment environment.
"""

import logging
import sys
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

# Loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}


class MarketplaceJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter adding service, environment and source fields.
    """

    def __init__(self, *args, service: str = "connectcut-api", environment: str = "development", **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service
        self.environment = environment

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = self.service
        log_record['environment'] = self.environment

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"
        if record.exc_info and record.exc_info[0] is not None:
            log_record['exc_type'] = record.exc_info[0].__name__


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service: str = "connectcut-api",
    environment: str = "development",
    stream: Optional[Any] = None
) -> None:
    """
    Configure the root logger once at startup.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_logs: Emit one JSON object per line instead of plain text
        service: Value of the "service" field on JSON records
        environment: Value of the "environment" field on JSON records
        stream: Output stream, stdout by default
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    if json_logs:
        handler.setFormatter(MarketplaceJsonFormatter(
            '%(timestamp)s %(level)s %(logger)s %(message)s',
            service=service,
            environment=environment,
        ))
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
