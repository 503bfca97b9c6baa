"""
Centralized logging configuration.

Every record carries the id of the HTTP request that produced it, so the
log lines of one request (route, service, store, AI client) can be pulled
out together. The id is held in a context variable set by the audit
middleware; records logged outside a request show "-".

Output goes to stdout and to a daily file under logs/.
"""
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "pymongo", "multipart")

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

_configured = False


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure the root logger once per process.

    Later calls return the already configured root logger unchanged, so
    building several apps in one process (tests, scripts) does not stack
    handlers.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            the file always receives DEBUG and above
        log_dir: Directory for the daily log file, default <project>/logs

    Returns:
        The root logger
    """
    global _configured

    root = logging.getLogger()
    if _configured:
        return root

    log_dir = log_dir or Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"interview_coach_{datetime.now():%Y%m%d}.log"

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    request_ids = RequestIdFilter()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)

    for handler in (console, file_handler):
        handler.setFormatter(formatter)
        handler.addFilter(request_ids)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    root.debug(f"Logging configured: console={log_level.upper()}, file={log_file}")
    return root


def get_logger(name: str) -> logging.Logger:
    """Module logger; call as get_logger(__name__)."""
    return logging.getLogger(name)


class LoggerMixin:
    """
    Gives a class a `logger` property named after the class.

    Example:
        >>> class DocumentStore(LoggerMixin):
        ...     def close(self):
        ...         self.logger.info("Closing client")
    """

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(self.__class__.__name__)
