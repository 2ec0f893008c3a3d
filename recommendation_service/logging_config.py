"""
Logging setup for the recommendation service.

Records from Flask request threads and the catalog client go through one
queue and are written by a single listener thread. The HTTP client and the
development server are kept at WARNING unless debug logging is on.
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Per-request chatter from the Open Library session and the dev server
HTTP_LOGGERS = ("urllib3", "requests", "werkzeug")


class ThreadSafeLoggingConfig:
    """Owns the log queue and the listener that drains it to stdout."""

    def __init__(self):
        self._log_listener: Optional[logging.handlers.QueueListener] = None
        self._log_queue: Optional[Queue] = None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Route the root logger through a fresh queue, replacing any earlier setup.

        Args:
            debug: Log at DEBUG and leave library loggers untouched
        """
        if self._log_listener:
            self.stop()

        self._log_queue = Queue()
        queue_handler = logging.handlers.QueueHandler(self._log_queue)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(LOG_FORMAT)
        )

        self._log_listener = logging.handlers.QueueListener(
            self._log_queue, console_handler, respect_handler_level=True
        )
        self._log_listener.start()

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(queue_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        if not debug:
            self._quiet_http_loggers()

    def _quiet_http_loggers(self) -> None:
        """Raise the HTTP stack loggers to WARNING."""
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    def stop(self) -> None:
        """Flush pending records and stop the listener thread."""
        if self._log_listener:
            self._log_listener.stop()
            self._log_listener = None
        self._log_queue = None


# Process-wide instance behind setup_logging() and stop_logging()
logging_config = ThreadSafeLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """Start queue-based logging for the process."""
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    """Stop the shared listener; safe to call when logging was never started."""
    logging_config.stop()


def get_logger(name: str) -> logging.Logger:
    """Return the named logger; records reach the queue once logging is set up."""
    return logging.getLogger(name)
