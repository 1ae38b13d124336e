"""
Logging setup for HAProxy Admin
"""

import logging
import time
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """Configure the root logger once for the whole process"""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    logging.getLogger("haproxy_admin").setLevel(getattr(logging, level, logging.INFO))


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any):
    """Log a message with key=value context appended"""
    if context:
        details = " ".join(f"{key}={value}" for key, value in context.items())
        message = f"{message} ({details})"
    logger.log(getattr(logging, level.upper(), logging.INFO), message)


class PerformanceLogger:
    """Context manager logging how long an operation took"""

    def __init__(self, logger: logging.Logger, operation: str, **context: Any):
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        duration_ms = round((time.perf_counter() - self.start_time) * 1000, 2)
        if exc_type is None:
            log_with_context(self.logger, "DEBUG", f"{self.operation} completed",
                             duration_ms=duration_ms, **self.context)
        else:
            log_with_context(self.logger, "WARNING", f"{self.operation} failed",
                             duration_ms=duration_ms, error=exc_value, **self.context)
        return False
