"""
Root logging setup for the web app.

Cloud Run captures stdout, so the deployed service logs through print().
Locally (ENVIRONMENT=local) a plain stream handler is used instead.

Call setup_cloud_logging() once when the FastAPI app starts.
"""

import logging
import os
import sys


class CloudLoggingHandler(logging.Handler):
    """Logging handler that writes formatted records to stdout via print()."""

    def emit(self, record):
        try:
            print(self.format(record), file=sys.stdout)
        except Exception:
            self.handleError(record)


class CloudLoggingFormatter(logging.Formatter):
    """Prefix every message with its level name."""

    def format(self, record):
        return f"{record.levelname}: {super().format(record)}"


def setup_cloud_logging(level: int | None = None) -> None:
    """Replace the root handlers with a stdout handler."""
    if level is None:
        level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    is_local = os.getenv("ENVIRONMENT", "") in ("local", "test") or not os.getenv("K_SERVICE")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler: logging.Handler
    if is_local:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(levelname)-8s %(name)s: %(message)s")
    else:
        handler = CloudLoggingHandler()
        formatter = CloudLoggingFormatter("%(name)s %(message)s")

    handler.setFormatter(formatter)
    handler.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # uvicorn installs its own handlers; route them through the root logger
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers = []
        uv_logger.propagate = True

    root_logger.info("Logging configured (%s)", "local" if is_local else "cloud run")
