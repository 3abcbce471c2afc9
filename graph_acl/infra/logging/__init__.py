"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation
- QueueHandler + QueueListener for non-blocking I/O
- Per-handler log levels (console vs file)
- OpenTelemetry trace correlation

Basic usage:
    from graph_acl.infra.logging import setup_logging
    import logging

    setup_logging()  # reads LOG_* settings once

    logger = logging.getLogger(__name__)
    logger.warning("Access denied", extra={"role": "guest", "resource": "admin_panel"})
"""

from graph_acl.infra.logging.config import build_dict_config, configure_logging, setup_logging, shutdown
from graph_acl.infra.logging.formatters import JSONFormatter

__all__ = [
    "JSONFormatter",
    "build_dict_config",
    "configure_logging",
    "setup_logging",
    "shutdown",
]
