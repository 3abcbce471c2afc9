"""Root logger setup.

Handlers are declared through ``dictConfig`` and then moved behind a
``QueueListener``, so the root logger only holds one ``QueueHandler`` and
request handling never blocks on console or file I/O.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graph_acl.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_listener: QueueListener | None = None
_configured = False


def shutdown() -> None:
    """Flush queued records and stop the listener. Safe to call repeatedly."""
    global _listener

    if _listener is not None:
        _listener.stop()
        _listener = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging from LoggingSettings, once per process unless ``force``."""
    global _configured

    if _configured and not force:
        return

    if log_settings is None:
        from graph_acl.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _configured = True


def build_dict_config(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "graph-acl",
) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping for the given options."""
    formatter = "json" if json_logs else "text"
    handlers: dict[str, dict[str, Any]] = {}

    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": (console_level or log_level).upper(),
            "formatter": formatter,
        }
    if file_path:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": (file_level or log_level).upper(),
            "formatter": formatter,
            "filename": str(file_path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "graph_acl.infra.logging.formatters.JSONFormatter",
                "static": {"service": service_name},
            },
            "text": {"format": TEXT_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": log_level.upper(), "handlers": list(handlers)},
    }


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    capture_warnings: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "graph-acl",
    **kwargs: Any,
) -> None:
    """Install console/file handlers behind a QueueHandler on the root logger.

    Args:
        log_level: Root level, and the default for handlers without their own.
        console_level: Level for stderr output.
        file_level: Level for the rotating file.
        file_path: Log file; None disables file output.
        json_logs: JSON Lines when true, plain text otherwise.
        console_enabled: Write to stderr.
        capture_warnings: Route ``warnings.warn`` through logging.
        file_max_bytes: Rotation size.
        file_backup_count: Rotated files kept.
        service_name: ``service`` field on JSON records.
        **kwargs: Unknown options, logged and ignored.

    Example:
        configure_logging(log_level="DEBUG", json_logs=False, file_path="logs/acl.log")
    """
    global _listener

    shutdown()

    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        build_dict_config(
            log_level=log_level,
            console_level=console_level,
            file_level=file_level,
            file_path=file_path,
            json_logs=json_logs,
            console_enabled=console_enabled,
            file_max_bytes=file_max_bytes,
            file_backup_count=file_backup_count,
            service_name=service_name,
        )
    )
    logging.captureWarnings(capture_warnings)

    root = logging.getLogger()
    handlers = [h for h in root.handlers if not isinstance(h, QueueHandler)]
    for handler in list(root.handlers):
        root.removeHandler(handler)

    queue: Queue[logging.LogRecord] = Queue()
    if handlers:
        _listener = QueueListener(queue, *handlers, respect_handler_level=True)
        _listener.start()
        atexit.register(shutdown)
    root.addHandler(QueueHandler(queue))

    if kwargs:
        logger.debug("Ignoring unknown logging options: %s", ", ".join(sorted(kwargs)))
