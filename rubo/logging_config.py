"""Logging configuration for rubo.

structlog is layered on stdlib logging. Every module logs through
``structlog.get_logger("rubo.<subsystem>")``; the stdlib hierarchy routes
records to the console and, when a log directory is configured, to a
rotating ``rubo.log``:

    root   → ConsoleHandler (terminal)
      └─ rubo → RotatingFileHandler → rubo.log
"""

import logging
import logging.handlers
import sys

import structlog

LOGGER_PREFIX = "rubo"


def setup_logging(config=None) -> None:
    """Configure structlog + stdlib logging.

    Args:
        config: Optional Config instance. The first call (before config
            loads) uses console-only INFO logging without caching loggers;
            the second call applies the configured level and log file.
    """
    if config is not None:
        log_dir = config.log_dir
        level_name = str(config.logging_level).upper()
        max_bytes = config.logging_max_file_size_mb * 1024 * 1024
        backup_count = config.logging_backup_count
        cache_loggers = True
    else:
        log_dir = None
        level_name = "INFO"
        max_bytes = 10 * 1024 * 1024
        backup_count = 5
        cache_loggers = False

    level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers filter by level
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    )
    root_logger.addHandler(console_handler)

    rubo_logger = logging.getLogger(LOGGER_PREFIX)
    rubo_logger.setLevel(level)
    rubo_logger.handlers.clear()
    rubo_logger.propagate = True

    if log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            # Console logging still works; the robot must not die over this.
            print(
                f"WARNING: Cannot create log directory {log_dir}: {exc}. "
                "Falling back to console-only logging.",
                file=sys.stderr,
            )
        else:
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "rubo.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(
                structlog.stdlib.ProcessorFormatter(
                    processors=[
                        structlog.stdlib.add_logger_name,
                        structlog.stdlib.add_log_level,
                        structlog.processors.TimeStamper(fmt="iso"),
                        structlog.processors.format_exc_info,
                        structlog.dev.ConsoleRenderer(colors=False),
                    ],
                )
            )
            rubo_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )
