"""Logging setup for the cli."""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import structlog


def initialize(log_directory: Path, stderr_level: int, file_level: int) -> None:
    """Sends logs to stderr and to a new timestamped file in log_directory."""
    shared: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    root = logging.getLogger("identity_user_import")
    root.setLevel(min(stderr_level, file_level))
    root.propagate = False
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(stderr_level)
    stderr.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=False),
            ],
            foreign_pre_chain=shared,
        ),
    )
    root.addHandler(stderr)

    log_directory.mkdir(parents=True, exist_ok=True)
    started = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    file = logging.FileHandler(log_directory / f"iduser-{started}.log")
    file.setLevel(file_level)
    file.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            foreign_pre_chain=shared,
        ),
    )
    root.addHandler(file)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
