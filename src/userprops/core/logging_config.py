"""Root log handler for the CLI, rendered by structlog.

Library modules log through plain stdlib loggers. Their records are passed
through structlog's ``ProcessorFormatter``: colored console lines on a
terminal, one JSON object per line otherwise.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from userprops.core.config import ObservabilityConfig


def build_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    """Formatter that renders stdlib records as console text or JSON."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            # ConsoleRenderer prints tracebacks itself
            *([structlog.processors.format_exc_info] if json_output else []),
            renderer,
        ],
    )


def setup_logging(config: ObservabilityConfig) -> None:
    """Replace the root handlers with one stderr handler at ``config.log_level``."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(json_output=not sys.stderr.isatty()))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("userprops").setLevel(level)
