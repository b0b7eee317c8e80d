"""Structured logging configuration using structlog."""

import logging
import sys

import structlog


def configure_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Configure structlog for structured logging.

    Output goes to stderr: stdout is reserved for JSON-RPC messages.

    Args:
        log_level: Logging level string (debug/info/warning/error).
        json_output: If True, output JSON lines. If False, plain console lines.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # The diagnostic log is always mirrored to stderr, whatever the root level
    logging.getLogger("mobsf_mcp.diagnostic").setLevel(logging.INFO)

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def bind_scan_context(file: str, scan_type: str | None = None, stage: str | None = None) -> None:
    """Bind the file being scanned, and how far the scan got, to the current async context."""
    ctx = {"file": file}
    if scan_type:
        ctx["scan_type"] = scan_type
    if stage:
        ctx["stage"] = stage
    structlog.contextvars.bind_contextvars(**ctx)


def clear_scan_context() -> None:
    """Clear bound context variables after a scan."""
    structlog.contextvars.clear_contextvars()
