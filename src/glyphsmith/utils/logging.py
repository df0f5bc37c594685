"""Logging utilities for Glyphsmith."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class BatchStats:
    """Statistics from an import or compile batch."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    skipped: list[tuple[str, str]] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of glyphs seen by the batch."""
        return self.processed_count + self.skipped_count + self.error_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

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
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphsmith")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BatchLogger:
    """Logger for tracking per-glyph outcomes of a batch."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, operation: str) -> None:
        self._logger = logger.bind(operation=operation)
        self._stats = BatchStats()

    def log_glyph_done(self, char: str, paths: int) -> None:
        """Log a glyph handled successfully."""
        self._logger.debug("Glyph done", char=char, paths=paths)
        self._stats.processed_count += 1

    def log_glyph_skipped(self, char: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.info("Glyph skipped", char=char, reason=reason)
        self._stats.skipped_count += 1
        self._stats.skipped.append((char, reason))

    def log_glyph_error(self, char: str, error: Exception) -> None:
        """Log a per-glyph failure that did not stop the batch."""
        self._logger.warning(
            "Glyph failed",
            char=char,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.error_count += 1
        self._stats.errors.append((char, str(error)))

    @property
    def stats(self) -> BatchStats:
        """Get current batch statistics."""
        return self._stats
