"""Logging configuration."""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from loguru import logger


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
) -> None:
    """Setup loguru logging."""
    logger.remove()
    logger.configure(extra={"model": "-"})

    # Console handler
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[model]}</cyan> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )

    # File handler
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            level=level,
            rotation=rotation,
            retention="7 days",
            compression="gz",
        )

    logger.info(f"Logging initialized at {level} level")


@contextmanager
def log_failed_stage(stage: str, log=logger) -> Iterator[None]:
    """
    Name the failing stage of a multi-stage fit/transform.

    The exception is re-raised unchanged; the stage is logged and, where
    the interpreter supports it, attached as an exception note.
    """
    try:
        yield
    except Exception as exc:
        log.error(f"{stage} failed: {exc!r}")
        if hasattr(exc, "add_note"):
            exc.add_note(f"Raised during: {stage}")
        raise
