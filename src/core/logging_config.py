"""Logging setup (stdlib logging + Rich console handler)."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler


def parse_level(value: str | int) -> int:
    """Accept `"debug"`, `"INFO"`, `10`... and return a logging level."""

    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: Path | None = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Console logging level.
        log_file: Optional file that receives DEBUG output with timestamps.
    """

    level = parse_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, logging.DEBUG) if log_file else level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(file_handler)

    # Reduce verbosity of the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
