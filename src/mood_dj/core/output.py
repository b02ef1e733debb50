"""
Logging setup using Loguru.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir


def get_log_file_path() -> Path:
    """Get the path to the log file."""
    return get_data_dir() / "mood-dj.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = True,
) -> None:
    """
    Configure loguru with a rotating file sink and optional stderr output.

    Args:
        log_file: Path to log file (default: ~/.local/share/mood-dj/mood-dj.log)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Whether to also log to stderr
    """
    log_file = log_file or get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    if console_output:
        logger.add(
            sys.stderr,
            level=level,
            format="<level>{level: <8}</level> | {message}",
        )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_logging_from_config(logging_config: LoggingConfig) -> None:
    """Configure loguru from the [logging] config section."""
    log_file = Path(logging_config.log_file).expanduser() if logging_config.log_file else None
    setup_loguru(
        log_file=log_file,
        level=logging_config.level.upper(),
        console_output=logging_config.console_output,
    )
