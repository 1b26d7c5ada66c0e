# passguard/logging_config.py
"""Logging configuration for Passguard using Loguru"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None):
    """
    Configure loguru sinks

    Args:
        level: Minimum level for the console and main file sinks
        log_dir: Directory for rotated log files; console only when None

    Log files (when log_dir is set):
    - passguard.log: All logs
    - passguard_audit.log: Policy administration events
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level,
        colorize=True,
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "passguard.log",
            format=LOG_FORMAT,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            encoding="utf-8",
        )

        # Audit log keeps policy changes longer
        logger.add(
            log_path / "passguard_audit.log",
            format=LOG_FORMAT,
            level="INFO",
            rotation="10 MB",
            retention="30 days",
            compression="gz",
            encoding="utf-8",
            filter=lambda record: "audit" in record["extra"].get("tags", []),
        )

    return logger


def audit_log(message: str):
    """Log to the audit-specific sink"""
    logger.bind(tags=["audit"]).info(message)
