"""Logging setup driven by the service configuration."""

import logging
import os
from typing import Optional

from ..config import Config

__all__ = ["configure_logging", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    config: Config,
    level: int = logging.INFO,
    root: Optional[logging.Logger] = None,
) -> logging.Logger:
    """
    Configure logging from a resolved config.

    Every logger named in ``debug_namespace`` is set to DEBUG. When
    ``log_file`` is non-empty, records are also written to that file.

    Args:
        config: Resolved configuration
        level: Level for the root logger
        root: Logger to attach handlers to (default: the root logger)

    Returns:
        The configured logger
    """
    root = root or logging.getLogger()
    root.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    if not root.handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        root.addHandler(stream)

    if config.log_file and not _has_file_handler(root, config.log_file):
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for namespace in config.debug_namespace or []:
        logging.getLogger(namespace).setLevel(logging.DEBUG)

    return root


def _has_file_handler(logger: logging.Logger, path: str) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )
