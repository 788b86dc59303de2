"""Utility functions for gradle-project-config."""

import logging
import os
from pathlib import Path

from pathvalidate import is_valid_filename
from rich.logging import RichHandler
from rich.prompt import Confirm

from .constants import LOG_DATE_FORMAT, LOG_FORMAT

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """
    Create directory if it doesn't exist.

    Args:
        path: Directory path to create

    Returns:
        The created/existing directory path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def expand_path(path: str) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string to expand

    Returns:
        Expanded Path object
    """
    return Path(os.path.expanduser(os.path.expandvars(path))).resolve()


def is_valid_project_name(name: str) -> bool:
    """
    Check if a project name can be used as a folder name.

    Args:
        name: Project name

    Returns:
        True if the name is valid on the current platform
    """
    return bool(name.strip()) and is_valid_filename(name)


def prompt_confirm(message: str, default: bool = False) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message
        default: Default value if user just presses Enter

    Returns:
        True if confirmed, False otherwise
    """
    return Confirm.ask(message, default=default)


def setup_logging(level: str | int) -> None:
    """
    Configure package logging.

    Args:
        level: Logging level name or number
    """
    handler = RichHandler(show_time=False, show_level=False, show_path=False)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    package_logger = logging.getLogger("gradle_project_config")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False
