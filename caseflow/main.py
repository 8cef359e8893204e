"""Composition root for the caseflow test engine.

This module is the ONLY location that imports both core engine logic
and concrete adapter implementations. Callers that want engines and
displays configured from the environment build them here.

Module Structure:
- Logging configuration
- Display adapter instantiation
- Engine construction from settings
"""

import logging
import sys
from collections.abc import Callable, Mapping
from typing import Any, TextIO

from caseflow.adapters.display.stdout import StdoutDisplayAdapter
from caseflow.config import Settings, load_settings
from caseflow.core.class_engine import ClassTestEngine
from caseflow.core.engine import TestEngine
from caseflow.core.ports import DisplayPort

logger = logging.getLogger(__name__)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )


def create_engine(
    func: Callable[..., Any], settings: Settings | None = None
) -> TestEngine:
    """Build a TestEngine scheduled according to settings."""
    settings = settings or load_settings()
    return TestEngine(func, parallelize=settings.parallelize)


def create_class_engine(
    constructor: Callable[..., Any],
    operations: Mapping[str, Callable[..., Any]] | None = None,
    settings: Settings | None = None,
) -> ClassTestEngine:
    """Build a ClassTestEngine scheduled according to settings."""
    settings = settings or load_settings()
    return ClassTestEngine(
        constructor,
        parallelize=settings.parallelize,
        operations=operations,
        instance_parallelize=settings.instance_parallelize,
    )


def create_display(
    settings: Settings | None = None, stream: TextIO | None = None
) -> DisplayPort:
    """Build the display adapter selected by settings."""
    settings = settings or load_settings()
    display = StdoutDisplayAdapter(
        verbose=settings.display_verbose,
        width=settings.display_width,
        stream=stream,
    )
    logger.debug(f"Display adapter: Stdout (verbose={settings.display_verbose})")
    return display


def bootstrap(env_file: str | None = None) -> Settings:
    """Load configuration and configure logging.

    Returns:
        The loaded settings, for passing to the factories above.
    """
    settings = load_settings(env_file)
    configure_logging(settings.log_level, settings.log_format)
    logger.info(
        f"caseflow configured (parallelize={settings.parallelize}, "
        f"instance_parallelize={settings.instance_parallelize})"
    )
    return settings


__all__ = [
    "bootstrap",
    "configure_logging",
    "create_class_engine",
    "create_display",
    "create_engine",
]
