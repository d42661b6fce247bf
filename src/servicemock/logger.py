"""
Logger configuration for servicemock.

Configures the loguru logger used across the package according to the
`LoggingSettings` held in `servicemock.settings`. Console and file sinks are
driven by the settings object or the matching environment variables:

::
    export SERVICEMOCK__LOGGING__CONSOLE_LOG_LEVEL=DEBUG
    export SERVICEMOCK__LOGGING__LOG_FILE=servicemock.log
    export SERVICEMOCK__LOGGING__LOG_FILE_LEVEL=INFO

Setting SERVICEMOCK__LOGGING__DISABLED silences the package logger entirely.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

from servicemock.settings import LoggingSettings, settings

__all__ = ["configure_logger", "logger"]


def configure_logger(config: LoggingSettings = settings.logging):
    """
    Configure the servicemock logger from the given logging settings.

    :param config: The logging settings to apply; defaults to the package settings
    """
    if os.getenv("SERVICEMOCK__LOGGING__DISABLED", "").lower() in {"1", "true"}:
        config.disabled = True

    if config.disabled:
        logger.disable("servicemock")
        return

    logger.enable("servicemock")

    if config.clear_loggers:
        logger.remove()

    if config.console_log_level:
        logger.add(sys.stderr, level=config.console_log_level.upper())

    if config.log_file or config.log_file_level:
        log_file = config.log_file or "servicemock.log"
        log_file_level = config.log_file_level or "INFO"
        # serialized sink so file logs stay machine readable
        logger.add(log_file, level=log_file_level.upper(), serialize=True)


configure_logger(config=settings.logging)
