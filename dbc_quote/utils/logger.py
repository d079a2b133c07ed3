"""Loguru setup for processes embedding the quote engine.

Call once at startup, before the first quote::

    from dbc_quote.utils.logger import setup_logger

    setup_logger()                      # level and format from config.settings
    setup_logger(level="DEBUG", log_dir=None)

Engine modules log through the shared ``loguru.logger`` with ``[DBC]`` and
``[RPC]`` tags and never add sinks themselves.
"""

import os
import sys

from loguru import logger

from config.settings import settings


def setup_logger(
    *,
    json_logs: bool | None = None,
    level: str | None = None,
    log_dir: str | None = "logs",
) -> None:
    """Configure loguru for dbc_quote.

    Console level: LOG_LEVEL env, then ``level``, then ``settings.log_level``.
    The file sink always captures DEBUG so per-quote traces survive; pass
    ``log_dir=None`` to log to stdout only.
    """
    if json_logs is None:
        json_logs = settings.json_logs
    console_level = os.getenv("LOG_LEVEL", level or settings.log_level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    if log_dir is None:
        return

    logger.add(
        os.path.join(log_dir, "dbc_quote_{time:YYYY-MM-DD}.log"),
        rotation="50 MB",
        retention="3 days",
        compression="gz",
        level="DEBUG",
        serialize=json_logs,
    )
