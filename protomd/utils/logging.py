"""Logging configuration for the protomd command line."""

import logging

from rich.logging import RichHandler


def setup_logging(log_level: str = "WARNING") -> None:
    """
    Configure console logging for the application.

    Installs a rich handler on the root logger, replacing one installed by an
    earlier call. Other handlers on the root logger are left alone.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        if isinstance(handler, RichHandler):
            root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)

    # Lark logs grammar construction details at DEBUG
    logging.getLogger("lark").setLevel(logging.WARNING)
