import logging
import sys

try:
    from rich.logging import RichHandler
except ImportError:
    RichHandler = None


def configure_loggers(loggers: list[str], level: int | str = logging.DEBUG) -> None:
    """
    Configure project loggers.

    Parameters
    ----------
    loggers : list[str]
        List of loggers to configure.
    level : int | str, optional
        Level applied to every configured logger, by default DEBUG.

    """
    # Prepare handlers
    handlers: list[logging.Handler]
    # Use RichHandler if available and attached to a terminal
    if sys.stderr.isatty() and RichHandler is not None:
        handlers = [RichHandler(level=logging.DEBUG)]
    else:
        stream_handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            " - ".join(
                [
                    "[%(levelname)s] %(asctime)s",
                    "%(name)s",
                    "%(funcName)s",
                    "%(lineno)d",
                    "%(message)s",
                ]
            )
        )
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(logging.DEBUG)
        handlers = [stream_handler]

    # Configure loggers
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.handlers = [*handlers]
        logger.setLevel(level)

    # Don't print messages through the root logger (avoid double-printing)
    root_logger = logging.getLogger()
    root_logger.propagate = False
    root_logger.handlers = []
