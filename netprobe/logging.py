import logging
import sys

__all__ = ["configure_logger"]


def configure_logger(level: int = logging.INFO, name: str = "netprobe") -> logging.Logger:
    """Create or reset the namespaced netprobe logger with a console format.

    Any previously attached handlers are dropped and a single stdout
    `StreamHandler` is installed. The logger does not propagate to the root
    logger, so host applications with their own logging setup do not see
    every line twice.

    Args:
        level: Level applied to both the logger and its handler.
        name: Dotted logger name. Defaults to `"netprobe"`.

    Returns:
        The configured logger.
    """

    logger = logging.getLogger(name)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] (%(name)s)   %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
