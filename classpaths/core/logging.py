"""
Logging helpers for classpaths.

Every module logs through a child of the ``classpaths`` logger. Children
keep level NOTSET, so the level set on ``classpaths`` by setup_logging()
applies to the whole package at once.
"""
import logging

PACKAGE_LOGGER = 'classpaths'


def get_logger(name: str) -> logging.Logger:
    """
    Return a module logger inside the classpaths hierarchy.

    Names outside the hierarchy are nested under it. While the root logger
    has no handlers, an unconfigured ``classpaths`` logger is held at
    WARNING so library use stays quiet; records still propagate, so a
    later basicConfig() picks them up without further setup.

    Args:
        name: Logger name (typically __name__)
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    if package.level == logging.NOTSET and not logging.getLogger().handlers:
        package.setLevel(logging.WARNING)

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f'{PACKAGE_LOGGER}.{name}'
    return logging.getLogger(name)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Set the level of the classpaths logger and, through it, every module."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = True
    return logger
