'''
loguru setup for the resolvconf CLI, logs go to stderr so
that stdout only ever carries command output
'''

import logging
import sys

from loguru import logger

_PACKAGE = 'resolvconf'

_LOG_FORMAT = (
    '<green>{time:HH:mm:ss}</green> | '
    '<level>{level: <8}</level> | '
    '<cyan>{name}</cyan>:<cyan>{line}</cyan> - '
    '<level>{message}</level>'
)

# stdlib loggers whose records are forwarded to loguru
_FORWARDED_LOGGERS = ('asyncio', 'dns')


class _LoguruForwarder(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _forward_stdlib(handlers: list[logging.Handler], level_name: str | None = None) -> None:
    for name in _FORWARDED_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = list(handlers)
        if level_name is not None:
            stdlib_logger.setLevel(level_name)


def configure_lib_logger(*, level_name: str = 'WARNING') -> None:
    '''
    Enables the package logger with a single stderr sink, replacing
    loguru's default handler.

    Parameters
    ----------
    level_name : str, optional
        by default 'WARNING'
    '''
    logger.remove()
    logger.add(
        sys.stderr,
        format=_LOG_FORMAT,
        level=level_name,
        backtrace=False,
        diagnose=False,
        catch=True,
    )
    logger.enable(_PACKAGE)
    _forward_stdlib([_LoguruForwarder()], level_name)
    logger.debug(f'{_PACKAGE} logging enabled at {level_name}')


def disable_lib_logger() -> None:
    logger.disable(_PACKAGE)
    _forward_stdlib([])
