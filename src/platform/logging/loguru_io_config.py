from contextvars import ContextVar
from datetime import datetime
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', LOG_DIR)

# Keys whose values never reach a log line (payment details travel as kwargs)
SENSITIVE_KEYWORDS = {
    'password',
    'credential',
    'card_number',
    'cvv',
    'payment_token',
}
DEPTH_LINE = '─'
MAX_CONTENT_LENGTH = 500

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


class GeneratorMethod(StrEnum):
    NEXT = 'next'
    SEND = 'send'
    THROW = 'throw'


_DEFAULT_EXTRA: dict[str, Any] = {
    ExtraField.SERVICE_CONTEXT: get_service_context(),
    ExtraField.CHAIN_START_TIME: '',
    ExtraField.CALL_TARGET: '',
}

# Chatty stdlib records dropped before they reach loguru
_MUTED_DEBUG_FRAGMENTS = ('Using selector:',)


class InterceptHandler(logging.Handler):
    """Forward stdlib `logging` records (granian, starlette, opentelemetry) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        message = record.getMessage()
        if record.levelno <= logging.DEBUG and any(f in message for f in _MUTED_DEBUG_FRAGMENTS):
            return

        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module to the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        loguru_logger.bind(**_DEFAULT_EXTRA).opt(depth=depth, exception=record.exc_info).log(
            level, message
        )


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _log_file_path(now: datetime) -> str:
    prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
    return f'{LOG_DIR}/{prefix}{now.strftime("%Y-%m-%d_%H")}.log'


def configure_sinks(logger: 'LoguruLogger', *, debug: bool) -> None:
    """
    Stdout always; an hourly rotated file only in DEBUG.
    Production collects stdout, so no file is written there.
    """
    level = 'DEBUG' if debug else 'INFO'
    logger.add(sys.stdout, format=io_log_format, level=level, enqueue=True)
    if debug:
        logger.add(
            _log_file_path(datetime.now()),
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=level,
        )


loguru_logger.remove()
custom_logger: 'LoguruLogger' = loguru_logger.bind(**_DEFAULT_EXTRA)
configure_sinks(custom_logger, debug=settings.DEBUG)

logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
