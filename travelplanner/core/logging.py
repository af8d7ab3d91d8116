"""
Logging Configuration and Utilities

Structured logging with structlog processors, JSON or text console output,
optional rotating file output and a context-carrying logger adapter.
"""

import sys
import asyncio
import logging
import logging.handlers
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pathlib import Path
from contextvars import ContextVar
from functools import wraps

import structlog
from pythonjsonlogger.json import JsonFormatter

from travelplanner.config import settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

_configured = False


class RequestContextProcessor:
    """Add request context to log records"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = 'travel-planner'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


class SensitiveDataProcessor:
    """Mask credentials before they reach any handler"""

    SENSITIVE_KEYS = ('password', 'token', 'secret', 'authorization', 'cookie')

    def __call__(self, logger, method_name, event_dict):
        self._sanitize(event_dict)
        return event_dict

    def _sanitize(self, event_dict: Dict[str, Any]):
        for key in list(event_dict.keys()):
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                event_dict[key] = '[REDACTED]'
            elif isinstance(event_dict[key], dict):
                self._sanitize(event_dict[key])


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        req_id = request_id.get()
        if req_id:
            log_record['request_id'] = req_id

        uid = user_id.get()
        if uid:
            log_record['user_id'] = uid

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def shared_processors():
        """Processors applied to structlog events and stdlib records alike"""
        return [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            RequestContextProcessor(),
            SensitiveDataProcessor(),
        ]

    @staticmethod
    def _renderer(log_format: str):
        if log_format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.processors.KeyValueRenderer(key_order=['timestamp', 'level', 'event'])

    @staticmethod
    def build_formatter(structured: bool, log_format: str) -> logging.Formatter:
        """
        Formatter for stdlib handlers.

        With structured logging on, every record (including `extra` fields)
        runs through the structlog processor chain before rendering.
        """
        if structured:
            return structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=[
                    structlog.stdlib.ExtraAdder(),
                    *LoggingConfig.shared_processors(),
                ],
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.format_exc_info,
                    LoggingConfig._renderer(log_format),
                ],
            )

        if log_format == "json":
            return CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s'
            )
        return logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    @staticmethod
    def configure_structured_logging():
        """Configure structlog to hand its events to stdlib handlers"""

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *LoggingConfig.shared_processors(),
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        """Configure standard Python logging"""

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, settings.logging.LOG_LEVEL))
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, settings.logging.LOG_LEVEL))

        formatter = LoggingConfig.build_formatter(
            settings.logging.ENABLE_STRUCTURED_LOGGING,
            settings.logging.LOG_FORMAT,
        )

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if settings.logging.LOG_FILE:
            log_path = Path(settings.logging.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            if settings.logging.LOG_ROTATION == "size":
                file_handler = logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=10*1024*1024,  # 10MB
                    backupCount=5
                )
            else:
                file_handler = logging.handlers.TimedRotatingFileHandler(
                    log_path,
                    when='midnight',
                    interval=1,
                    backupCount=settings.logging.LOG_RETENTION
                )

            file_handler.setLevel(getattr(logging, settings.logging.LOG_LEVEL))
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        LoggingConfig._configure_library_loggers()

    @staticmethod
    def _configure_library_loggers():
        """Configure logging for external libraries"""

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        if settings.logging.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("httpx").setLevel(logging.WARNING)


class LoggerAdapter:
    """Enhanced logger adapter with context management"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context = {}

    def add_context(self, **kwargs):
        """Add context to all log messages"""
        self._context.update(kwargs)
        return self

    def remove_context(self, *keys):
        for key in keys:
            self._context.pop(key, None)
        return self

    def clear_context(self):
        self._context.clear()
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(kwargs.get('extra') or {})
        extra.update(self._context)
        kwargs['extra'] = extra

        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Enhanced logger adapter
    """
    if name is None:
        import inspect
        frame = inspect.currentframe()
        caller_frame = frame.f_back
        name = caller_frame.f_globals.get('__name__', 'travelplanner')

    return LoggerAdapter(logging.getLogger(name))


def log_execution_time(logger_name: Optional[str] = None):
    """
    Decorator to log function execution time.

    Args:
        logger_name: Custom logger name
    """
    def decorator(func):
        logger = get_logger(logger_name or func.__module__)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                return await func(*args, **kwargs)
            finally:
                execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.debug("Function executed", extra={
                    'function': func.__name__,
                    'execution_time': execution_time
                })

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = datetime.now(timezone.utc)
            try:
                return func(*args, **kwargs)
            finally:
                execution_time = (datetime.now(timezone.utc) - start_time).total_seconds()
                logger.debug("Function executed", extra={
                    'function': func.__name__,
                    'execution_time': execution_time
                })

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def setup_logging(force: bool = False):
    """Initialize logging configuration once per process"""
    global _configured
    if _configured and not force:
        return

    if settings.logging.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()

    LoggingConfig.configure_standard_logging()
    _configured = True

    get_logger(__name__).info("Logging system initialized", extra={
        'log_level': settings.logging.LOG_LEVEL,
        'log_format': settings.logging.LOG_FORMAT,
        'structured_logging': settings.logging.ENABLE_STRUCTURED_LOGGING
    })


__all__ = [
    'get_logger',
    'setup_logging',
    'log_execution_time',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
    'user_id'
]
