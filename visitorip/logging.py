"""
Centralized logging configuration for visitorip.

By default, all logging is disabled (NullHandler).
Users can configure logging via:
1. Standard Python logging (configure_logging)
2. Custom handler callback (set_warning_handler)
3. Complete disable (already default)

Examples:
    # Enable standard logging
    from visitorip import configure_logging
    import logging
    configure_logging(logging.WARNING)

    # Use loguru
    from visitorip import set_warning_handler
    from loguru import logger

    def loguru_handler(name, message, ctx):
        logger.bind(**ctx).warning(f"[{name}] {message}")

    set_warning_handler(loguru_handler)

    # Use structlog
    import structlog

    def structlog_handler(name, message, ctx):
        structlog.get_logger().warning(message, module=name, **ctx)

    set_warning_handler(structlog_handler)
"""

import logging
from typing import Optional, Callable, Any

# Root logger for the library - silent by default
_root_logger = logging.getLogger('visitorip')
_root_logger.addHandler(logging.NullHandler())
_root_logger.propagate = False  # Don't propagate to root

# Custom warning handler (optional)
_warning_handler: Optional[Callable[[str, str, dict], None]] = None


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for a module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_warning_handler(handler: Optional[Callable[[str, str, dict], None]]) -> None:
    """
    Set custom warning handler for all modules.

    Malformed forwarded headers are reported through this handler instead of
    the standard logger when one is set.

    Args:
        handler: Callable(logger_name, message, context_dict) or None to disable

    Examples:
        warnings = []
        set_warning_handler(lambda name, msg, ctx: warnings.append(msg))

        # Back to standard logging
        set_warning_handler(None)
    """
    global _warning_handler
    _warning_handler = handler


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure standard Python logging for visitorip.

    Removes NullHandler and sets up proper logging output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        handler: Custom handler or None for StreamHandler
        format_string: Custom format string or None for default

    Examples:
        # Basic configuration
        import logging
        from visitorip import configure_logging
        configure_logging(logging.WARNING)

        # Custom handler
        file_handler = logging.FileHandler('visitorip.log')
        configure_logging(logging.INFO, handler=file_handler)
    """
    _root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler()

    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(format_string)
    handler.setFormatter(formatter)

    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
    _root_logger.propagate = False


def disable_logging() -> None:
    """
    Disable all visitorip logging.

    Resets to default state (NullHandler only).
    """
    global _warning_handler
    _warning_handler = None
    _root_logger.handlers.clear()
    _root_logger.addHandler(logging.NullHandler())
    _root_logger.propagate = False


def log_warning(logger_name: str, message: str, **context: Any) -> None:
    """
    Internal warning reporting with custom handler support.

    Falls back to standard logging if no custom handler is set.

    Args:
        logger_name: Name of the logger/module
        message: Formatted warning message
        **context: Additional context information

    Examples:
        log_warning(
            'visitorip.resolver',
            "X-Forwarded-For header does not store a valid IP address (junk)",
            header_name='X-Forwarded-For',
            header_value='junk'
        )
    """
    if _warning_handler:
        try:
            _warning_handler(logger_name, message, context)
        except Exception as handler_error:
            # Handler failures never propagate
            _root_logger.debug(
                f"[{logger_name}] Warning handler failed "
                f"({handler_error.__class__.__name__}: {handler_error}). Original warning: {message}"
            )
    else:
        logging.getLogger(logger_name).warning(message, extra={"visitorip": context})


def is_logging_enabled() -> bool:
    """
    Check if logging is enabled (has handlers other than NullHandler).

    Returns:
        True if logging is configured, False if using default NullHandler
    """
    return (
        _warning_handler is not None or
        any(not isinstance(h, logging.NullHandler) for h in _root_logger.handlers)
    )
