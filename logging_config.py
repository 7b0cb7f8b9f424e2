"""Structured logging configuration for the FRITZ!Box metrics exporter"""
import logging
import os
import sys
from typing import Any, Dict
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer


def setup_structured_logging(config) -> None:
    """Setup structured logging with JSON format for production and console for development"""
    
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    
    # Use JSON renderer for production, console for development
    is_development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    if is_development:
        processors.append(ConsoleRenderer())
    else:
        processors.append(JSONRenderer())
    
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    
    level = getattr(logging, config.log_level.upper())
    handlers = []
    
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(config.log_file))
        file_handler.setLevel(level)
        handlers.append(file_handler)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    handlers.append(console_handler)
    
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True
    )
    
    # Set specific logger levels to reduce noise
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('fastapi').setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


def log_poll_completed(logger: structlog.stdlib.BoundLogger, records_count: int, poll_time: float, host: str) -> None:
    """Log a finished poll with structured data"""
    logger.info(
        "Poll completed",
        host=host,
        records_count=records_count,
        poll_time_seconds=round(poll_time, 3),
        event_type="poll_completed"
    )


def log_server_startup(logger: structlog.stdlib.BoundLogger, config) -> None:
    """Log server startup with configuration details"""
    logger.info(
        "Server starting up",
        service_name=config.service_name,
        service_version=config.service_version,
        host=config.effective_host(),
        port=config.effective_port(),
        collection_interval=config.collection_interval,
        enabled_collectors=config.enabled_collectors,
        metrics_port=config.metrics_port,
        event_type="server_startup"
    )


def log_error(logger: structlog.stdlib.BoundLogger, error: Exception, context: Dict[str, Any] = None) -> None:
    """Log error with structured context"""
    logger.error(
        "Error occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context or {},
        event_type="error",
        exc_info=True
    )
