"""
Logging configuration for the volunteer booking core
Console output plus rotating log files; booking components share a dedicated file
"""

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Optional

from infrastructure.constants import BOOKING_LOGGER_NAMES
from infrastructure.settings import AppSettings, get_settings


def setup_logging(settings: Optional[AppSettings] = None) -> str:
    """
    Install console and rotating file handlers on the root logger.

    Called once by the host application; importing this module has no side
    effects.

    Returns:
        The directory the log files are written to
    """
    settings = settings or get_settings()
    production_mode = settings.production_mode
    log_dir = settings.log_directory
    os.makedirs(log_dir, exist_ok=True)

    main_log_file = os.path.join(log_dir, 'booking_core.log')
    debug_log_file = os.path.join(log_dir, 'booking_core_debug.log')
    error_log_file = os.path.join(log_dir, 'booking_core_errors.log')
    bookings_log_file = os.path.join(log_dir, 'bookings.log')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING if production_mode else logging.DEBUG)
    # Clear existing handlers
    root_logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d in %(funcName)s()] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    main_file_handler = logging.handlers.RotatingFileHandler(
        main_log_file,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    main_file_handler.setLevel(logging.WARNING if production_mode else logging.INFO)
    main_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(main_file_handler)

    # Debug file only in development
    if not production_mode:
        debug_file_handler = logging.handlers.RotatingFileHandler(
            debug_log_file,
            maxBytes=50*1024*1024,  # 50MB
            backupCount=3,
            encoding='utf-8'
        )
        debug_file_handler.setLevel(logging.DEBUG)
        debug_file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(debug_file_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        error_log_file,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=5,
        encoding='utf-8'
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_file_handler)

    bookings_handler = logging.handlers.RotatingFileHandler(
        bookings_log_file,
        maxBytes=20*1024*1024,  # 20MB
        backupCount=5,
        encoding='utf-8'
    )
    bookings_handler.setLevel(logging.INFO if production_mode else logging.DEBUG)
    bookings_handler.setFormatter(detailed_formatter)

    for name in BOOKING_LOGGER_NAMES:
        component_logger = logging.getLogger(name)
        for handler in list(component_logger.handlers):
            component_logger.removeHandler(handler)
            handler.close()
        component_logger.addHandler(bookings_handler)
        component_logger.setLevel(logging.INFO if production_mode else logging.DEBUG)

    root_logger.info("="*80)
    root_logger.info(f"Booking core logging initialized - {datetime.now()}")
    root_logger.info(f"Production Mode: {'ON' if production_mode else 'OFF'}")
    root_logger.info(f"Main log: {main_log_file}")
    if not production_mode:
        root_logger.info(f"Debug log: {debug_log_file}")
    root_logger.info(f"Error log: {error_log_file}")
    root_logger.info(f"Bookings log: {bookings_log_file}")
    root_logger.info("="*80)
    return log_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name

    Args:
        name: Logger name, usually the component class name

    Returns:
        logging.Logger instance
    """
    return logging.getLogger(name)
