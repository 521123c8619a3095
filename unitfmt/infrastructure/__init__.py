"""
Infrastructure Module for unitfmt

Logging services shared by the library and the command line interface.
"""

from .logging.unit_logger import UnitsLogger, setup_logging, get_logger, shutdown_logging

__all__ = [
    'UnitsLogger',
    'setup_logging',
    'get_logger',
    'shutdown_logging'
]
