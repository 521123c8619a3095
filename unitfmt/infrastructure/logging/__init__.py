from .unit_logger import UnitsLogger, UnitsLogHandler, setup_logging, get_logger, shutdown_logging

__all__ = ['UnitsLogger', 'UnitsLogHandler', 'setup_logging', 'get_logger', 'shutdown_logging']
