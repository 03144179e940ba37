"""
STRUCTURED LOGGING
==================

structlog on top of the stdlib logging module.
Every log line is a JSON object with timestamp, level and logger name.
"""

import logging
import sys

import structlog


def configure_logging(level='INFO'):
    """Configure stdlib logging and structlog. Safe to call more than once."""
    logging.basicConfig(format='%(message)s', stream=sys.stdout)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name):
    return structlog.get_logger(name)
