"""
Observability: logging configuration, correlation ids and request middleware.
"""

from paperlens.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from paperlens.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
