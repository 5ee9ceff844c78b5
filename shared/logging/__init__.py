from .config import get_logger, setup_logging
from .correlation import (
    CORRELATION_HEADER,
    clear_context,
    get_correlation_id,
    new_correlation_id,
    set_correlation_id,
)

__all__ = [
    "CORRELATION_HEADER",
    "setup_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "new_correlation_id",
    "clear_context",
]
