"""
Process-wide logging setup.
"""

import logging

from honeylog.config import Settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    level = logging.DEBUG if settings.debug_logs else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # The Azure SDK logs every HTTP request at INFO
    logging.getLogger("azure").setLevel(logging.WARNING)


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Render a byte count as a human-readable string."""
    if num_bytes == 0:
        return "0 Bytes"
    
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    value = float(num_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    
    return f"{round(value, max(decimals, 0)):g} {units[index]}"
