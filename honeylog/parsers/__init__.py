"""
Log parsers.
"""

from honeylog.parsers.base import BaseParser, iter_nonblank_lines
from honeylog.parsers.cowrie_parser import CowrieLogParser

__all__ = [
    "BaseParser",
    "CowrieLogParser",
    "iter_nonblank_lines",
]
