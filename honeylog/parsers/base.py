"""
Abstract base class for log parsers.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from honeylog.models.event import HoneypotEvent


def iter_nonblank_lines(content: str) -> Iterator[str]:
    """Yield stripped lines, skipping blank ones."""
    for line in content.splitlines():
        line = line.strip()
        if line:
            yield line


class BaseParser(ABC):
    """
    Abstract base class for line-oriented log parsers.
    
    Each parser must implement parse_line(), which turns a single log
    line into a HoneypotEvent or None.
    """
    
    @abstractmethod
    def parse_line(self, line: str) -> Optional[HoneypotEvent]:
        """
        Parse a single log line.
        
        Args:
            line: A single log line
            
        Returns:
            HoneypotEvent if successful, None if parsing fails
        """
        pass
    
    def parse_content(self, content: str) -> List[HoneypotEvent]:
        """
        Parse multiple log lines from content string.
        
        Lines that fail to parse are dropped, so the result can be shorter
        than the number of non-blank input lines.
        
        Args:
            content: Multi-line string of log entries
            
        Returns:
            List of successfully parsed events, in input order
        """
        events = []
        for line in iter_nonblank_lines(content):
            event = self.parse_line(line)
            if event is not None:
                events.append(event)
        
        return events
