"""
Parser for Cowrie JSON-lines honeypot logs.
"""

import json
from typing import Optional

from pydantic import ValidationError

from honeylog.parsers.base import BaseParser
from honeylog.models.event import HoneypotEvent


class CowrieLogParser(BaseParser):
    """
    Parser for Cowrie's one-JSON-object-per-line log format.
    
    A line becomes an event only if it decodes to a JSON object with a
    usable timestamp. Anything else is dropped without raising.
    """
    
    def parse_line(self, line: str) -> Optional[HoneypotEvent]:
        """Parse a single Cowrie log line."""
        line = line.strip()
        if not line:
            return None
        
        try:
            data = json.loads(line)
        except (ValueError, RecursionError):
            return None
        
        if not isinstance(data, dict):
            return None
        
        try:
            return HoneypotEvent.model_validate(data)
        except (ValidationError, TypeError, OverflowError):
            return None
