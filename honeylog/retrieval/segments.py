"""
Live and dated-archive segment naming for rotated Cowrie logs.

Cowrie writes to a live file (e.g. ``cowrie.json``) and rotates it daily
into ``cowrie.json.YYYY-MM-DD``.
"""

import math
from datetime import date, timedelta
from typing import Iterator


class SegmentLayout:
    """Names the live segment and the archive segment of each day."""
    
    def __init__(self, live_name: str, archive_format: str = "{live}.{date}", prefix: str = ""):
        self.live_name = live_name
        self.archive_format = archive_format
        self.prefix = prefix
    
    @property
    def live(self) -> str:
        return self.prefix + self.live_name
    
    def archive(self, day: date) -> str:
        return self.prefix + self.archive_format.format(live=self.live_name, date=day.isoformat())
    
    def archive_names(self, today: date, window_hours: float) -> Iterator[str]:
        """Archive names from today backwards, ceil(window_hours / 24) days."""
        horizon = max(1, math.ceil(window_hours / 24))
        for offset in range(horizon):
            yield self.archive(today - timedelta(days=offset))
