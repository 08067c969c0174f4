"""
Brute force login detection.
"""

from bisect import bisect_left, bisect_right
from collections import defaultdict
from datetime import timedelta
from typing import List, Optional, Sequence

from honeylog.analytics.patterns.base import PatternDetector
from honeylog.geo.lookup import GeoLookup
from honeylog.models.event import HoneypotEvent
from honeylog.models.report import BruteForceFinding, WindowBounds


class BruteForceDetector(PatternDetector):
    """
    Detects repeated failed logins from one source address.
    
    Every login attempt of an address (successful or not) is tried as the
    start of a window; the failed attempts falling inside
    [start, start + window] are counted. The first window reaching the
    threshold is reported and scanning for that address stops, so an
    address yields at most one finding.
    
    MITRE ATT&CK:
    - Tactic: TA0006 (Credential Access)
    - Technique: T1110 (Brute Force)
    """
    
    pattern_id = "brute_force"
    pattern_name = "Brute Force Login Attack"
    description = "Failed authentication attempts from one source above a threshold within a time window"
    mitre_techniques = ["T1110", "T1110.001"]
    
    def __init__(self, geo: GeoLookup, threshold: int = 10, window_minutes: int = 60):
        super().__init__(geo)
        self.threshold = threshold
        self.window = timedelta(minutes=window_minutes)
    
    def detect(self, events: Sequence[HoneypotEvent]) -> List[BruteForceFinding]:
        attempts_by_ip = defaultdict(list)
        for event in events:
            if event.is_login and event.src_ip:
                attempts_by_ip[event.src_ip].append(event)
        
        findings = []
        for ip, attempts in attempts_by_ip.items():
            finding = self._scan_windows(ip, attempts)
            if finding:
                findings.append(finding)
        
        return findings
    
    def _scan_windows(self, ip: str, attempts: List[HoneypotEvent]) -> Optional[BruteForceFinding]:
        """Return the earliest qualifying window for one address."""
        starts = sorted(a.timestamp for a in attempts)
        failures = sorted(a.timestamp for a in attempts if a.is_failed_login)
        if len(failures) < self.threshold:
            return None
        
        for window_start in starts:
            window_end = window_start + self.window
            failed = bisect_right(failures, window_end) - bisect_left(failures, window_start)
            if failed >= self.threshold:
                return BruteForceFinding(
                    ip=ip,
                    failed_attempts=failed,
                    time_window=WindowBounds(start=window_start, end=window_end),
                    location=self.geo.lookup(ip),
                )
        
        return None
