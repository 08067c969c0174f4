"""
Malware download detection.
"""

from typing import List, Sequence

from honeylog.analytics.patterns.base import PatternDetector
from honeylog.models.event import EventType, HoneypotEvent
from honeylog.models.report import MalwareDownload


class MalwareDownloadDetector(PatternDetector):
    """
    Flags file downloads whose URL looks like an executable payload.
    
    MITRE ATT&CK:
    - Tactic: TA0011 (Command and Control)
    - Technique: T1105 (Ingress Tool Transfer)
    """
    
    pattern_id = "malware_downloads"
    pattern_name = "Malware Download"
    description = "File downloads of executables or scripts"
    mitre_techniques = ["T1105"]
    
    # Case-sensitive substring match anywhere in the URL
    SUSPICIOUS_EXTENSIONS = (".exe", ".sh", ".py")
    
    def detect(self, events: Sequence[HoneypotEvent]) -> List[MalwareDownload]:
        return [
            MalwareDownload(
                ip=e.src_ip,
                url=e.url,
                timestamp=e.timestamp,
                location=self.geo.lookup(e.src_ip),
            )
            for e in events
            if e.eventid == EventType.FILE_DOWNLOAD.value
            and e.url
            and any(ext in e.url for ext in self.SUSPICIOUS_EXTENSIONS)
        ]
