"""
Keyword-based detection over executed commands.
"""

from typing import List, Sequence

from honeylog.analytics.patterns.base import PatternDetector
from honeylog.models.event import HoneypotEvent
from honeylog.models.report import SuspiciousCommand


class CommandKeywordDetector(PatternDetector):
    """
    Flags command-input events containing any of KEYWORDS.
    
    Matching is a case-insensitive substring test on the full input, so
    short keywords also hit inside longer words.
    """
    
    KEYWORDS: tuple = ()
    
    def detect(self, events: Sequence[HoneypotEvent]) -> List[SuspiciousCommand]:
        return [
            SuspiciousCommand(
                ip=e.src_ip,
                command=e.input,
                timestamp=e.timestamp,
                location=self.geo.lookup(e.src_ip),
            )
            for e in events
            if e.is_command and e.input and self._matches(e.input)
        ]
    
    def _matches(self, command: str) -> bool:
        lowered = command.lower()
        return any(keyword in lowered for keyword in self.KEYWORDS)


class PrivilegeEscalationDetector(CommandKeywordDetector):
    """
    MITRE ATT&CK:
    - Tactic: TA0004 (Privilege Escalation)
    - Technique: T1548 (Abuse Elevation Control Mechanism)
    """
    
    pattern_id = "privilege_escalation"
    pattern_name = "Privilege Escalation Attempt"
    description = "Commands that try to gain or change privileges"
    mitre_techniques = ["T1548", "T1548.003"]
    
    KEYWORDS = ("sudo", "su", "chmod +s", "passwd")


class ReconnaissanceDetector(CommandKeywordDetector):
    """
    MITRE ATT&CK:
    - Tactic: TA0007 (Discovery)
    - Technique: T1082 (System Information Discovery)
    """
    
    pattern_id = "recon_commands"
    pattern_name = "Reconnaissance Commands"
    description = "Commands that enumerate the host, users, processes or network"
    mitre_techniques = ["T1082", "T1033", "T1057", "T1049"]
    
    KEYWORDS = ("whoami", "uname", "ps", "netstat", "ifconfig", "ls /etc")
