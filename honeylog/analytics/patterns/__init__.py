"""
Attack-pattern detectors.
"""

from honeylog.analytics.patterns.base import PatternDetector
from honeylog.analytics.patterns.brute_force import BruteForceDetector
from honeylog.analytics.patterns.malware import MalwareDownloadDetector
from honeylog.analytics.patterns.commands import (
    CommandKeywordDetector,
    PrivilegeEscalationDetector,
    ReconnaissanceDetector,
)

__all__ = [
    "PatternDetector",
    "BruteForceDetector",
    "MalwareDownloadDetector",
    "CommandKeywordDetector",
    "PrivilegeEscalationDetector",
    "ReconnaissanceDetector",
]
