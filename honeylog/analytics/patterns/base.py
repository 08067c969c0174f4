"""
Abstract base class for attack-pattern detectors.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from pydantic import BaseModel

from honeylog.geo.lookup import GeoLookup
from honeylog.models.event import HoneypotEvent


class PatternDetector(ABC):
    """
    Abstract base class for all attack-pattern detectors.
    
    Each detector must define:
    - pattern_id: Key of its findings in the AttackPatterns report
    - pattern_name: Human-readable name
    - description: What the detector looks for
    - mitre_techniques: Related MITRE ATT&CK techniques
    - detect(): Core detection logic
    
    Detectors are pure: they read the event sequence and return new
    finding objects, never mutating their input.
    """
    
    pattern_id: str
    pattern_name: str
    description: str
    mitre_techniques: List[str] = []
    
    def __init__(self, geo: GeoLookup):
        self.geo = geo
    
    @abstractmethod
    def detect(self, events: Sequence[HoneypotEvent]) -> List[BaseModel]:
        """
        Evaluate events against this pattern.
        
        Args:
            events: Parsed events in input order
            
        Returns:
            Findings, empty if the pattern does not occur
        """
        pass
