"""
Analytics report models - output of the analytics engine.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import Field

from honeylog.models.blob import BlobDescriptor, CamelModel


class GeoLocation(CamelModel):
    """Geo attribution for a source address."""
    
    country: Optional[str] = Field(
        default=None,
        description="ISO 3166-1 alpha-2 country code"
    )
    country_name: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class TimeRange(CamelModel):
    """Earliest and latest event timestamps."""
    
    start: datetime
    end: datetime
    duration_seconds: float


class SourceIPStats(CamelModel):
    """One row of the top source IP ranking."""
    
    ip: str
    count: int
    first_seen: datetime
    last_seen: datetime
    location: Optional[GeoLocation] = None


class CountryStats(CamelModel):
    """Events and distinct addresses attributed to one country."""
    
    country: str
    count: int
    unique_ips: int = Field(alias="uniqueIPs")


class CredentialStats(CamelModel):
    """Attempts made with one username:password pair."""
    
    credential: str
    attempts: int
    successful: int
    unique_ips: int = Field(alias="uniqueIPs")


class LoginAnalysis(CamelModel):
    """Login attempt totals and the most tried credentials."""
    
    total_attempts: int = 0
    successful_logins: int = 0
    failed_logins: int = 0
    success_rate: str = "0.00"
    top_credentials: List[CredentialStats] = Field(default_factory=list)


class CommandCount(CamelModel):
    command: str
    count: int


class CommandAnalysis(CamelModel):
    """Command-input totals keyed by the first token of each command."""
    
    total_commands: int = 0
    unique_commands: int = 0
    top_commands: List[CommandCount] = Field(default_factory=list)


class SessionBucket(CamelModel):
    """Session connects and closes within one epoch-aligned interval."""
    
    timestamp: datetime
    connects: int = 0
    disconnects: int = 0


class WindowBounds(CamelModel):
    start: datetime
    end: datetime


class BruteForceFinding(CamelModel):
    """An address that crossed the failed-login threshold."""
    
    ip: str
    failed_attempts: int
    time_window: WindowBounds
    location: Optional[GeoLocation] = None


class MalwareDownload(CamelModel):
    ip: Optional[str] = None
    url: str
    timestamp: datetime
    location: Optional[GeoLocation] = None


class SuspiciousCommand(CamelModel):
    ip: Optional[str] = None
    command: str
    timestamp: datetime
    location: Optional[GeoLocation] = None


class AttackPatterns(CamelModel):
    """Findings of the four attack-pattern detectors."""
    
    brute_force: List[BruteForceFinding] = Field(default_factory=list)
    malware_downloads: List[MalwareDownload] = Field(default_factory=list)
    privilege_escalation: List[SuspiciousCommand] = Field(default_factory=list)
    recon_commands: List[SuspiciousCommand] = Field(default_factory=list)


class AnalyticsReport(CamelModel):
    """
    Aggregate analytics over one batch of events.
    
    Built fresh per request and never persisted. An empty batch gives
    zero counts, empty collections and a null time range.
    """
    
    total_events: int = 0
    time_range: Optional[TimeRange] = None
    events_by_type: Dict[str, int] = Field(
        default_factory=dict,
        description="Event counts by display label, largest first"
    )
    top_source_ips: List[SourceIPStats] = Field(
        default_factory=list,
        alias="topSourceIPs",
    )
    geographic_distribution: List[CountryStats] = Field(default_factory=list)
    login_attempts: LoginAnalysis = Field(default_factory=LoginAnalysis)
    commands: CommandAnalysis = Field(default_factory=CommandAnalysis)
    sessions_over_time: List[SessionBucket] = Field(default_factory=list)
    attack_patterns: AttackPatterns = Field(default_factory=AttackPatterns)


class AnalyticsResponse(AnalyticsReport):
    """Analytics report plus details about the data it was computed from."""
    
    requested_range: str = Field(description="Requested time range key, e.g. '24h'")
    files_processed: int = 0
    total_lines: int = 0
    data_source: str = Field(
        default="blob_storage",
        description="'blob_storage' or 'no_data'"
    )
    files_analyzed: List[BlobDescriptor] = Field(default_factory=list)
