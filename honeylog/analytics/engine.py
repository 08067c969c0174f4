"""
Analytics engine - builds the aggregate report over parsed events.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from honeylog.config import Settings, get_settings
from honeylog.geo.lookup import GeoLookup, NullGeoLookup
from honeylog.models.event import EventType, HoneypotEvent, SESSION_EVENTS
from honeylog.models.report import (
    AnalyticsReport,
    AttackPatterns,
    CommandAnalysis,
    CommandCount,
    CountryStats,
    CredentialStats,
    LoginAnalysis,
    SessionBucket,
    SourceIPStats,
    TimeRange,
)
from honeylog.analytics.patterns.base import PatternDetector
from honeylog.analytics.patterns.brute_force import BruteForceDetector
from honeylog.analytics.patterns.malware import MalwareDownloadDetector
from honeylog.analytics.patterns.commands import (
    PrivilegeEscalationDetector,
    ReconnaissanceDetector,
)
from honeylog.parsers.cowrie_parser import CowrieLogParser


UNKNOWN = "unknown"


class AnalyticsEngine:
    """
    Derives statistics and attack-pattern findings from honeypot events.
    
    The engine:
    1. Computes independent sub-reports (histogram, rankings, distributions)
    2. Runs every attack-pattern detector over the same events
    3. Returns a fresh AnalyticsReport per call
    
    analyze() is a pure function of its input apart from geo lookups;
    an empty sequence yields an all-zero report.
    """
    
    def __init__(
        self,
        geo: Optional[GeoLookup] = None,
        settings: Optional[Settings] = None,
        detectors: Optional[List[PatternDetector]] = None,
    ):
        self.settings = settings or get_settings()
        self.geo = geo or NullGeoLookup()
        self.top_n = self.settings.top_n
        self.parser = CowrieLogParser()
        
        if detectors is None:
            self.detectors = self._get_default_detectors()
        else:
            self.detectors = detectors
    
    def _get_default_detectors(self) -> List[PatternDetector]:
        """Get the default set of attack-pattern detectors."""
        return [
            BruteForceDetector(
                self.geo,
                threshold=self.settings.brute_force_threshold,
                window_minutes=self.settings.brute_force_window_minutes,
            ),
            MalwareDownloadDetector(self.geo),
            PrivilegeEscalationDetector(self.geo),
            ReconnaissanceDetector(self.geo),
        ]
    
    def analyze_text(self, content: str) -> AnalyticsReport:
        """Parse raw log text and analyze the resulting events."""
        return self.analyze(self.parser.parse_content(content))
    
    def analyze(self, events: Sequence[HoneypotEvent]) -> AnalyticsReport:
        """
        Build the full analytics report.
        
        Args:
            events: Parsed events in input order
            
        Returns:
            AnalyticsReport computed from the events alone
        """
        return AnalyticsReport(
            total_events=len(events),
            time_range=self.get_time_range(events),
            events_by_type=self.group_events_by_type(events),
            top_source_ips=self.get_top_source_ips(events),
            geographic_distribution=self.get_geographic_distribution(events),
            login_attempts=self.analyze_login_attempts(events),
            commands=self.analyze_commands(events),
            sessions_over_time=self.get_sessions_over_time(
                events, self.settings.session_interval_hours
            ),
            attack_patterns=self.analyze_attack_patterns(events),
        )
    
    def get_time_range(self, events: Sequence[HoneypotEvent]) -> Optional[TimeRange]:
        if not events:
            return None
        
        start = min(e.timestamp for e in events)
        end = max(e.timestamp for e in events)
        return TimeRange(start=start, end=end, duration_seconds=(end - start).total_seconds())
    
    def group_events_by_type(self, events: Sequence[HoneypotEvent]) -> Dict[str, int]:
        """Count events per display label, largest count first."""
        counts = Counter(e.label for e in events)
        return dict(counts.most_common())
    
    def get_top_source_ips(self, events: Sequence[HoneypotEvent]) -> List[SourceIPStats]:
        """
        Rank source addresses by event count.
        
        first_seen is the timestamp of an address's first event in input
        order and last_seen that of its latest one in input order, which
        are the true extremes only for time-ordered input.
        """
        stats: Dict[str, dict] = {}
        for event in events:
            ip = event.src_ip
            if not ip:
                continue
            if ip not in stats:
                stats[ip] = {"count": 0, "first_seen": event.timestamp}
            stats[ip]["count"] += 1
            stats[ip]["last_seen"] = event.timestamp
        
        # sorted() is stable, so equal counts keep input order
        ranked = sorted(stats.items(), key=lambda item: item[1]["count"], reverse=True)
        return [
            SourceIPStats(
                ip=ip,
                count=data["count"],
                first_seen=data["first_seen"],
                last_seen=data["last_seen"],
                location=self.geo.lookup(ip),
            )
            for ip, data in ranked[:self.top_n]
        ]
    
    def get_geographic_distribution(self, events: Sequence[HoneypotEvent]) -> List[CountryStats]:
        """Events and distinct addresses per country; unresolved addresses are left out."""
        counts: Counter = Counter()
        ips_by_country: Dict[str, set] = {}
        
        for event in events:
            if not event.src_ip:
                continue
            location = self.geo.lookup(event.src_ip)
            if location is None or not location.country:
                continue
            counts[location.country] += 1
            ips_by_country.setdefault(location.country, set()).add(event.src_ip)
        
        return [
            CountryStats(country=country, count=count, unique_ips=len(ips_by_country[country]))
            for country, count in counts.most_common()
        ]
    
    def analyze_login_attempts(self, events: Sequence[HoneypotEvent]) -> LoginAnalysis:
        login_events = [e for e in events if e.is_login]
        successful = sum(1 for e in login_events if e.eventid == EventType.LOGIN_SUCCESS.value)
        
        credentials: Dict[str, dict] = {}
        for event in login_events:
            pair = f"{event.username or UNKNOWN}:{event.password or UNKNOWN}"
            data = credentials.setdefault(pair, {"attempts": 0, "successful": 0, "ips": set()})
            data["attempts"] += 1
            if event.eventid == EventType.LOGIN_SUCCESS.value:
                data["successful"] += 1
            if event.src_ip:
                data["ips"].add(event.src_ip)
        
        ranked = sorted(credentials.items(), key=lambda item: item[1]["attempts"], reverse=True)
        top_credentials = [
            CredentialStats(
                credential=pair,
                attempts=data["attempts"],
                successful=data["successful"],
                unique_ips=len(data["ips"]),
            )
            for pair, data in ranked[:self.top_n]
        ]
        
        total = len(login_events)
        rate = successful / total * 100 if total else 0.0
        
        return LoginAnalysis(
            total_attempts=total,
            successful_logins=successful,
            failed_logins=sum(1 for e in login_events if e.is_failed_login),
            success_rate=f"{rate:.2f}",
            top_credentials=top_credentials,
        )
    
    def analyze_commands(self, events: Sequence[HoneypotEvent]) -> CommandAnalysis:
        """Count commands by their first whitespace-delimited token."""
        command_events = [e for e in events if e.is_command]
        counts: Counter = Counter()
        
        for event in command_events:
            tokens = (event.input or "").split()
            if tokens:
                counts[tokens[0]] += 1
        
        return CommandAnalysis(
            total_commands=len(command_events),
            unique_commands=len(counts),
            top_commands=[
                CommandCount(command=command, count=count)
                for command, count in counts.most_common(self.top_n)
            ],
        )
    
    def get_sessions_over_time(
        self,
        events: Sequence[HoneypotEvent],
        interval_hours: int = 1,
    ) -> List[SessionBucket]:
        """Bucket session connects and closes into epoch-aligned intervals."""
        interval_ms = interval_hours * 60 * 60 * 1000
        buckets: Dict[int, SessionBucket] = {}
        
        for event in events:
            if event.eventid not in SESSION_EVENTS:
                continue
            epoch_ms = int(event.timestamp.timestamp() * 1000)
            key = (epoch_ms // interval_ms) * interval_ms
            if key not in buckets:
                buckets[key] = SessionBucket(
                    timestamp=datetime.fromtimestamp(key / 1000, tz=timezone.utc)
                )
            bucket = buckets[key]
            if event.eventid == EventType.SESSION_CONNECT.value:
                bucket.connects += 1
            else:
                bucket.disconnects += 1
        
        return [buckets[key] for key in sorted(buckets)]
    
    def analyze_attack_patterns(self, events: Sequence[HoneypotEvent]) -> AttackPatterns:
        """Run every detector and collect findings under its pattern_id."""
        findings = {
            detector.pattern_id: detector.detect(events)
            for detector in self.detectors
        }
        return AttackPatterns(**findings)
    
    def get_detector_info(self) -> List[dict]:
        """Get information about all loaded detectors."""
        return [
            {
                "pattern_id": d.pattern_id,
                "pattern_name": d.pattern_name,
                "description": d.description,
                "mitre_techniques": d.mitre_techniques,
            }
            for d in self.detectors
        ]
