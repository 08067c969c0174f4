"""
Tests for the Cowrie log parser and the event model.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from honeylog.models.event import HoneypotEvent, parse_timestamp
from honeylog.parsers.cowrie_parser import CowrieLogParser


LOGIN_LINE = (
    '{"timestamp": "2024-01-15T03:22:15.123456Z", "eventid": "cowrie.login.failed", '
    '"src_ip": "203.0.113.7", "session": "a1b2c3", "username": "root", "password": "123456", '
    '"message": "login attempt [root/123456] failed"}'
)


class TestCowrieLogParser:
    """Tests for CowrieLogParser."""
    
    def setup_method(self):
        self.parser = CowrieLogParser()
    
    def test_parse_login_event(self):
        event = self.parser.parse_line(LOGIN_LINE)
        
        assert event is not None
        assert event.eventid == "cowrie.login.failed"
        assert event.src_ip == "203.0.113.7"
        assert event.username == "root"
        assert event.password == "123456"
        assert event.timestamp == datetime(2024, 1, 15, 3, 22, 15, 123456, tzinfo=timezone.utc)
    
    def test_unknown_fields_are_kept(self):
        event = self.parser.parse_line(LOGIN_LINE)
        
        assert event.model_dump()["message"] == "login attempt [root/123456] failed"
    
    def test_numeric_credentials_become_text(self):
        line = '{"timestamp": "2024-01-15T03:22:15Z", "eventid": "cowrie.login.failed", "username": "admin", "password": 123}'
        event = self.parser.parse_line(line)
        
        assert event.password == "123"
    
    def test_malformed_line_returns_none(self):
        assert self.parser.parse_line("{bad json") is None
        assert self.parser.parse_line("") is None
        assert self.parser.parse_line("null") is None
        assert self.parser.parse_line('"just a string"') is None
    
    def test_missing_or_bad_timestamp_returns_none(self):
        assert self.parser.parse_line('{"eventid": "cowrie.session.connect"}') is None
        assert self.parser.parse_line('{"timestamp": "yesterday", "eventid": "cowrie.session.connect"}') is None
    
    def test_missing_eventid_is_kept_as_none(self):
        event = self.parser.parse_line('{"timestamp": "2024-01-15T03:22:15Z"}')
        
        assert event is not None
        assert event.eventid is None
        assert event.label == "unknown"
    
    def test_parse_content_skips_blank_and_malformed_lines(self):
        content = "\n".join([LOGIN_LINE, "", "   ", "{bad json", LOGIN_LINE, "not json at all", ""])
        events = self.parser.parse_content(content)
        
        assert len(events) == 2
        assert all(e.eventid == "cowrie.login.failed" for e in events)
    
    def test_parse_content_never_exceeds_nonblank_lines(self):
        content = "{}\n[]\n{\"timestamp\": 5}\n\n" + "{" * 5000
        events = self.parser.parse_content(content)
        
        assert len(events) <= 4
    
    def test_parse_content_empty(self):
        assert self.parser.parse_content("") == []
    
    def test_out_of_range_timestamp_is_dropped(self):
        content = "\n".join([
            '{"timestamp": "0001-01-01T00:00:00+01:00", "eventid": "cowrie.session.connect"}',
            '{"timestamp": "9999-12-31T23:59:59-01:00", "eventid": "cowrie.session.connect"}',
            LOGIN_LINE,
        ])
        events = self.parser.parse_content(content)
        
        assert len(events) == 1
        assert events[0].eventid == "cowrie.login.failed"


class TestParseTimestamp:
    """Tests for timestamp normalization."""
    
    def test_iso_with_z(self):
        assert parse_timestamp("2024-01-01T00:00:00Z") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    
    def test_iso_with_offset_is_converted_to_utc(self):
        assert parse_timestamp("2024-01-01T02:00:00+02:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    
    def test_naive_is_taken_as_utc(self):
        assert parse_timestamp("2024-01-01T00:00:00") == datetime(2024, 1, 1, tzinfo=timezone.utc)
    
    def test_epoch_seconds_and_millis(self):
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert parse_timestamp(1704067200) == expected
        assert parse_timestamp(1704067200000) == expected
    
    def test_short_and_long_fractions(self):
        assert parse_timestamp("2024-01-01T00:00:00.1Z") == datetime(2024, 1, 1, 0, 0, 0, 100000, tzinfo=timezone.utc)
        assert parse_timestamp("2024-01-01T00:00:00.12345Z") == datetime(2024, 1, 1, 0, 0, 0, 123450, tzinfo=timezone.utc)
        assert parse_timestamp("2024-01-01T00:00:00.123456789Z") == datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc)
    
    def test_offset_outside_datetime_range(self):
        assert parse_timestamp("0001-01-01T00:00:00+01:00") is None
        assert parse_timestamp("9999-12-31T23:59:59-01:00") is None
    
    def test_unrecognized(self):
        assert parse_timestamp("") is None
        assert parse_timestamp(True) is None
        assert parse_timestamp({"t": 1}) is None


class TestHoneypotEvent:
    """Tests for the event model."""
    
    def test_events_are_immutable(self):
        event = HoneypotEvent(timestamp="2024-01-01T00:00:00Z", eventid="cowrie.session.connect")
        
        with pytest.raises(ValidationError):
            event.eventid = "other"
    
    def test_label_for_known_and_unknown_tags(self):
        known = HoneypotEvent(timestamp="2024-01-01T00:00:00Z", eventid="cowrie.command.input")
        unknown = HoneypotEvent(timestamp="2024-01-01T00:00:00Z", eventid="cowrie.client.version")
        
        assert known.label == "Command Executed"
        assert unknown.label == "cowrie.client.version"
