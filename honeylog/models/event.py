"""
Honeypot event model.
Every valid log line decodes into one immutable HoneypotEvent.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventType(str, Enum):
    """Cowrie event ids the analytics know about. The set is open."""
    LOGIN_SUCCESS = "cowrie.login.success"
    LOGIN_FAILED = "cowrie.login.failed"
    SESSION_CONNECT = "cowrie.session.connect"
    SESSION_CLOSED = "cowrie.session.closed"
    COMMAND_INPUT = "cowrie.command.input"
    FILE_DOWNLOAD = "cowrie.session.file_download"
    FILE_UPLOAD = "cowrie.session.file_upload"


EVENT_LABELS = {
    EventType.LOGIN_SUCCESS.value: "Successful Login",
    EventType.LOGIN_FAILED.value: "Failed Login",
    EventType.SESSION_CONNECT.value: "Session Connected",
    EventType.SESSION_CLOSED.value: "Session Closed",
    EventType.COMMAND_INPUT.value: "Command Executed",
    EventType.FILE_DOWNLOAD.value: "File Downloaded",
    EventType.FILE_UPLOAD.value: "File Uploaded",
}

LOGIN_EVENTS = frozenset({EventType.LOGIN_SUCCESS.value, EventType.LOGIN_FAILED.value})
SESSION_EVENTS = frozenset({EventType.SESSION_CONNECT.value, EventType.SESSION_CLOSED.value})


def _six_digit_fraction(match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a log timestamp into an aware UTC datetime.
    
    Accepts ISO-8601 strings (with or without 'Z' / offset) and Unix
    epoch numbers in seconds or milliseconds. Naive values are taken as UTC.
    
    Returns:
        Parsed datetime, or None if the value is not a recognizable timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            if value > 1e12:  # Milliseconds
                parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            else:
                parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        # fromisoformat only takes exactly 3 or 6 fractional digits before 3.11
        text = re.sub(r"\.(\d+)", _six_digit_fraction, text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # Offset pushes the instant outside the datetime range
        return None


class HoneypotEvent(BaseModel):
    """
    One decoded honeypot log record.
    
    Known fields are typed; any other key from the JSON line is kept as an
    extra attribute so the original record survives a round trip. Missing
    optional fields stay None, they are never defaulted.
    """
    
    timestamp: datetime = Field(
        description="When the event occurred (UTC)"
    )
    eventid: Optional[str] = Field(
        default=None,
        description="Cowrie event tag, e.g. 'cowrie.login.failed'"
    )
    src_ip: Optional[str] = Field(
        default=None,
        description="Attacker source address"
    )
    session: Optional[str] = Field(
        default=None,
        description="Honeypot session identifier"
    )
    username: Optional[str] = None
    password: Optional[str] = None
    input: Optional[str] = Field(
        default=None,
        description="Command text for command-input events"
    )
    url: Optional[str] = Field(
        default=None,
        description="Download source for file-download events"
    )

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        json_schema_extra={
            "example": {
                "timestamp": "2024-01-15T03:22:15.123456Z",
                "eventid": "cowrie.login.failed",
                "src_ip": "203.0.113.7",
                "session": "a1b2c3d4e5f6",
                "username": "root",
                "password": "123456",
                "message": "login attempt [root/123456] failed",
            }
        }
    )
    
    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> datetime:
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValueError(f"unrecognized timestamp: {value!r}")
        return parsed
    
    @field_validator("eventid", "src_ip", "session", "username", "password", "input", "url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        # Honeypot clients send arbitrary credentials; JSON numbers are common
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (bool, int, float)):
            return str(value)
        return None
    
    @property
    def label(self) -> str:
        """Human-readable event name, or the raw tag when unknown."""
        if self.eventid is None:
            return "unknown"
        return EVENT_LABELS.get(self.eventid, self.eventid)
    
    @property
    def is_login(self) -> bool:
        return self.eventid in LOGIN_EVENTS
    
    @property
    def is_failed_login(self) -> bool:
        return self.eventid == EventType.LOGIN_FAILED.value
    
    @property
    def is_command(self) -> bool:
        return self.eventid == EventType.COMMAND_INPUT.value
