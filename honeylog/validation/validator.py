"""
Cowrie log format validation.

Checks a sample of raw lines for JSON validity and schema coverage,
independently of the analytics engine.
"""

import json
from itertools import islice
from typing import Any, Dict, List, Optional

from honeylog.models.event import EventType
from honeylog.models.validation import FieldCoverage, ValidationReport
from honeylog.parsers.base import iter_nonblank_lines


class LogFormatValidator:
    """
    Samples raw log lines and scores their conformance to the Cowrie schema.
    
    Only the first sample_size non-blank lines are examined. Malformed
    lines are counted and described, never raised.
    """
    
    REQUIRED_FIELDS = ["timestamp", "eventid"]
    COMMON_FIELDS = ["src_ip", "session", "dst_ip", "dst_port", "protocol"]
    KNOWN_EVENT_TYPES = [e.value for e in EventType]
    
    MAX_SAMPLE_ENTRIES = 3
    MAX_MESSAGES = 50
    MAX_MESSAGE_LENGTH = 200
    
    def validate(self, content: str, sample_size: int = 10) -> ValidationReport:
        """
        Validate the first sample_size non-blank lines of content.
        
        Args:
            content: Raw log text
            sample_size: Number of lines to examine
            
        Returns:
            ValidationReport with coverage relative to the sampled lines
        """
        lines = list(iter_nonblank_lines(content))
        sampled = list(islice(lines, max(sample_size, 0)))
        
        report = ValidationReport(total_lines=len(lines), sampled_lines=len(sampled))
        presence: Dict[str, int] = {}
        
        for line_number, line in enumerate(sampled, start=1):
            try:
                entry = json.loads(line)
            except (ValueError, RecursionError) as e:
                report.invalid_lines += 1
                self._add_message(report.errors, f"Line {line_number}: Invalid JSON - {e}")
                continue
            
            if not isinstance(entry, dict):
                report.invalid_lines += 1
                self._add_message(
                    report.errors,
                    f"Line {line_number}: Expected a JSON object, got {type(entry).__name__}",
                )
                continue
            
            report.valid_lines += 1
            
            missing = [f for f in self.REQUIRED_FIELDS if not self._has_field(entry, f)]
            for field in missing:
                self._add_message(report.warnings, f"Line {line_number}: Missing required field: {field}")
            
            eventid = entry.get("eventid")
            if self._has_field(entry, "eventid"):
                key = str(eventid)
                report.event_types[key] = report.event_types.get(key, 0) + 1
            
            for field in self.REQUIRED_FIELDS + self.COMMON_FIELDS:
                if self._has_field(entry, field):
                    presence[field] = presence.get(field, 0) + 1
            
            if len(report.sample) < self.MAX_SAMPLE_ENTRIES:
                report.sample.append(entry)
        
        if sampled:
            report.field_coverage = {
                field: FieldCoverage(count=count, percentage=round(count / len(sampled) * 100, 1))
                for field, count in presence.items()
            }
        
        return report
    
    def _has_field(self, entry: Dict[str, Any], field: str) -> bool:
        value = entry.get(field)
        return value is not None and value != ""
    
    def _add_message(self, messages: List[str], message: str) -> None:
        if len(messages) >= self.MAX_MESSAGES:
            return
        if len(message) > self.MAX_MESSAGE_LENGTH:
            message = message[:self.MAX_MESSAGE_LENGTH - 3] + "..."
        messages.append(message)


def format_validation_report(report: ValidationReport, validator: Optional[LogFormatValidator] = None) -> str:
    """Render a validation report as plain text for terminals."""
    validator = validator or LogFormatValidator()
    out = [
        "Cowrie Log Format Validation Report",
        "===================================",
        "",
        "Summary:",
        f"  Total lines: {report.total_lines}",
        f"  Lines sampled: {report.sampled_lines}",
        f"  Valid JSON lines: {report.valid_lines}",
        f"  Invalid lines: {report.invalid_lines}",
    ]
    
    for title, messages in (("Errors", report.errors), ("Warnings", report.warnings)):
        if not messages:
            continue
        out += ["", f"{title} ({len(messages)}):"]
        out += [f"  {m}" for m in messages[:5]]
        if len(messages) > 5:
            out.append(f"  ... and {len(messages) - 5} more")
    
    out += ["", "Event Types Found:"]
    for event_type, count in sorted(report.event_types.items(), key=lambda kv: kv[1], reverse=True):
        marker = "known" if event_type in validator.KNOWN_EVENT_TYPES else "unknown"
        out.append(f"  [{marker}] {event_type}: {count}")
    
    out += ["", "Field Coverage:"]
    for field in validator.REQUIRED_FIELDS:
        coverage = report.field_coverage.get(field)
        if coverage:
            out.append(f"  {field}: {coverage.percentage}% ({coverage.count} lines)")
        else:
            out.append(f"  {field}: 0% (missing)")
    for field in validator.COMMON_FIELDS:
        coverage = report.field_coverage.get(field)
        if coverage:
            out.append(f"  {field}: {coverage.percentage}% ({coverage.count} lines)")
    
    if report.sample:
        out += ["", "Sample Log Entry:", json.dumps(report.sample[0], indent=2, default=str)]
    
    recommendations = []
    if report.invalid_lines:
        recommendations.append(f"Fix {report.invalid_lines} invalid JSON lines")
    for field in validator.REQUIRED_FIELDS:
        coverage = report.field_coverage.get(field)
        if coverage is None or coverage.percentage < 100:
            recommendations.append(f"Ensure all entries have a {field} field")
    if not report.event_types:
        recommendations.append("No event types found - check log format")
    
    if recommendations:
        out += ["", "Recommendations:"]
        out += [f"  - {r}" for r in recommendations]
    
    return "\n".join(out)
