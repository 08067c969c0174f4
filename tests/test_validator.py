"""
Tests for the log format validator.
"""

from datetime import timedelta

from honeylog.validation.validator import LogFormatValidator, format_validation_report
from tests.factories import NOW, log_line


def connect_line(i: int) -> str:
    return log_line(
        "cowrie.session.connect",
        NOW + timedelta(seconds=i),
        src_ip="203.0.113.7",
        session=f"s{i}",
        dst_ip="10.0.0.5",
        dst_port=2222,
        protocol="ssh",
    )


class TestLogFormatValidator:
    """Tests for LogFormatValidator."""
    
    def setup_method(self):
        self.validator = LogFormatValidator()
    
    def test_valid_lines(self):
        content = "\n".join(connect_line(i) for i in range(5))
        
        report = self.validator.validate(content, sample_size=10)
        
        assert report.total_lines == 5
        assert report.sampled_lines == 5
        assert report.valid_lines == 5
        assert report.invalid_lines == 0
        assert report.errors == []
        assert report.warnings == []
        assert report.event_types == {"cowrie.session.connect": 5}
        assert report.field_coverage["timestamp"].percentage == 100.0
        assert report.field_coverage["dst_port"].count == 5
    
    def test_only_sample_is_examined(self):
        content = "\n".join(connect_line(i) for i in range(20)) + "\n{bad json"
        
        report = self.validator.validate(content, sample_size=10)
        
        assert report.total_lines == 21
        assert report.sampled_lines == 10
        assert report.valid_lines == 10
        assert report.invalid_lines == 0
    
    def test_coverage_relative_to_sampled_lines(self):
        content = "\n".join([
            connect_line(0),
            '{"timestamp": "2024-01-01T00:00:00Z", "eventid": "cowrie.login.failed"}',
            connect_line(2),
            '{"timestamp": "2024-01-01T00:00:00Z", "eventid": "cowrie.login.failed"}',
        ] + [connect_line(i) for i in range(10, 30)])
        
        report = self.validator.validate(content, sample_size=4)
        
        assert report.field_coverage["src_ip"].count == 2
        assert report.field_coverage["src_ip"].percentage == 50.0
        assert report.field_coverage["eventid"].percentage == 100.0
    
    def test_invalid_lines_are_counted_not_raised(self):
        content = "\n".join(["{bad json", "[1, 2]", connect_line(0), "", "plain text"])
        
        report = self.validator.validate(content, sample_size=10)
        
        assert report.total_lines == 4
        assert report.valid_lines == 1
        assert report.invalid_lines == 3
        assert len(report.errors) == 3
        assert report.errors[0].startswith("Line 1: Invalid JSON")
        assert "Expected a JSON object" in report.errors[1]
        assert report.field_coverage["timestamp"].percentage == 25.0
    
    def test_missing_required_fields_warn(self):
        content = '{"src_ip": "203.0.113.7"}\n{"timestamp": "2024-01-01T00:00:00Z"}'
        
        report = self.validator.validate(content)
        
        assert report.valid_lines == 2
        assert report.warnings == [
            "Line 1: Missing required field: timestamp",
            "Line 1: Missing required field: eventid",
            "Line 2: Missing required field: eventid",
        ]
        assert report.event_types == {}
        assert "eventid" not in report.field_coverage
    
    def test_sample_entries_capped_at_three(self):
        content = "\n".join(connect_line(i) for i in range(6))
        
        report = self.validator.validate(content)
        
        assert len(report.sample) == 3
        assert report.sample[0]["session"] == "s0"
    
    def test_error_messages_bounded(self):
        content = "\n".join("{bad json " + "x" * 500 for _ in range(80))
        
        report = self.validator.validate(content, sample_size=80)
        
        assert report.invalid_lines == 80
        assert len(report.errors) == LogFormatValidator.MAX_MESSAGES
        assert all(len(e) <= LogFormatValidator.MAX_MESSAGE_LENGTH for e in report.errors)
    
    def test_empty_content(self):
        report = self.validator.validate("", sample_size=10)
        
        assert report.total_lines == 0
        assert report.sampled_lines == 0
        assert report.field_coverage == {}


class TestFormatValidationReport:
    
    def test_renders_summary_and_recommendations(self):
        validator = LogFormatValidator()
        content = "\n".join([connect_line(0), "{bad json", '{"timestamp": "2024-01-01T00:00:00Z", "eventid": "x.custom"}'])
        
        text = format_validation_report(validator.validate(content), validator)
        
        assert "Valid JSON lines: 2" in text
        assert "Invalid lines: 1" in text
        assert "[known] cowrie.session.connect: 1" in text
        assert "[unknown] x.custom: 1" in text
        assert "Fix 1 invalid JSON lines" in text
