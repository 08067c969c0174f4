"""
Log format validation.
"""

from honeylog.validation.validator import LogFormatValidator, format_validation_report

__all__ = ["LogFormatValidator", "format_validation_report"]
