"""
Format validation report model.
"""

from typing import Any, Dict, List
from pydantic import Field

from honeylog.models.blob import CamelModel


class FieldCoverage(CamelModel):
    """How many sampled lines carried a field."""
    
    count: int
    percentage: float = Field(description="Share of sampled lines, one decimal")


class ValidationReport(CamelModel):
    """
    Schema conformance of a sample of raw log lines.
    
    total_lines counts every non-blank line; all other counts cover only
    the sampled lines.
    """
    
    total_lines: int = 0
    sampled_lines: int = 0
    valid_lines: int = 0
    invalid_lines: int = 0
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    sample: List[Dict[str, Any]] = Field(default_factory=list)
    event_types: Dict[str, int] = Field(default_factory=dict)
    field_coverage: Dict[str, FieldCoverage] = Field(default_factory=dict)
