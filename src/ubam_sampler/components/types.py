"""
Shared types for uBAM sampling components.
"""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class ProgressSnapshot:
    """State of the last emitted progress report."""

    last_report_time: float
    last_report_total: int = 0


@dataclass
class SamplingResult:
    """Outcome of a single sampling run."""

    input_url: str
    output_path: str
    target_bases: int
    total_bases: int = 0
    records_written: int = 0
    elapsed_seconds: float = 0.0
    error: Optional[str] = None  # Message of the error that ended the run early

    @property
    def completed(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result = asdict(self)
        result["completed"] = self.completed
        return result
