"""String enums shared across the service."""

from enum import StrEnum


class Severity(StrEnum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    LOW = "low"

    @classmethod
    def from_label(cls, label: object) -> "Severity":
        """Case-insensitive lookup; anything unrecognised is LOW."""
        if isinstance(label, str):
            try:
                return cls(label.strip().lower())
            except ValueError:
                pass
        return cls.LOW

    @property
    def rank(self) -> int:
        """Higher is more severe."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
    Severity.LOW: 0,
}


class ActivityKind(StrEnum):
    GENERATION = "generation"
    SECURITY_ANALYSIS = "security-analysis"
    PUBLISH = "publish"


class StatusKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class PipelineState(StrEnum):
    IDLE = "idle"
    BUSY = "busy"
    SETTLED = "settled"
    FAILED = "failed"


class OperationClass(StrEnum):
    GENERATE = "generate"
    PUBLISH = "publish"


class OutcomeKind(StrEnum):
    REJECTED = "rejected"
    SETTLED = "settled"
    FAILED = "failed"


class CodeStyle(StrEnum):
    ASYNC = "async"
    SYNC = "sync"


class DocFormat(StrEnum):
    MARKDOWN = "markdown"
    HTML = "html"
