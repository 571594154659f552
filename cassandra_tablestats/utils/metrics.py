"""Metric data structures for the collector pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .value_kind import ValueKind


NANOSECONDS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class AttributeValue:
    """Single bean attribute tagged with its kind."""

    kind: ValueKind
    raw: Any

    @classmethod
    def from_json(cls, value: Any) -> "AttributeValue":
        """Wrap a decoded JSON value."""
        return cls(kind=ValueKind.of(value), raw=value)


AttributeMap = Dict[str, AttributeValue]


@dataclass(frozen=True)
class ResponseDocument:
    """Decoded Jolokia read response."""

    status: int
    timestamp: int
    value: Dict[str, AttributeMap] = field(default_factory=dict)
    error: Optional[str] = None
    error_type: Optional[str] = None
    stacktrace: Optional[str] = None
    request: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the agent reported success."""
        return self.status == 200 and self.error is None

    @property
    def timestamp_ns(self) -> int:
        """Sample timestamp in nanoseconds."""
        return self.timestamp * NANOSECONDS_PER_SECOND


@dataclass(frozen=True)
class OutputLine:
    """One line-protocol record."""

    common_key: str
    tags: Tuple[str, ...]
    fields: Tuple[str, ...]
    timestamp_ns: int

    def render(self) -> str:
        """
        Format as `<common_key>,<tags> <fields> <timestamp_ns>`.

        Returns:
            str: Line without trailing newline
        """
        series: List[str] = [self.common_key, *self.tags]
        return f"{','.join(series)} {','.join(self.fields)} {self.timestamp_ns}"
