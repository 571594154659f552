"""Pydantic configuration models for the table metrics collector."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


DEFAULT_JOLOKIA_URL = "http://localhost:1778/jolokia"

DEFAULT_SKIP_METRICS = [
    "CasCommitLatency",
    "CasCommitTotalLatency",
    "CasPrepareLatency",
    "CasPrepareTotalLatency",
    "CasProposeLatency",
    "CasProposeTotalLatency",
    "ColUpdateTimeDeltaHistogram",
    "CompressionMetadataOffHeapMemoryUsed",
    "CompressionRatio",
    "RowCacheHit",
    "RowCacheHitOutOfRange",
    "RowCacheMiss",
    "SpeculativeRetries",
]


def split_csv(value) -> List[str]:
    """Flatten a CSV string or a list of CSV strings into stripped names."""
    if value is None:
        return []
    items = [value] if isinstance(value, str) else list(value)
    names = []
    for item in items:
        names.extend(part.strip() for part in str(item).split(","))
    return [name for name in names if name]


class CollectorConfig(BaseModel):
    """Resolved configuration for one collection run."""
    name: str
    jolokia: str = DEFAULT_JOLOKIA_URL
    debug: bool = False
    stderr: bool = False
    skip_zeros: bool = False
    skip: List[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_METRICS))
    timeout: Optional[float] = Field(default=None, gt=0)  # None waits forever

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Check name becomes the measurement, it cannot be blank."""
        v = v.strip()
        if not v:
            raise ValueError('Check name must not be empty')
        return v

    @field_validator('jolokia')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v

    @field_validator('skip', mode='before')
    @classmethod
    def parse_skip(cls, v):
        """Accept CSV strings as well as lists; null keeps the default list."""
        if v is None:
            return list(DEFAULT_SKIP_METRICS)
        return split_csv(v)
