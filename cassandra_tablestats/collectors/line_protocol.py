"""Flatten Cassandra metric beans into line-protocol records.

Nothing here raises: unknown key segments, arrays, nulls and values of
unrecognised types are dropped, since the upstream schema is loosely typed
and changes between Cassandra versions.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..utils.metrics import AttributeMap, OutputLine, ResponseDocument
from ..utils.value_kind import ValueKind


METRICS_DOMAIN_PREFIX = "org.apache.cassandra.metrics:"

# bean key -> tag name, in output order
TAG_KEYS = (
    ("keyspace", "keyspace"),
    ("name", "metric"),
    ("scope", "cf"),
)


def strip_domain(bean_key: str) -> str:
    """Remove the first occurrence of the Cassandra metrics domain."""
    return bean_key.replace(METRICS_DOMAIN_PREFIX, "", 1)


def matching_skip_pattern(key_path: str, skip_metrics: Iterable[str]) -> Optional[str]:
    """
    Find the skip pattern contained in a stripped bean key.

    Patterns are `,name=<metric>,`, so a skip entry only matches a whole
    comma delimited segment.

    Returns:
        Optional[str]: First matching pattern, None when the bean is kept
    """
    for metric in skip_metrics:
        pattern = f",name={metric},"
        if pattern in key_path:
            return pattern
    return None


def extract_tags(key_path: str) -> Tuple[str, ...]:
    """
    Map bean key segments to output tags.

    Returns:
        Tuple[str, ...]: `keyspace=`, `metric=`, `cf=` tags that are present
    """
    segments: Dict[str, str] = {}
    for part in key_path.split(","):
        key, sep, value = part.partition("=")
        if sep and key not in segments:
            segments[key] = value

    return tuple(
        f"{tag}={segments[key]}" for key, tag in TAG_KEYS if key in segments
    )


def format_fields(attributes: AttributeMap) -> Tuple[List[str], int, int]:
    """
    Format attribute values as typed line-protocol fields.

    Args:
        attributes: Attribute name to tagged value

    Returns:
        Tuple of (fields, numeric_count, zero_count)
    """
    fields: List[str] = []
    numeric_count = 0
    zero_count = 0

    for name, value in attributes.items():
        kind = value.kind
        if kind is ValueKind.INTEGER:
            fields.append(f"{name}={value.raw}i")
        elif kind is ValueKind.FLOAT:
            fields.append(f"{name}={value.raw:f}")
        elif kind is ValueKind.TEXT:
            fields.append(f'{name}="{value.raw}"')
        else:
            # NULL, SEQUENCE, UNRECOGNIZED
            continue

        if kind.is_numeric:
            numeric_count += 1
            if value.raw == 0:
                zero_count += 1

    return fields, numeric_count, zero_count


class LineProtocolTransformer:
    """Turn a decoded Jolokia document into output lines."""

    def __init__(
        self,
        common_key: str,
        skip_metrics: Iterable[str] = (),
        skip_zeros: bool = False,
        logger: logging.Logger = None
    ):
        """
        Initialize transformer.

        Args:
            common_key: `<check name>,host=<hostname>` prefix of every line
            skip_metrics: Metric names never reported
            skip_zeros: Drop beans whose numeric values are all zero
            logger: Logger instance
        """
        self.common_key = common_key
        self.skip_metrics = list(skip_metrics)
        self.skip_zeros = skip_zeros
        self.logger = logger or logging.getLogger(__name__)

    def transform_bean(
        self,
        bean_key: str,
        attributes: AttributeMap,
        timestamp_ns: int
    ) -> Optional[OutputLine]:
        """
        Transform one bean.

        Returns:
            Optional[OutputLine]: None when the bean is skipped or has no values
        """
        key_path = strip_domain(bean_key)

        pattern = matching_skip_pattern(key_path, self.skip_metrics)
        if pattern is not None:
            self.logger.debug(f"Skipping `{key_path}` because it matches `{pattern}`")
            return None

        tags = extract_tags(key_path)
        fields, numeric_count, zero_count = format_fields(attributes)

        if self.skip_zeros and numeric_count > 0 and zero_count == numeric_count:
            self.logger.debug(
                f"Skipping `{key_path}` because it has {zero_count} zero values "
                f"of {numeric_count} numeric values"
            )
            return None

        if not fields:
            return None

        return OutputLine(
            common_key=self.common_key,
            tags=tags,
            fields=tuple(fields),
            timestamp_ns=timestamp_ns,
        )

    def transform(self, document: ResponseDocument) -> Iterator[OutputLine]:
        """Yield one line per reportable bean of the document."""
        timestamp_ns = document.timestamp_ns
        for bean_key, attributes in document.value.items():
            line = self.transform_bean(bean_key, attributes, timestamp_ns)
            if line is not None:
                yield line
