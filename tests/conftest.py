"""Shared pytest configuration and fixtures."""

import json
import pytest

from cassandra_tablestats.config.models import CollectorConfig
from cassandra_tablestats.utils.logger import setup_logger


BASE_URL = "http://h:1778/jolokia"

READ_URL = (
    "http://h:1778/jolokia/read/"
    "org.apache.cassandra.metrics:type=ColumnFamily,keyspace=*,scope=*,name=*"
)

TIMESTAMP = 1700000000


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TABLESTATS_* variables of the host out of the tests."""
    for var in [
        "TABLESTATS_NAME",
        "TABLESTATS_JOLOKIA_URL",
        "TABLESTATS_DEBUG",
        "TABLESTATS_STDERR",
        "TABLESTATS_SKIP_ZEROS",
        "TABLESTATS_SKIP",
        "TABLESTATS_TIMEOUT",
        "TABLESTATS_CONFIG",
    ]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", debug=True, use_stderr=True)


@pytest.fixture
def config():
    """Configuration pointing at a fake agent."""
    return CollectorConfig(name="cassandra", jolokia=BASE_URL)


@pytest.fixture
def payload():
    """Jolokia read response with one all-zero bean and one mixed bean."""
    return {
        "request": {
            "mbean": "org.apache.cassandra.metrics:keyspace=*,name=*,scope=*,type=ColumnFamily",
            "type": "read",
        },
        "status": 200,
        "timestamp": TIMESTAMP,
        "value": {
            "org.apache.cassandra.metrics:keyspace=ks1,name=PendingFlushes,scope=tbl1,type=ColumnFamily": {
                "Count": 0,
            },
            "org.apache.cassandra.metrics:keyspace=ks1,name=ReadLatency,scope=tbl1,type=ColumnFamily": {
                "Count": 42,
                "OneMinuteRate": 0.0,
                "LatencyUnit": "MICROSECONDS",
                "RecentValues": [0, 1, 2],
                "Max": None,
            },
        },
    }


@pytest.fixture
def payload_bytes(payload):
    """Encoded response body."""
    return json.dumps(payload).encode("utf-8")
