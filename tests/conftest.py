"""
Shared pytest fixtures for Governator tests.

This module provides common fixtures including:
- Redis mocks for queue tests, with and without in-memory data
- A Docker client mock exposing the low-level service API
- httpx clients backed by a recording MockTransport
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

QUEUE_NAME = "redis-queue:name"
DEPLOYS_KEY = f"{QUEUE_NAME}:governator:deploys"
DEPLOY_STATE_URI = "https://deploy-state.test"
CLUSTER = "super"
NOW = 1_700_000_000


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock Redis client for the commands the deploy queue sends."""
    redis = AsyncMock()

    redis.zrangebyscore = AsyncMock(return_value=[])
    redis.zrem = AsyncMock(return_value=0)
    redis.hexists = AsyncMock(return_value=False)
    redis.hget = AsyncMock(return_value=None)

    return redis


@pytest.fixture
def redis_with_data():
    """
    Redis mock with in-memory sorted sets and hashes.

    Every deployer built on this fixture sees the same data, so it can
    stand in for several processes sharing one Redis server.
    """
    sorted_sets = {}
    hashes = {}

    redis = AsyncMock()

    async def mock_zadd(key, mapping):
        members = sorted_sets.setdefault(key, {})
        added = sum(1 for member in mapping if member not in members)
        members.update(mapping)
        return added

    async def mock_zrangebyscore(key, min_score, max_score, start=None, num=None):
        low, high = float(min_score), float(max_score)
        members = sorted(sorted_sets.get(key, {}).items(), key=lambda item: (item[1], item[0]))
        due = [member for member, score in members if low <= score <= high]
        if start is not None and num is not None:
            due = due[start:start + num]
        return due

    async def mock_zrem(key, *members):
        existing = sorted_sets.get(key, {})
        removed = 0
        for member in members:
            if member in existing:
                del existing[member]
                removed += 1
        return removed

    async def mock_hset(key, field, value):
        hashes.setdefault(key, {})[field] = value
        return 1

    async def mock_hexists(key, field):
        return field in hashes.get(key, {})

    async def mock_hget(key, field):
        return hashes.get(key, {}).get(field)

    redis.zadd = mock_zadd
    redis.zrangebyscore = mock_zrangebyscore
    redis.zrem = mock_zrem
    redis.hset = mock_hset
    redis.hexists = mock_hexists
    redis.hget = mock_hget
    redis._sorted_sets = sorted_sets  # Expose for test assertions
    redis._hashes = hashes

    return redis


# =============================================================================
# Docker Mocking Infrastructure
# =============================================================================

def make_service_attrs(name: str = "my-app", image: str = "octoblu/my-app:v0", version: int = 42):
    """Build the dict docker's inspect_service returns for a replicated service."""
    return {
        "ID": f"{name}-service-id",
        "Version": {"Index": version},
        "Spec": {
            "Name": name,
            "Labels": {"com.octoblu.owner": "octoblu"},
            "TaskTemplate": {
                "ContainerSpec": {"Image": image, "Env": ["PORT=80"]},
                "RestartPolicy": {"Condition": "any"},
            },
            "Mode": {"Replicated": {"Replicas": 2}},
            "UpdateConfig": {"Parallelism": 1},
            "EndpointSpec": {"Mode": "vip"},
        },
    }


@pytest.fixture
def docker_client():
    """Docker client mock whose low-level API knows one service, my-app."""
    client = MagicMock()
    client.api.inspect_service = MagicMock(return_value=make_service_attrs())
    client.api.update_service = MagicMock(return_value={"Warnings": None})
    return client


# =============================================================================
# HTTP Mocking Infrastructure
# =============================================================================

@dataclass
class RecordingTransport:
    """Answers every request with a fixed status and remembers what it saw."""

    status_code: int = 200
    requests: List[httpx.Request] = field(default_factory=list)
    error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text="Ok")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def deploy_state_server() -> RecordingTransport:
    return RecordingTransport()


@pytest_asyncio.fixture
async def http_client(deploy_state_server):
    """Async HTTP client routed to the recording deploy-state server."""
    client = httpx.AsyncClient(transport=deploy_state_server.transport)
    yield client
    await client.aclose()


@pytest.fixture
def fixed_clock() -> Callable[[], float]:
    return lambda: NOW


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Tests that exercise several modules together"
    )
