"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from shortlink.config import Config
from shortlink.registry import LinkRegistry
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from shortlink_web import create_app


class FakeClock:
    """Controllable stand-in for the registry clock."""
    
    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start
    
    def __call__(self) -> datetime:
        return self.current
    
    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def registry(short_code_generator, logger, clock):
    """Create a registry driven by the fake clock."""
    registry = LinkRegistry(
        short_code_generator=short_code_generator,
        logger=logger.getChild("registry"),
        clock=clock,
    )
    yield registry
    registry.clear()


@pytest.fixture
def config():
    return Config(_env_file=None, base_url="http://testserver")


@pytest.fixture
def app(registry, config, logger):
    """Create test FastAPI app sharing the registry fixture."""
    return create_app(config=config, registry=registry, logger=logger)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def parse_timestamp():
    """Parser for the RFC3339 'Z' timestamps in JSON responses."""
    def parse(value: str) -> datetime:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parse
