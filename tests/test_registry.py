"""Tests for the link registry."""

import pytest
from datetime import timedelta

from shortlink.errors import (
    LinkError,
    InvalidURLError,
    InvalidShortCodeError,
    CodeConflictError,
    ExhaustedKeyspaceError,
)
from shortlink.registry import LinkRegistry
from shortlink.shortcode import ShortCodeGenerator


class FixedGenerator(ShortCodeGenerator):
    """Generator that replays a fixed sequence of codes."""
    
    def __init__(self, codes):
        super().__init__(default_length=6)
        self.codes = list(codes)
        self.calls = 0
    
    def generate_random(self, length=None):
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


class TestLinkRegistry:
    """Test link registry operations."""
    
    def test_create_and_get(self, registry, clock, sample_urls):
        """Create followed by get returns the stored record with no clicks."""
        link = registry.create(sample_urls[0])
        
        assert len(link.short_code) == 6
        assert ShortCodeGenerator.is_valid_format(link.short_code)
        assert link.created_at == clock()
        assert link.expires_at == clock() + timedelta(minutes=30)
        
        stored = registry.get(link.short_code)
        assert stored is not None
        assert stored.long_url == sample_urls[0]
        assert stored.clicks == 0
    
    def test_create_with_validity(self, registry, clock, sample_urls):
        link = registry.create(sample_urls[0], validity=timedelta(minutes=5))
        
        assert link.expires_at - link.created_at == timedelta(minutes=5)
        assert link.expires_at > link.created_at
    
    def test_non_positive_validity_rejected(self, registry, sample_urls):
        with pytest.raises(ValueError, match="positive"):
            registry.create(sample_urls[0], validity=timedelta(0))
        assert len(registry) == 0
    
    def test_create_with_custom_code(self, registry, sample_urls):
        """Test creating with custom code."""
        link = registry.create(sample_urls[0], custom_code="abc")
        
        assert link.short_code == "abc"
        assert "abc" in registry
    
    def test_create_duplicate_custom_code(self, registry, sample_urls):
        """Duplicate custom codes are rejected whatever the payload."""
        registry.create(sample_urls[0], custom_code="duplicate")
        
        with pytest.raises(CodeConflictError, match="already exists"):
            registry.create(sample_urls[1], custom_code="duplicate")
        with pytest.raises(CodeConflictError):
            registry.create(sample_urls[0], custom_code="duplicate", validity=timedelta(days=1))
        
        assert registry.get("duplicate").long_url == sample_urls[0]
    
    def test_custom_code_conflicts_with_generated(self, registry, sample_urls):
        link = registry.create(sample_urls[0])
        
        with pytest.raises(CodeConflictError):
            registry.create(sample_urls[1], custom_code=link.short_code)
    
    def test_invalid_url(self, registry):
        """Test invalid URL rejection."""
        with pytest.raises(InvalidURLError, match="invalid url"):
            registry.create("not-a-url")
        assert len(registry) == 0
    
    def test_non_http_schemes_accepted(self, registry):
        for url in ("ftp://example.com/file", "mailto:user@example.com"):
            assert registry.create(url).long_url == url
    
    def test_max_url_length(self, logger):
        registry = LinkRegistry(logger=logger, max_url_length=40)
        
        with pytest.raises(InvalidURLError, match="too long"):
            registry.create("https://example.com/" + "a" * 40)
        assert len(registry.create("https://example.com/short").short_code) == 6
    
    def test_url_length_unlimited_by_default(self, registry):
        url = "https://example.com/" + "a" * 5000
        assert registry.get(registry.create(url).short_code).long_url == url
    
    def test_invalid_custom_code(self, registry, sample_urls):
        with pytest.raises(InvalidShortCodeError):
            registry.create(sample_urls[0], custom_code="no spaces")
        with pytest.raises(InvalidShortCodeError, match="reserved"):
            registry.create(sample_urls[0], custom_code="health")
    
    def test_custom_code_any_single_segment(self, registry, sample_urls):
        for code in ("api", "my.code", "a" * 40):
            assert registry.create(sample_urls[0], custom_code=code).short_code == code
            assert code in registry
    
    def test_custom_codes_disabled(self, logger, sample_urls):
        registry = LinkRegistry(logger=logger, enable_custom_codes=False)
        
        with pytest.raises(InvalidShortCodeError, match="not enabled"):
            registry.create(sample_urls[0], custom_code="mine")
    
    def test_errors_are_value_errors(self):
        for error in (InvalidURLError, InvalidShortCodeError, CodeConflictError, ExhaustedKeyspaceError):
            assert issubclass(error, LinkError)
            assert issubclass(error, ValueError)
    
    def test_get_nonexistent(self, registry):
        assert registry.get("nonexistent") is None
    
    def test_get_returns_copy(self, registry, sample_urls):
        link = registry.create(sample_urls[0], custom_code="copyme")
        
        fetched = registry.get("copyme")
        fetched.clicks = 99
        link.clicks = 42
        
        assert registry.get("copyme").clicks == 0
    
    def test_increment(self, registry, sample_urls):
        link = registry.create(sample_urls[0])
        
        registry.increment(link.short_code)
        registry.increment(link.short_code)
        
        assert registry.get(link.short_code).clicks == 2
        assert registry.total_clicks() == 2
    
    def test_increment_unknown_is_noop(self, registry):
        registry.increment("missing")
        
        assert registry.get("missing") is None
        assert len(registry) == 0
    
    def test_collision_retries_until_unused(self, logger, clock, sample_urls):
        generator = FixedGenerator(["aaaaaa", "aaaaaa", "aaaaaa", "bbbbbb"])
        registry = LinkRegistry(short_code_generator=generator, logger=logger, clock=clock)
        
        first = registry.create(sample_urls[0])
        second = registry.create(sample_urls[1])
        
        assert first.short_code == "aaaaaa"
        assert second.short_code == "bbbbbb"
        assert generator.calls == 4
    
    def test_collision_retry_cap(self, logger, clock, sample_urls):
        generator = FixedGenerator(["aaaaaa"])
        registry = LinkRegistry(
            short_code_generator=generator,
            logger=logger,
            clock=clock,
            max_collision_retries=3,
        )
        registry.create(sample_urls[0])
        
        with pytest.raises(ExhaustedKeyspaceError):
            registry.create(sample_urls[1])
        
        assert generator.calls == 4
        assert len(registry) == 1
    
    def test_link_expiry_boundary(self, registry, clock, sample_urls):
        link = registry.create(sample_urls[0], validity=timedelta(minutes=1))
        
        clock.advance(seconds=59)
        assert not registry.get(link.short_code).is_expired(registry.now())
        
        clock.advance(seconds=1)
        assert registry.get(link.short_code).is_expired(registry.now())
    
    def test_to_dict(self, registry, sample_urls):
        link = registry.create(sample_urls[0], custom_code="dictme")
        
        data = link.to_dict()
        assert data == {
            "long_url": sample_urls[0],
            "short_code": "dictme",
            "created_at": "2024-01-01T12:00:00Z",
            "expires_at": "2024-01-01T12:30:00Z",
            "clicks": 0,
        }


class TestSweepExpired:
    """Test expiry sweeps."""
    
    def test_sweep_removes_only_expired(self, registry, clock, sample_urls):
        short = registry.create(sample_urls[0], custom_code="short", validity=timedelta(minutes=1))
        exact = registry.create(sample_urls[1], custom_code="exact", validity=timedelta(minutes=10))
        long = registry.create(sample_urls[2], custom_code="long", validity=timedelta(minutes=11))
        
        clock.advance(minutes=10)
        removed = registry.sweep_expired()
        
        assert removed == 2
        assert registry.get(short.short_code) is None
        assert registry.get(exact.short_code) is None
        assert registry.get(long.short_code) is not None
    
    def test_sweep_leaves_live_links_untouched(self, registry, clock, sample_urls):
        link = registry.create(sample_urls[0])
        registry.increment(link.short_code)
        
        assert registry.sweep_expired() == 0
        
        stored = registry.get(link.short_code)
        assert stored.clicks == 1
        assert stored.expires_at == link.expires_at
    
    def test_sweep_frees_custom_code(self, registry, clock, sample_urls):
        registry.create(sample_urls[0], custom_code="reuse", validity=timedelta(minutes=1))
        clock.advance(minutes=2)
        registry.sweep_expired()
        
        link = registry.create(sample_urls[1], custom_code="reuse")
        assert link.long_url == sample_urls[1]
    
    def test_sweep_empty_registry(self, registry):
        assert registry.sweep_expired() == 0
