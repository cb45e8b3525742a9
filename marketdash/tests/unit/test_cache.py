# marketdash/tests/unit/test_cache.py
"""Unit tests for the provider TTL cache."""
from marketdash.market_data.cache import TTLCache


class TestTTLCache:
    """Test expiry and LRU eviction."""

    def test_make_key(self):
        """Keys are operation:symbol with an optional parameter."""
        assert TTLCache.make_key("quote", "AAPL") == "quote:AAPL"
        assert TTLCache.make_key("chart", "AAPL", "1M") == "chart:AAPL:1M"
        assert TTLCache.make_key("indices") == "indices:"

    def test_hit_within_ttl(self, clock):
        """Entries are returned until the TTL elapses."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("quote:AAPL", {"price": 1})
        clock.advance(59.9)
        assert cache.get("quote:AAPL") == {"price": 1}

    def test_expired_at_ttl(self, clock):
        """An entry exactly TTL old is a miss and is dropped."""
        cache = TTLCache(ttl_seconds=60, clock=clock)
        cache.set("quote:AAPL", 1)
        clock.advance(60)
        assert cache.get("quote:AAPL") is None
        assert "quote:AAPL" not in cache
        assert len(cache) == 0

    def test_set_overwrites_and_restarts_ttl(self, clock):
        """Writing an existing key replaces the value and its timestamp."""
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("k", 1)
        clock.advance(8)
        cache.set("k", 2)
        clock.advance(8)
        assert cache.get("k") == 2

    def test_lru_eviction(self, clock):
        """The least recently used key is evicted when full."""
        cache = TTLCache(ttl_seconds=60, max_size=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")  # b is now least recently used
        cache.set("c", 3)
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_clear(self, clock):
        cache = TTLCache(clock=clock)
        cache.set("a", 1)
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None
