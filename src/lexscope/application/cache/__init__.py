"""Application cache – keys and the TTL map used for user contexts."""
from lexscope.application.cache.keys import USER_CONTEXT_PREFIX, user_context_key
from lexscope.application.cache.ttl import CacheStats, TTLCache

__all__ = ["USER_CONTEXT_PREFIX", "CacheStats", "TTLCache", "user_context_key"]
