"""
Cache services.
"""
from typing import List
from .base import ServiceBuilder


class RedisService(ServiceBuilder):
    KIND = "redis"
    GROUP = "cache"
    IMAGE = "redis"
    DEFAULT_VERSION = "3.2"

    def ports(self) -> List[int]:
        return [6379]


class MemcacheService(ServiceBuilder):
    KIND = "memcache"
    GROUP = "cache"
    IMAGE = "memcached"
    DEFAULT_VERSION = "1.4"

    def ports(self) -> List[int]:
        return [11211]
