"""Credential store implementations."""

from .redis_store import RedisClient, RedisCredentialStore, get_redis
from .yaml_store import YamlCredentialStore

__all__ = ["RedisClient", "RedisCredentialStore", "YamlCredentialStore", "get_redis"]
