"""
Cache a due livelli (memoria + Redis) per le viste di LogiTrack.

Le chiavi hanno la forma ``<salt>:<namespace>:<params>``; l'invalidazione
lavora su pattern glob di namespace (``orders:*``) su entrambi i livelli.
Un errore di cache non deve mai rompere una richiesta: viene loggato e la
lettura prosegue sul database.
"""

import fnmatch
import hashlib
import logging
from time import monotonic
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

import orjson
from cachetools import TTLCache
import redis.asyncio as aioredis

from .settings import get_cache_settings, TTL_PRESETS

logger = logging.getLogger(__name__)


class CacheError(Exception):
    pass


class MemoryLayer:
    """
    Livello in-process. TTLCache limita dimensione e vita massima; ogni voce
    porta anche la propria scadenza, così i preset brevi (liste ordini,
    dashboard) non sopravvivono fino al TTL più lungo.
    """

    def __init__(self, max_items: int, max_ttl: int):
        self._entries: TTLCache = TTLCache(maxsize=max_items, ttl=max_ttl)

    def get(self, key: str) -> Optional[bytes]:
        entry: Optional[Tuple[float, bytes]] = self._entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if expires_at <= monotonic():
            self._entries.pop(key, None)
            return None
        return payload

    def set(self, key: str, payload: bytes, ttl: int) -> None:
        self._entries[key] = (monotonic() + ttl, payload)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def delete_matching(self, pattern: str) -> set:
        matching = {key for key in list(self._entries.keys()) if fnmatch.fnmatchcase(key, pattern)}
        for key in matching:
            self._entries.pop(key, None)
        return matching

    def stats(self) -> Dict[str, Any]:
        return {
            "size": len(self._entries),
            "max_size": self._entries.maxsize,
            "max_ttl": self._entries.ttl,
        }


class CircuitBreaker:
    """Sospende le chiamate a Redis quando il tasso d'errore supera la soglia"""

    MIN_SAMPLES = 10

    def __init__(self, error_threshold: float = 0.5, recovery_timeout: int = 300):
        self.error_threshold = error_threshold
        self.recovery_timeout = recovery_timeout
        self.error_count = 0
        self.request_count = 0
        self.opened_at: Optional[float] = None

    @property
    def state(self) -> str:
        if self.opened_at is None:
            return "closed"
        if monotonic() - self.opened_at >= self.recovery_timeout:
            return "half_open"
        return "open"

    def allow(self) -> bool:
        return self.state != "open"

    def record(self, ok: bool) -> None:
        if ok:
            if self.opened_at is None:
                self.request_count += 1
                return
            logger.info("Cache circuit breaker closed")
            self.opened_at = None
            self.error_count = 0
            self.request_count = 0
            return

        self.error_count += 1
        self.request_count += 1
        if self.state == "half_open":
            self.opened_at = monotonic()
            return
        if self.request_count >= self.MIN_SAMPLES and self.error_count / self.request_count > self.error_threshold:
            self.opened_at = monotonic()
            logger.warning(f"Cache circuit breaker opened after {self.error_count}/{self.request_count} errors")

    def get_status(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "error_count": self.error_count,
            "request_count": self.request_count,
        }


class CacheManager:
    """Cache backend configurabile: ``memory``, ``redis`` o ``hybrid``"""

    def __init__(self):
        self.settings = get_cache_settings()
        self._backend = self.settings.cache_backend
        self._memory: Optional[MemoryLayer] = None
        self._redis: Optional[aioredis.Redis] = None
        self._breaker = CircuitBreaker(
            error_threshold=self.settings.cache_error_threshold,
            recovery_timeout=self.settings.cache_recovery_timeout
        )

    @property
    def enabled(self) -> bool:
        return self.settings.cache_enabled

    async def initialize(self) -> None:
        if not self.settings.cache_enabled:
            logger.info("Cache disabled by configuration")
            return

        if self._backend in ("memory", "hybrid"):
            self._memory = self._new_memory_layer()

        if self._backend in ("redis", "hybrid"):
            try:
                self._redis = aioredis.from_url(
                    self.settings.redis_url,
                    max_connections=self.settings.redis_max_connections,
                    retry_on_timeout=self.settings.redis_retry_on_timeout,
                    decode_responses=False
                )
                await self._redis.ping()
                logger.info(f"Redis cache connected at {self.settings.redis_url}")
            except (aioredis.RedisError, OSError) as e:
                logger.warning(f"Redis connection failed: {e}, falling back to memory-only")
                self._redis = None
                self._backend = "memory"
                if self._memory is None:
                    self._memory = self._new_memory_layer()

    def _new_memory_layer(self) -> MemoryLayer:
        max_ttl = max([self.settings.cache_default_ttl, *TTL_PRESETS.values()])
        logger.info(f"Memory cache initialized with {self.settings.cache_max_mem_items} max items")
        return MemoryLayer(self.settings.cache_max_mem_items, max_ttl)

    async def close(self) -> None:
        if self._redis:
            await self._redis.close()
            self._redis = None
        logger.info("Cache connections closed")

    def _build_key(self, namespace: str, **params) -> str:
        param_str = ":".join(f"{k}={v}" for k, v in sorted(params.items()) if v is not None)
        if len(param_str) > 100:
            param_str = hashlib.md5(param_str.encode()).hexdigest()[:8]
        return f"{self.settings.cache_key_salt}:{namespace}:{param_str}"

    def _get_ttl(self, ttl: Optional[int] = None, preset: Optional[str] = None) -> int:
        if ttl is not None:
            return ttl
        return TTL_PRESETS.get(preset, self.settings.cache_default_ttl)

    def _redis_available(self) -> bool:
        return self._redis is not None and self._breaker.allow()

    async def get(self, key: str) -> Optional[Any]:
        if not self.settings.cache_enabled:
            return None

        payload = self._memory.get(key) if self._memory else None
        if payload is None and self._redis_available():
            try:
                payload = await self._redis.get(key)
                if payload is not None and self._memory:
                    remaining = await self._redis.ttl(key)
                    if remaining > 0:
                        self._memory.set(key, payload, remaining)
                self._breaker.record(True)
            except aioredis.RedisError as e:
                self._breaker.record(False)
                logger.error(f"Redis get error for key {key}: {e}")
                return None

        if payload is None:
            return None
        try:
            return orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            logger.error(f"Corrupted cache entry {key}: {e}")
            await self.delete(key)
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None, preset: Optional[str] = None) -> bool:
        if not self.settings.cache_enabled:
            return False

        try:
            payload = self._serialize(value)
        except CacheError as e:
            logger.error(f"Cache set error for key {key}: {e}")
            return False

        if len(payload) > self.settings.cache_max_value_size:
            logger.warning(f"Value too large for cache: {len(payload)} bytes")
            return False

        ttl_seconds = self._get_ttl(ttl, preset)
        if self._memory:
            self._memory.set(key, payload, ttl_seconds)

        if self._redis_available():
            try:
                await self._redis.setex(key, ttl_seconds, payload)
                self._breaker.record(True)
            except aioredis.RedisError as e:
                self._breaker.record(False)
                logger.error(f"Redis set error for key {key}: {e}")
                return self._memory is not None

        logger.debug(f"Cache set: {key} (TTL: {ttl_seconds}s)")
        return True

    async def delete(self, key: str) -> bool:
        if not self.settings.cache_enabled:
            return False

        if self._memory:
            self._memory.delete(key)

        if self._redis:
            try:
                await self._redis.delete(key)
            except aioredis.RedisError as e:
                logger.error(f"Redis delete error for key {key}: {e}")
                return False
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Elimina le chiavi del namespace indicato (es. ``orders:*``); ritorna quante erano presenti"""
        if not self.settings.cache_enabled:
            return 0

        full_pattern = f"{self.settings.cache_key_salt}:{pattern}"
        deleted = self._memory.delete_matching(full_pattern) if self._memory else set()

        # Le invalidazioni raggiungono Redis anche a circuito aperto
        if self._redis:
            try:
                keys = [key async for key in self._redis.scan_iter(match=full_pattern, count=500)]
                if keys:
                    await self._redis.delete(*keys)
                deleted |= {key.decode() if isinstance(key, bytes) else key for key in keys}
            except aioredis.RedisError as e:
                logger.error(f"Redis delete pattern error for {pattern}: {e}")

        if deleted:
            logger.info(f"Deleted {len(deleted)} keys matching pattern: {pattern}")
        return len(deleted)

    def _serialize(self, value: Any) -> bytes:
        try:
            return orjson.dumps(value, default=_json_default)
        except TypeError as e:
            raise CacheError(f"Failed to serialize value: {e}")

    async def get_stats(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = {
            "enabled": self.settings.cache_enabled,
            "backend": self._backend,
            "circuit_breaker": self._breaker.get_status()
        }
        if self._memory:
            stats["memory"] = self._memory.stats()
        if self._redis:
            try:
                info = await self._redis.info()
                stats["redis"] = {
                    "connected_clients": info.get("connected_clients", 0),
                    "used_memory_human": info.get("used_memory_human", "0B"),
                }
            except aioredis.RedisError as e:
                stats["redis"] = {"error": str(e)}
        return stats


def _json_default(obj):
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


_cache_manager: Optional[CacheManager] = None


async def get_cache_manager() -> CacheManager:
    """Istanza di processo, inizializzata al primo uso"""
    global _cache_manager
    if _cache_manager is None:
        _cache_manager = CacheManager()
        await _cache_manager.initialize()
    return _cache_manager


async def close_cache_manager():
    global _cache_manager
    if _cache_manager:
        await _cache_manager.close()
        _cache_manager = None
