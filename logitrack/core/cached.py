"""
Cache decorator for async service methods
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional

from .cache import get_cache_manager

logger = logging.getLogger(__name__)

# Parametri mai inclusi nella chiave
_EXCLUDED_PARAMS = {"self", "user", "db", "session", "request", "response", "now"}


def cached(
    namespace: str,
    preset: Optional[str] = None,
    ttl: Optional[int] = None,
):
    """
    Read-through cache for async functions returning JSON-serializable values.

    Args:
        namespace: Cache namespace (e.g. ``"orders:list"``); invalidation
            patterns match on it.
        preset: TTL preset name (from TTL_PRESETS)
        ttl: Explicit TTL in seconds

    The key holds every bound argument except the excluded ones.

    Example:
        @cached("suppliers:list", preset="suppliers_list")
        async def list_suppliers(self, search, page, limit):
            ...
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise ValueError("cached decorator only works with async functions")

        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache_manager = await get_cache_manager()
            if not cache_manager.enabled:
                return await func(*args, **kwargs)

            params = _extract_function_params(signature, args, kwargs)
            cache_key = cache_manager._build_key(namespace, **params)

            cached_result = await cache_manager.get(cache_key)
            if cached_result is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return cached_result

            logger.debug(f"Cache miss: {cache_key}")
            result = await func(*args, **kwargs)
            await cache_manager.set(cache_key, result, ttl=ttl, preset=preset)
            return result

        return wrapper

    return decorator


def _extract_function_params(
    signature: inspect.Signature,
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    """Extract function parameters for key generation"""
    bound_args = signature.bind(*args, **kwargs)
    bound_args.apply_defaults()

    params: Dict[str, Any] = {}
    for name, value in bound_args.arguments.items():
        if name in _EXCLUDED_PARAMS:
            continue
        # I valori None restano nella chiave come stringa vuota
        params[name] = "" if value is None else getattr(value, "value", value)
    return params
