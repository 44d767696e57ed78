"""
Cache invalidation helpers

Each view caches under a namespace; a successful mutation drops every
namespace whose content depends on the mutated entity.
"""

import logging
from typing import Dict, List

from .cache import get_cache_manager

logger = logging.getLogger(__name__)


# Namespace che dipendono da ciascuna entità
DEPENDENT_NAMESPACES: Dict[str, List[str]] = {
    # Le liste ordini riportano i nomi delle anagrafiche collegate
    "supplier": ["suppliers:*", "orders:*", "form_options:*"],
    "carrier": ["carriers:*", "orders:*", "form_options:*"],
    "destination": ["destinations:*", "orders:*", "form_options:*"],
    "container_type": ["container_types:*", "form_options:*"],
    "order": ["orders:*", "dashboard:*", "carriers:stats:*"],
    "order_document": ["orders:*"],
    "user": ["users:*"],
}


async def invalidate_pattern(pattern: str) -> int:
    """Delete all cache keys matching a namespace pattern"""
    cache_manager = await get_cache_manager()
    return await cache_manager.delete_pattern(pattern)


async def invalidate_entity(entity_type: str) -> int:
    """Invalidate every view depending on ``entity_type``"""
    patterns = DEPENDENT_NAMESPACES.get(entity_type, [f"{entity_type}s:*"])
    deleted = 0
    for pattern in patterns:
        deleted += await invalidate_pattern(pattern)
    logger.debug(f"Invalidated {deleted} cache keys after {entity_type} change")
    return deleted

