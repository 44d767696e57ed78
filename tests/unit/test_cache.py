"""
Test unitari per cache in memoria, decorator e invalidazione
"""
import pytest

import logitrack.core.cache as cache_module
from logitrack.core.cache import CircuitBreaker, get_cache_manager
from logitrack.core.cached import cached
from logitrack.core.invalidation import invalidate_entity


class CountingService:

    def __init__(self):
        self.calls = 0

    @cached("suppliers:list", preset="suppliers_list")
    async def list_contacts(self, search=None, page=1, limit=20):
        self.calls += 1
        return {"search": search, "page": page, "calls": self.calls}

    @cached("dashboard:stats", preset="dashboard")
    async def stats(self, user=None):
        self.calls += 1
        return {"calls": self.calls}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_memory_set_get_delete_pattern():
    manager = await get_cache_manager()
    key = manager._build_key("orders:list", page=1, search="po")

    await manager.set(key, {"items": []}, preset="orders_list")

    assert await manager.get(key) == {"items": []}
    assert await manager.delete_pattern("orders:*") == 1
    assert await manager.get(key) is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cached_reuses_result_per_arguments():
    service = CountingService()

    first = await service.list_contacts(search="acme")
    second = await service.list_contacts(search="acme")
    other = await service.list_contacts(search="acme", page=2)

    assert first == second
    assert other["page"] == 2
    assert service.calls == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_user_is_not_part_of_the_key():
    service = CountingService()

    await service.stats(user={"id": "a"})
    await service.stats(user={"id": "b"})

    assert service.calls == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_supplier_change_drops_dependent_views():
    manager = await get_cache_manager()
    for namespace in ("suppliers:list", "orders:list", "form_options", "dashboard:stats"):
        await manager.set(manager._build_key(namespace, page=1), {"cached": namespace})

    deleted = await invalidate_entity("supplier")

    assert deleted == 3
    assert await manager.get(manager._build_key("dashboard:stats", page=1)) == {"cached": "dashboard:stats"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_order_change_drops_dashboard():
    service = CountingService()
    await service.stats()

    await invalidate_entity("order")
    await service.stats()

    assert service.calls == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_memory_entry_expires_with_its_own_preset(monkeypatch):
    clock = {"now": 1000.0}
    monkeypatch.setattr(cache_module, "monotonic", lambda: clock["now"])
    manager = await get_cache_manager()
    orders_key = manager._build_key("orders:list", page=1)
    suppliers_key = manager._build_key("suppliers:list", page=1)
    await manager.set(orders_key, {"items": [1]}, preset="orders_list")
    await manager.set(suppliers_key, {"items": [2]}, preset="suppliers_list")

    clock["now"] += 31

    assert await manager.get(orders_key) is None
    assert await manager.get(suppliers_key) == {"items": [2]}


@pytest.mark.unit
def test_circuit_breaker_opens_on_error_rate_and_recovers(monkeypatch):
    clock = {"now": 0.0}
    monkeypatch.setattr(cache_module, "monotonic", lambda: clock["now"])
    breaker = CircuitBreaker(error_threshold=0.5, recovery_timeout=60)

    for _ in range(4):
        breaker.record(True)
    for _ in range(6):
        breaker.record(False)

    assert breaker.state == "open"
    assert not breaker.allow()

    clock["now"] += 61
    assert breaker.state == "half_open"
    breaker.record(True)
    assert breaker.state == "closed"
    assert breaker.get_status()["request_count"] == 0


@pytest.mark.unit
def test_circuit_breaker_stays_closed_below_threshold():
    breaker = CircuitBreaker(error_threshold=0.5, recovery_timeout=60)

    for _ in range(6):
        breaker.record(True)
    for _ in range(5):
        breaker.record(False)

    assert breaker.state == "closed"
