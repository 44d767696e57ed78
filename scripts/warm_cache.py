#!/usr/bin/env python3
"""
Cache warming script for LogiTrack API
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from logitrack.core.cache import close_cache_manager, get_cache_manager
from logitrack.core.container_config import get_configured_container
from logitrack.core.settings import get_cache_settings
from logitrack.database import SessionLocal
from logitrack.services.interfaces.container_type_service_interface import IContainerTypeService
from logitrack.services.interfaces.dashboard_service_interface import IDashboardService
from logitrack.services.interfaces.order_service_interface import IOrderService


async def warm_reference_data(db):
    """Warm up form options and container types"""
    print("Warming up reference data cache...")
    container = get_configured_container()

    await container.resolve_with_session(IContainerTypeService, db).list_container_types()
    print("Container types cached")

    await container.resolve_with_session(IOrderService, db).get_form_options()
    print("Form options cached")


async def warm_dashboard(db):
    """Warm up dashboard aggregates"""
    print("Warming up dashboard cache...")
    dashboard_service = get_configured_container().resolve_with_session(IDashboardService, db)

    await dashboard_service.get_stats()
    await dashboard_service.get_monthly_breakdown()
    await dashboard_service.get_transport_price_trend(6)
    print("Dashboard cached")


async def main():
    settings = get_cache_settings()
    if not settings.cache_enabled:
        print("Cache is disabled, nothing to warm")
        return

    cache_manager = await get_cache_manager()
    db = SessionLocal()
    try:
        await warm_reference_data(db)
        await warm_dashboard(db)
        stats = await cache_manager.get_stats()
        print(f"Cache stats: {stats}")
    finally:
        db.close()
        await close_cache_manager()


if __name__ == "__main__":
    asyncio.run(main())
