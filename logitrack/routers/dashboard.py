"""
Dashboard Router
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status

from logitrack.schemas.dashboard_schema import DashboardStatsSchema, MonthlyBucketSchema, TransportPricePointSchema
from logitrack.services.core.wrap import check_authentication
from logitrack.services.interfaces.dashboard_service_interface import IDashboardService
from logitrack.services.routers.auth_service import authorize, db_dependency, get_current_user

router = APIRouter(
    prefix="/api/v1/dashboard",
    tags=["Dashboard"],
)


def get_dashboard_service(db: db_dependency) -> IDashboardService:
    from logitrack.core.container_config import get_configured_container
    return get_configured_container().resolve_with_session(IDashboardService, db)


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=DashboardStatsSchema)
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_stats(
    user: dict = Depends(get_current_user),
    dashboard_service: IDashboardService = Depends(get_dashboard_service)
):
    """
    Statistiche aggregate sugli ordini.

    - **total_pending_payment**: valore totale meno acconti versati, può essere negativo.
    - **next_container_date**: prima data di partenza prevista successiva ad ora.
    - **average_delivery_days**: media ATA - ETD in giorni.
    """
    return await dashboard_service.get_stats()


@router.get("/monthly", status_code=status.HTTP_200_OK, response_model=List[MonthlyBucketSchema])
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_monthly_breakdown(
    user: dict = Depends(get_current_user),
    dashboard_service: IDashboardService = Depends(get_dashboard_service)
):
    """Ultimi 12 mesi in ordine cronologico, mesi senza ordini inclusi"""
    return await dashboard_service.get_monthly_breakdown()


@router.get("/transport-price-trend", status_code=status.HTTP_200_OK,
            response_model=List[TransportPricePointSchema])
@check_authentication
@authorize(roles_permitted=['ADMIN', 'USER'], permissions_required=['R'])
async def get_transport_price_trend(
    user: dict = Depends(get_current_user),
    dashboard_service: IDashboardService = Depends(get_dashboard_service),
    months: int = Query(6, ge=1, le=24)
):
    return await dashboard_service.get_transport_price_trend(months=months)
