"""
Dashboard Service
"""
from datetime import datetime, timezone
from typing import Any, Dict, List

from logitrack.core.cached import cached
from logitrack.core.exceptions import ErrorCode, ValidationException
from logitrack.repository.interfaces.order_repository_interface import IOrderRepository
from logitrack.schemas.dashboard_schema import DashboardStatsSchema
from logitrack.services import dashboard_stats
from logitrack.services.interfaces.dashboard_service_interface import IDashboardService


class DashboardService(IDashboardService):
    """Aggregati calcolati sull'insieme completo degli ordini"""

    def __init__(self, order_repository: IOrderRepository):
        self._order_repository = order_repository

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @cached("dashboard:stats", preset="dashboard")
    async def get_stats(self) -> Dict[str, Any]:
        orders = self._order_repository.get_all_for_aggregates()
        stats = dashboard_stats.compute_stats(orders, self._now())
        return DashboardStatsSchema(**stats).model_dump(mode="json")

    @cached("dashboard:monthly", preset="dashboard")
    async def get_monthly_breakdown(self) -> List[Dict[str, Any]]:
        orders = self._order_repository.get_all_for_aggregates()
        return dashboard_stats.monthly_breakdown(orders, self._now())

    @cached("dashboard:transport_price_trend", preset="dashboard")
    async def get_transport_price_trend(self, months: int = 6) -> List[Dict[str, Any]]:
        await self.validate_business_rules(months)
        orders = self._order_repository.get_all_for_aggregates()
        return dashboard_stats.transport_price_trend(orders, self._now(), months)

    async def validate_business_rules(self, data: Any) -> None:
        if not isinstance(data, int) or not 1 <= data <= dashboard_stats.MAX_TREND_MONTHS:
            raise ValidationException(
                f"months must be between 1 and {dashboard_stats.MAX_TREND_MONTHS}",
                ErrorCode.VALIDATION_ERROR,
                {"field": "months", "value": data}
            )
