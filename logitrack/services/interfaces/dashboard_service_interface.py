from abc import abstractmethod
from typing import Any, Dict, List

from logitrack.core.interfaces import IBaseService


class IDashboardService(IBaseService):

    @abstractmethod
    async def get_stats(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_monthly_breakdown(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def get_transport_price_trend(self, months: int = 6) -> List[Dict[str, Any]]:
        pass
