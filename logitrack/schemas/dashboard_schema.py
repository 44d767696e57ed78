from typing import Optional

from pydantic import BaseModel

from logitrack.schemas.common_schema import UTCDateTime


class DashboardStatsSchema(BaseModel):
    """
        Statistiche aggregate sugli ordini.

        Attributes:
            total_pending_payment: ``total_value - total_initial_payment``; può essere negativo.
            average_order_value: 0 quando non ci sono ordini.
            next_container_date: Primo ``expected_start_date`` successivo all'istante corrente.
            average_delivery_days: Media di (ATA - ETD) in giorni, None se nessun ordine ha entrambe le date.
    """
    containers_in_transit: int
    orders_in_transit: int
    total_orders: int
    total_value: float
    total_initial_payment: float
    total_pending_payment: float
    average_order_value: float
    next_container_date: Optional[UTCDateTime] = None
    average_delivery_days: Optional[float] = None


class MonthlyBucketSchema(BaseModel):
    month: str
    order_count: int
    total_value: float


class TransportPricePointSchema(BaseModel):
    month: str
    order_count: int
    average_transport_price: float


class CarrierStatsSchema(BaseModel):
    """
        Statistiche di trasporto di un vettore.

        Attributes:
            average_price: Media delle medie mensili del prezzo di trasporto negli ultimi sei mesi.
            price_variation: Variazione percentuale tra l'ultima e la prima media mensile.
    """
    carrier_id: str
    carrier_name: str
    total_transports: int
    active_transports: int
    average_price: float
    price_variation: float
