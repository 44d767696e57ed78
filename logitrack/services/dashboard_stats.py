"""
Aggregati della dashboard calcolati sulla lista degli ordini.

Funzioni pure: ricevono gli ordini (qualunque oggetto con gli attributi del
modello Order) e l'istante corrente, così da essere testabili senza database.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from logitrack.models.order import OrderStatus
from logitrack.services.core.tool import ensure_utc, month_key

SECONDS_PER_DAY = 86400
MAX_TREND_MONTHS = 24


def _amount(value: Optional[float]) -> float:
    return float(value or 0)


def _status_value(status: Any) -> str:
    return getattr(status, "value", status)


def trailing_months(now: datetime, count: int) -> List[str]:
    """Chiavi ``YYYY-MM`` del mese corrente e dei ``count - 1`` precedenti, in ordine cronologico"""
    now = ensure_utc(now)
    year, month = now.year, now.month
    keys = []
    for _ in range(count):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    keys.reverse()
    return keys


def compute_stats(orders: Iterable[Any], now: datetime) -> Dict[str, Any]:
    """
    Statistiche aggregate.

    Gli importi mancanti valgono zero; il saldo da pagare non viene limitato
    a zero (un ordine pagato in eccesso lo rende negativo).
    """
    now = ensure_utc(now)
    orders = list(orders)

    in_transit = 0
    total_value = 0.0
    total_initial_payment = 0.0
    next_container_date = None
    delivery_days: List[float] = []

    for order in orders:
        if _status_value(order.status) == OrderStatus.IN_TRANSIT.value:
            in_transit += 1
        total_value += _amount(order.order_value)
        total_initial_payment += _amount(order.initial_payment_amount)

        expected = ensure_utc(order.expected_start_date)
        if expected is not None and expected > now:
            if next_container_date is None or expected < next_container_date:
                next_container_date = expected

        if order.etd is not None and order.ata is not None:
            elapsed = ensure_utc(order.ata) - ensure_utc(order.etd)
            delivery_days.append(elapsed.total_seconds() / SECONDS_PER_DAY)

    total_orders = len(orders)
    average_order_value = total_value / total_orders if total_orders else 0.0
    average_delivery_days = round(sum(delivery_days) / len(delivery_days), 2) if delivery_days else None

    return {
        "containers_in_transit": in_transit,
        "orders_in_transit": in_transit,
        "total_orders": total_orders,
        "total_value": round(total_value, 2),
        "total_initial_payment": round(total_initial_payment, 2),
        "total_pending_payment": round(total_value - total_initial_payment, 2),
        "average_order_value": round(average_order_value, 2),
        "next_container_date": next_container_date,
        "average_delivery_days": average_delivery_days,
    }


def monthly_breakdown(orders: Iterable[Any], now: datetime, months: int = 12) -> List[Dict[str, Any]]:
    """Numero di ordini e valore totale per mese (per ``order_date``) sugli ultimi ``months`` mesi"""
    buckets = {key: {"month": key, "order_count": 0, "total_value": 0.0} for key in trailing_months(now, months)}

    for order in orders:
        if order.order_date is None:
            continue
        bucket = buckets.get(month_key(order.order_date))
        if bucket is None:
            continue
        bucket["order_count"] += 1
        bucket["total_value"] += _amount(order.order_value)

    for bucket in buckets.values():
        bucket["total_value"] = round(bucket["total_value"], 2)
    return list(buckets.values())


def transport_price_trend(orders: Iterable[Any], now: datetime, months: int = 6) -> List[Dict[str, Any]]:
    """
    Prezzo medio del trasporto per mese sugli ultimi ``months`` mesi.

    I mesi senza ordini riportano media e conteggio pari a zero.

    Raises:
        ValueError: se ``months`` è fuori dall'intervallo 1..24.
    """
    if months < 1 or months > MAX_TREND_MONTHS:
        raise ValueError(f"months must be between 1 and {MAX_TREND_MONTHS}")

    totals = {key: [0, 0.0] for key in trailing_months(now, months)}
    for order in orders:
        if order.order_date is None:
            continue
        entry = totals.get(month_key(order.order_date))
        if entry is None:
            continue
        entry[0] += 1
        entry[1] += _amount(order.transport_price)

    return [
        {
            "month": key,
            "order_count": count,
            "average_transport_price": round(total / count, 2) if count else 0.0,
        }
        for key, (count, total) in totals.items()
    ]


CARRIER_PRICE_MONTHS = 6


def carrier_stats(orders: Iterable[Any], carriers: Iterable[Any], now: datetime,
                  months: int = CARRIER_PRICE_MONTHS) -> List[Dict[str, Any]]:
    """
    Statistiche di trasporto per vettore, nell'ordine di ``carriers``.

    ``carriers`` sono coppie ``(id, name)``. Per ogni vettore:

    - ``total_transports``: tutti i suoi ordini;
    - ``active_transports``: gli ordini ``in_transit``;
    - ``average_price``: media delle medie mensili del prezzo di trasporto
      sugli ultimi ``months`` mesi (per ``order_date``), considerando solo i
      mesi con almeno un prezzo positivo;
    - ``price_variation``: variazione percentuale tra l'ultima e la prima media
      mensile; 0 con meno di due mesi o se la prima media è zero.
    """
    window = set(trailing_months(now, months))
    per_carrier: Dict[Any, Dict[str, Any]] = {}
    for order in orders:
        entry = per_carrier.setdefault(order.carrier_id, {"total": 0, "active": 0, "prices": {}})
        entry["total"] += 1
        if _status_value(order.status) == OrderStatus.IN_TRANSIT.value:
            entry["active"] += 1

        price = _amount(order.transport_price)
        if order.order_date is None or price <= 0:
            continue
        key = month_key(order.order_date)
        if key in window:
            entry["prices"].setdefault(key, []).append(price)

    result = []
    for carrier_id, name in carriers:
        entry = per_carrier.get(carrier_id, {"total": 0, "active": 0, "prices": {}})
        monthly = [sum(prices) / len(prices) for _, prices in sorted(entry["prices"].items())]
        average = sum(monthly) / len(monthly) if monthly else 0.0
        variation = 0.0
        if len(monthly) > 1 and monthly[0]:
            variation = (monthly[-1] - monthly[0]) / monthly[0] * 100
        result.append({
            "carrier_id": carrier_id,
            "carrier_name": name,
            "total_transports": entry["total"],
            "active_transports": entry["active"],
            "average_price": round(average, 2),
            "price_variation": round(variation, 2),
        })
    return result
