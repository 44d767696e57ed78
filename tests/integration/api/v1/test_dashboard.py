"""
Test di integrazione per la dashboard
"""
from datetime import datetime, timedelta, timezone

import pytest

from tests.factories.order_factory import create_order, create_order_data, create_relations
from tests.helpers.asserts import assert_error_response, assert_success_response

BASE_URL = "/api/v1/dashboard"


@pytest.fixture
def dashboard_orders(db_session):
    now = datetime.now(timezone.utc)
    relations = create_relations(db_session)
    create_order(db_session, relations, reference="A", order_date=now, order_value=1000.0,
                 initial_payment_amount=400.0, transport_price=2000.0)
    create_order(db_session, relations, reference="B", order_date=now, order_value=500.0,
                 transport_price=3000.0, status="in_transit",
                 expected_start_date=now + timedelta(days=10),
                 etd=now - timedelta(days=20), ata=now - timedelta(days=5))
    return relations


@pytest.mark.integration
def test_stats(user_client, dashboard_orders):
    """✅ GET /dashboard/stats - totali, medie e prossima partenza"""
    data = assert_success_response(user_client.get(f"{BASE_URL}/stats"))

    assert data["total_orders"] == 2
    assert data["total_value"] == 1500.0
    assert data["total_initial_payment"] == 400.0
    assert data["total_pending_payment"] == 1100.0
    assert data["average_order_value"] == 750.0
    assert data["containers_in_transit"] == 1
    assert data["orders_in_transit"] == 1
    assert data["average_delivery_days"] == 15.0
    assert data["next_container_date"] is not None


@pytest.mark.integration
def test_stats_without_orders(user_client):
    """✅ GET /dashboard/stats - nessun ordine: zeri e valori assenti"""
    data = assert_success_response(user_client.get(f"{BASE_URL}/stats"))

    assert data["total_orders"] == 0
    assert data["average_order_value"] == 0.0
    assert data["next_container_date"] is None
    assert data["average_delivery_days"] is None


@pytest.mark.integration
def test_stats_refresh_after_new_order(user_client, dashboard_orders):
    """✅ GET /dashboard/stats dopo la creazione di un ordine - valori aggiornati"""
    assert assert_success_response(user_client.get(f"{BASE_URL}/stats"))["total_orders"] == 2

    user_client.post("/api/v1/orders/", json=create_order_data(dashboard_orders))

    assert assert_success_response(user_client.get(f"{BASE_URL}/stats"))["total_orders"] == 3


@pytest.mark.integration
def test_monthly_breakdown(user_client, dashboard_orders):
    """✅ GET /dashboard/monthly - dodici mesi in ordine cronologico"""
    data = assert_success_response(user_client.get(f"{BASE_URL}/monthly"))

    assert len(data) == 12
    assert [bucket["month"] for bucket in data] == sorted(bucket["month"] for bucket in data)
    assert data[-1]["month"] == datetime.now(timezone.utc).strftime("%Y-%m")
    assert data[-1]["order_count"] == 2
    assert data[-1]["total_value"] == 1500.0


@pytest.mark.integration
def test_transport_price_trend(user_client, dashboard_orders):
    """✅ GET /dashboard/transport-price-trend?months=3 - media per mese"""
    data = assert_success_response(user_client.get(f"{BASE_URL}/transport-price-trend", params={"months": 3}))

    assert len(data) == 3
    assert data[-1]["average_transport_price"] == 2500.0
    assert data[0]["order_count"] == 0


@pytest.mark.integration
@pytest.mark.parametrize("months", [0, 25])
def test_transport_price_trend_out_of_range(user_client, months):
    """❌ GET /dashboard/transport-price-trend - months fuori da 1..24 - 422"""
    response = user_client.get(f"{BASE_URL}/transport-price-trend", params={"months": months})

    assert_error_response(response, 422, "VALIDATION_ERROR")
