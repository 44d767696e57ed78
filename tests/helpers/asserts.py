"""
Helper per assertion nei test
"""
from typing import Any, Dict, List, Optional

from httpx import Response


def assert_error_response(
    response: Response,
    status_code: int,
    error_code: Optional[str] = None,
    message_contains: Optional[str] = None
) -> Dict[str, Any]:
    """
    Verifica che una response sia un errore con i dettagli specificati.

    Returns:
        Il body JSON, per controlli aggiuntivi sui details.
    """
    assert response.status_code == status_code, \
        f"Expected status {status_code}, got {response.status_code}. Response: {response.text}"

    data = response.json()

    if error_code:
        assert "error_code" in data, f"Response should contain 'error_code'. Got: {data}"
        assert data["error_code"] == error_code, \
            f"Expected error_code '{error_code}', got '{data.get('error_code')}'"

    if message_contains:
        assert "message" in data, f"Response should contain 'message'. Got: {data}"
        assert message_contains.lower() in data["message"].lower(), \
            f"Message should contain '{message_contains}'. Got: {data['message']}"

    return data


def assert_success_response(
    response: Response,
    status_code: int = 200,
    check_fields: Optional[List[str]] = None
) -> Any:
    """
    Verifica che una response sia di successo con i campi specificati.
    """
    assert response.status_code == status_code, \
        f"Expected status {status_code}, got {response.status_code}. Response: {response.text}"

    data = response.json()
    if check_fields:
        for field in check_fields:
            assert field in data, f"Response should contain '{field}'. Got: {list(data.keys())}"
    return data


def assert_pagination_response(response: Response, expected_total: Optional[int] = None) -> Dict[str, Any]:
    """Verifica la struttura {items, total, page, limit} delle liste paginate"""
    data = assert_success_response(response, 200, ["items", "total", "page", "limit"])
    assert isinstance(data["items"], list)
    if expected_total is not None:
        assert data["total"] == expected_total, f"Expected total {expected_total}, got {data['total']}"
    return data


def assert_field_error(response: Response, field: str) -> None:
    """Verifica un errore 422 sul campo indicato"""
    data = assert_error_response(response, 422, "VALIDATION_ERROR")
    locations = [error["loc"] for error in data["details"]["errors"]]
    assert any(field in loc for loc in locations), f"No error for field '{field}'. Got: {locations}"
