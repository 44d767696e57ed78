"""
Test unitari per le etichette localizzate
"""
import pytest

from logitrack.core.i18n import account_status_label, resolve_locale, status_badge, status_label


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [
    ("en", "en-US"),
    ("pt-BR", "pt-BR"),
    ("pt", "pt-PT"),
    ("fr-FR,en;q=0.8", "en-US"),
    ("en-AU", "en-US"),
    ("de", "pt-PT"),
    (None, "pt-PT"),
    ("", "pt-PT"),
])
def test_resolve_locale(value, expected):
    assert resolve_locale(value) == expected


@pytest.mark.unit
def test_status_badge():
    assert status_badge("in_production", "en-US") == {
        "value": "in_production",
        "label": "In Production",
        "color": "warning",
    }


@pytest.mark.unit
def test_unknown_status_falls_back_to_value():
    assert status_label("lost", "pt-PT") == "lost"


@pytest.mark.unit
def test_account_status_label():
    assert account_status_label(True, "pt-PT") == "Confirmado"
    assert account_status_label(False, "en-US") == "Pending"
