import pytest
from fastapi.testclient import TestClient

from fxwidget.core.config import Settings
from fxwidget.main import create_app
from fxwidget.models.rates import RateTable


@pytest.fixture
def mock_rates():
    return {
        "USD": 1,
        "EUR": 0.92,
        "GBP": 0.79,
        "JPY": 149.50,
        "ARS": 808.50,
    }


@pytest.fixture
def rate_table(mock_rates):
    return RateTable(base="USD", date="2024-01-02", rates=mock_rates)


@pytest.fixture
def static_settings():
    return Settings(rate_provider="static", debug=False)


@pytest.fixture
def client(static_settings):
    app = create_app(settings_override=static_settings)
    with TestClient(app) as c:
        yield c
