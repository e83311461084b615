import logging

from fastapi.testclient import TestClient

from fxwidget.core import errors
from fxwidget.main import create_app
from fxwidget.services.rates.base import RatesUnavailableError, RateTableProvider
from fxwidget.services.rates.table_service import RateTableService


def _form(**overrides):
    data = {
        "amount_raw": "1",
        "last_amount": "1",
        "from_code": "USD",
        "to_code": "EUR",
        "action": "update",
    }
    data.update(overrides)
    return data


class TestHealth:
    def test_health_does_not_fetch(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "ok"
        assert body["rate_provider"] == "static"
        assert body["rates_loaded"] is False

    def test_request_id_echoed(self, client):
        r = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert r.headers["X-Request-ID"] == "abc123"

    def test_unknown_route_json(self, client):
        r = client.get("/nope")
        assert r.status_code == 404
        assert r.json()["error"] == "not_found"


class TestJsonApi:
    def test_rates(self, client):
        r = client.get("/api/rates")
        assert r.status_code == 200
        body = r.json()
        assert body["base"] == "USD"
        assert body["currencies"] == sorted(body["currencies"])
        assert body["rates"]["USD"] == 1.0
        assert body["date"]

    def test_convert(self, client):
        r = client.get("/api/convert", params={"amount": 100, "from_code": "USD", "to_code": "EUR"})
        assert r.status_code == 200
        body = r.json()
        assert body["headline_amount"] == "100.00"
        assert body["converted_amount"] == "92.000000"
        assert body["direct_rate_line"] == "1 USD = 0.920000 EUR"
        assert body["inverse_rate_line"] == "1 EUR = 1.086957 USD"

    def test_convert_unknown_code_falls_back(self, client):
        r = client.get("/api/convert", params={"amount": 1, "from_code": "zzz", "to_code": "EUR"})
        assert r.status_code == 200
        assert r.json()["cross_rate"] == "0.920000"

    def test_large_amount_formats(self, client):
        r = client.get("/api/convert", params={"amount": 1e20, "from_code": "USD", "to_code": "JPY"})
        assert r.status_code == 200
        body = r.json()
        assert body["headline_amount"] == f"{10**20:,}.00"
        assert body["converted_amount"].endswith(".000000")

    def test_negative_amount_rejected(self, client):
        r = client.get("/api/convert", params={"amount": -1})
        assert r.status_code == 422
        assert r.json()["error"] == "validation_error"

    def test_missing_amount_rejected(self, client):
        r = client.get("/api/convert")
        assert r.status_code == 422


class TestPage:
    def test_default_page(self, client):
        r = client.get("/")
        assert r.status_code == 200
        html = r.text
        assert "1.00 USD to EUR - Convert USD to EUR" in html
        assert "0.920000" in html
        assert "1 EUR = 1.086957 USD" in html
        assert "1 USD = 0.920000 EUR" in html
        assert '<option value="ARS"' in html

    def test_page_query_state(self, client):
        r = client.get("/", params={"amount": "2500", "from_code": "eur", "to_code": "usd"})
        assert "2,500.00 EUR to USD" in r.text

    def test_swap(self, client):
        r = client.post("/", data=_form(amount_raw="100", action="swap"))
        assert r.status_code == 200
        html = r.text
        assert "100.00 EUR to USD" in html
        assert "108.695652" in html
        assert "1 EUR = 1.086957 USD" in html
        assert "1 USD = 0.920000 EUR" in html

    def test_invalid_amount_keeps_last(self, client):
        r = client.post("/", data=_form(amount_raw="abc", last_amount="250"))
        html = r.text
        assert "250.00 USD to EUR" in html
        assert "230.000000" in html
        assert 'value="abc"' in html
        assert "Not a valid amount" in html

    def test_negative_amount_keeps_last(self, client):
        r = client.post("/", data=_form(amount_raw="-5", last_amount="10"))
        assert "10.00 USD to EUR" in r.text

    def test_empty_amount_is_zero(self, client):
        r = client.post("/", data=_form(amount_raw="", last_amount="10"))
        html = r.text
        assert "0.00 USD to EUR" in html
        assert "0.000000" in html
        assert "Not a valid amount" not in html

    def test_large_amount_page(self, client):
        r = client.post("/", data=_form(amount_raw="1e25", last_amount="1"))
        assert r.status_code == 200
        assert f"{10**25:,}.00 USD to EUR" in r.text
        assert "Not a valid amount" not in r.text

    def test_selection_change(self, client):
        r = client.post("/", data=_form(amount_raw="10", from_code="EUR", to_code="GBP"))
        assert "8.586957" in r.text


class _DownProvider(RateTableProvider):
    name = "down"

    def fetch_table(self, base_currency: str = "USD"):
        raise RatesUnavailableError("upstream unreachable")


def test_rates_unavailable_is_503(static_settings):
    app = create_app(
        settings_override=static_settings,
        rate_table_service=RateTableService(_DownProvider()),
    )
    with TestClient(app) as c:
        r = c.get("/api/convert", params={"amount": 1})
        assert r.status_code == 503
        assert r.json()["error"] == "rates_unavailable"
        assert c.get("/").status_code == 503
        assert c.get("/health").json()["rates_loaded"] is False


def test_unhandled_error_logged_with_traceback(caplog):
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        exc = e
    with caplog.at_level(logging.ERROR, logger="fxwidget.errors"):
        resp = errors.server_error_handler(None, exc)
    assert resp.status_code == 500
    record = next(r for r in caplog.records if r.getMessage() == "unhandled exception")
    assert record.exc_info is not None
    assert record.exc_info[0] is RuntimeError
    assert record.exc_info[2] is not None
