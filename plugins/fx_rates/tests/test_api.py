from datetime import date
from types import MappingProxyType

import pytest

from app import create_app
from plugins.fx_rates import api as api_module
from plugins.fx_rates.core import client as client_module
from plugins.fx_rates.core import (
    CurrencyCode,
    RateTable,
    TimeSeries,
    UpstreamError,
    parse_currency,
    parse_symbols,
)


class StubClient:
    def __init__(self, rates=None, error=None, series=None):
        self.rates = rates or {"USD": 1.08, "GBP": 0.85}
        self.error = error
        self.series = series or {}
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def _table(self, base, symbols, day="2024-05-17"):
        base = parse_currency(base or "EUR", field="base")
        wanted = parse_symbols(symbols)
        rates = {
            CurrencyCode(code): value
            for code, value in self.rates.items()
            if not wanted or CurrencyCode(code) in wanted
        }
        return RateTable(base=base, date=day, rates=MappingProxyType(rates))

    def fetch_latest_rates(self, base=None, symbols=None):
        self.calls.append(("latest", base, symbols))
        if self.error:
            raise self.error
        return self._table(base, symbols)

    def fetch_historical_rates(self, day, base=None, symbols=None):
        self.calls.append(("historical", day, base, symbols))
        if self.error:
            raise self.error
        return self._table(base, symbols, day=day.isoformat())

    def fetch_time_series(self, start, end=None, *, base=None, symbols=None):
        self.calls.append(("series", start, base, symbols))
        if self.error:
            raise self.error
        ordered = sorted(self.series)
        return TimeSeries(
            base=base,
            start_date=ordered[0] if ordered else start.isoformat(),
            end_date=ordered[-1] if ordered else start.isoformat(),
            rates=self.series,
        )


@pytest.fixture
def client():
    app = create_app("TestingConfig")
    return app.test_client()


@pytest.fixture
def stub(monkeypatch):
    holder = {"client": StubClient()}
    monkeypatch.setattr(api_module, "_rate_client", lambda settings: holder["client"])
    return holder


def test_currencies_lists_supported_codes(client):
    response = client.get("/api/fx/currencies")
    assert response.status_code == 200
    payload = response.get_json()["data"]
    assert payload["default_base"] == "EUR"
    assert len(payload["currencies"]) == 12
    assert "NZD" in payload["currencies"]


def test_latest_success_sets_short_cache(client, stub):
    response = client.get("/api/fx/latest?base=EUR&symbols=USD")
    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["data"] == {"base": "EUR", "date": "2024-05-17", "rates": {"USD": 1.08}}
    assert response.headers["Cache-Control"] == "public, max-age=60, s-maxage=60"


def test_latest_rejects_unknown_currency(client, stub):
    response = client.get("/api/fx/latest?base=XYZ")
    assert response.status_code == 400
    body = response.get_json()
    assert body["success"] is False
    assert body["error"]["code"] == "fx.invalid_request"
    assert response.headers["Cache-Control"] == "no-store"


def test_unknown_query_parameter_is_rejected(client, stub):
    response = client.get("/api/fx/latest?bogus=1")
    assert response.status_code == 400


def test_upstream_failure_maps_to_502(client, stub):
    stub["client"] = StubClient(error=UpstreamError("FX API error: 503 Service Unavailable", status_code=503))
    response = client.get("/api/fx/latest")
    assert response.status_code == 502
    error = response.get_json()["error"]
    assert error["code"] == "fx.upstream_error"
    assert error["details"] == {"upstream_status": 503}
    assert response.headers["Cache-Control"] == "no-store"


def test_historical_invalid_date_is_400_without_fetch(client, stub):
    response = client.get("/api/fx/historical?date=2023-13-01")
    assert response.status_code == 400
    assert stub["client"].calls == []


def test_historical_requires_date(client, stub):
    response = client.get("/api/fx/historical")
    assert response.status_code == 400


def test_historical_past_day_is_immutable(client, stub):
    response = client.get("/api/fx/historical?date=2020-03-02&symbols=GBP")
    assert response.status_code == 200
    assert response.get_json()["data"]["date"] == "2020-03-02"
    assert "immutable" in response.headers["Cache-Control"]
    assert stub["client"].calls[0][1] == date(2020, 3, 2)


def test_convert_latest_through_base(client, stub):
    response = client.get("/api/fx/convert?amount=100&from=USD&to=EUR")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["value"] == pytest.approx(92.5926, rel=1e-5)
    assert data["from"] == "USD"
    assert data["to"] == "EUR"
    assert data["base"] == "EUR"
    # the base currency is never requested as a symbol
    assert stub["client"].calls[0] == ("latest", CurrencyCode.EUR, [CurrencyCode.USD])


def test_convert_cross_rate(client, stub):
    response = client.get("/api/fx/convert?amount=10&from=usd&to=gbp")
    assert response.status_code == 200
    assert response.get_json()["data"]["value"] == pytest.approx(10 / 1.08 * 0.85)


def test_convert_missing_rate_is_422(client, stub):
    response = client.get("/api/fx/convert?amount=10&from=EUR&to=PLN")
    assert response.status_code == 422
    error = response.get_json()["error"]
    assert error["code"] == "fx.missing_rate"
    assert error["details"] == {"missing": ["PLN"]}


@pytest.mark.parametrize("query", ["amount=abc&from=USD&to=EUR", "amount=1&from=USD", "amount=inf&from=USD&to=EUR"])
def test_convert_bad_input_is_400(client, stub, query):
    response = client.get(f"/api/fx/convert?{query}")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "fx.invalid_request"


def test_convert_on_historical_date(client, stub):
    response = client.get("/api/fx/convert?amount=1&from=EUR&to=USD&date=2021-06-01")
    assert response.status_code == 200
    assert response.get_json()["data"]["date"] == "2021-06-01"
    assert "immutable" in response.headers["Cache-Control"]


def test_history_defaults_to_week(client, stub):
    series = {f"2024-05-{day:02d}": {"USD": 1.0 + day / 100} for day in range(1, 21)}
    stub["client"] = StubClient(series=series)
    response = client.get("/api/fx/history")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["base"] == "EUR"
    assert data["quote"] == "USD"
    assert len(data["points"]) == 7
    assert data["points"][-1]["date"] == "2024-05-20"
    assert response.headers["Cache-Control"] == "public, max-age=300, s-maxage=300"


def test_history_beyond_five_years_requests_everything(client, stub):
    stub["client"] = StubClient(series={"1999-01-04": {"GBP": 0.71}})
    response = client.get("/api/fx/history?from=EUR&to=GBP&days=4000")
    assert response.status_code == 200
    assert stub["client"].calls[0][1] == date(1999, 1, 4)


def test_history_same_currency_is_400(client, stub):
    response = client.get("/api/fx/history?from=USD&to=USD")
    assert response.status_code == 400


def test_each_request_closes_its_session(client, monkeypatch, fake_session, fake_response):
    opened = []

    def _session():
        body = {"base": "EUR", "date": "2024-05-17", "rates": {"USD": 1.08}}
        session = fake_session([fake_response(body)])
        opened.append(session)
        return session

    monkeypatch.setattr(client_module.requests, "Session", _session)
    for _ in range(3):
        assert client.get("/api/fx/latest?symbols=USD").status_code == 200
    assert len(opened) == 3
    assert all(session.closed for session in opened)


def test_session_closed_when_provider_fails(client, monkeypatch, fake_session, connection_error):
    opened = []

    def _session():
        session = fake_session(error=connection_error)
        opened.append(session)
        return session

    monkeypatch.setattr(client_module.requests, "Session", _session)
    assert client.get("/api/fx/history?from=EUR&to=USD").status_code == 502
    assert opened[0].closed is True


def test_stub_client_is_closed_after_convert(client, stub):
    client.get("/api/fx/convert?amount=10&from=USD&to=EUR")
    assert stub["client"].closed is True


@pytest.mark.parametrize("currency", ["EUR", "JPY"])
def test_convert_same_currency_skips_provider(client, stub, currency):
    response = client.get(f"/api/fx/convert?amount=12.5&from={currency}&to={currency.lower()}")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["value"] == 12.5
    assert data["base"] == "EUR"
    assert stub["client"].calls == []


def test_convert_same_currency_keeps_requested_date(client, stub):
    response = client.get("/api/fx/convert?amount=1&from=USD&to=USD&date=2021-06-01")
    assert response.status_code == 200
    assert response.get_json()["data"]["date"] == "2021-06-01"
    assert "immutable" in response.headers["Cache-Control"]
    assert stub["client"].calls == []


def test_convert_same_currency_still_validates_amount(client, stub):
    response = client.get("/api/fx/convert?amount=nan&from=USD&to=USD")
    assert response.status_code == 400
