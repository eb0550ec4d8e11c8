from datetime import date, timedelta

import pytest

from plugins.fx_rates.core import (
    AllAvailable,
    CurrencyCode,
    InvalidCurrencyError,
    PROVIDER_FLOOR,
    TimeSeries,
    Trailing,
    build_history_series,
    history_range_from_days,
    history_start,
    trim_series,
)
from plugins.fx_rates.core.history import BUFFER_DAYS, MAX_TRAILING_DAYS

TODAY = date(2024, 6, 3)


def _business_days(start: date, count: int) -> list[date]:
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def _rows(days, quote="USD"):
    return {day.isoformat(): {quote: 1.0 + index / 100} for index, day in enumerate(days)}


class RecordingClient:
    def __init__(self, rates):
        self.rates = rates
        self.calls = []

    def fetch_time_series(self, start, end=None, *, base=None, symbols=None):
        self.calls.append({"start": start, "end": end, "base": base, "symbols": symbols})
        ordered = sorted(self.rates)
        return TimeSeries(
            base=base,
            start_date=ordered[0] if ordered else start.isoformat(),
            end_date=ordered[-1] if ordered else start.isoformat(),
            rates=self.rates,
        )


def test_trailing_week_keeps_last_seven_points():
    days = _business_days(date(2024, 5, 1), 18)
    # provider order is not guaranteed
    rows = dict(reversed(list(_rows(days).items())))
    client = RecordingClient(rows)
    series = build_history_series(client, "EUR", "USD", Trailing(7), today=TODAY)
    assert len(series.points) == 7
    assert [point.date for point in series.points] == [day.isoformat() for day in days[-7:]]
    assert series.points[-1].value == pytest.approx(1.17)
    assert client.calls[0]["start"] == TODAY - timedelta(days=7 + BUFFER_DAYS)
    assert client.calls[0]["base"] is CurrencyCode.EUR
    assert client.calls[0]["symbols"] == [CurrencyCode.USD]


def test_short_series_is_returned_whole():
    days = _business_days(date(2024, 5, 28), 4)
    series = build_history_series(RecordingClient(_rows(days)), "EUR", "USD", Trailing(30), today=TODAY)
    assert len(series.points) == 4


def test_all_available_starts_at_provider_floor_and_is_untrimmed():
    days = _business_days(PROVIDER_FLOOR, 40)
    client = RecordingClient(_rows(days, quote="GBP"))
    series = build_history_series(client, "usd", "gbp", AllAvailable(), today=TODAY)
    assert client.calls[0]["start"] == date(1999, 1, 4)
    assert len(series.points) == 40
    assert series.start_date == "1999-01-04"
    assert series.to_dict()["quote"] == "GBP"


def test_same_currency_rejected_before_fetch():
    client = RecordingClient({})
    with pytest.raises(InvalidCurrencyError):
        build_history_series(client, "USD", "usd", Trailing(7), today=TODAY)
    assert client.calls == []


def test_history_start_clamps_to_floor():
    assert history_start(Trailing(30), date(1999, 1, 20)) == PROVIDER_FLOOR
    assert history_start(Trailing(30), TODAY) == TODAY - timedelta(days=40)


def test_trailing_window_is_capped():
    window = Trailing(10_000)
    assert window.effective_days == MAX_TRAILING_DAYS
    assert history_start(window, TODAY) == TODAY - timedelta(days=MAX_TRAILING_DAYS + BUFFER_DAYS)


@pytest.mark.parametrize("days", [0, -3, 2.5, True, "7"])
def test_trailing_needs_positive_int(days):
    with pytest.raises(ValueError):
        Trailing(days)


def test_trim_skips_non_numeric_and_non_positive_values():
    rows = {
        "2024-04-29": {"USD": 0},
        "2024-04-30": {"USD": -1.2},
        "2024-05-02": {"USD": 1.07},
        "2024-05-01": {"USD": "n/a"},
        "2024-05-03": {"GBP": 0.85},
        "2024-05-06": {"USD": 1.08},
    }
    points = trim_series(rows, "USD", AllAvailable())
    assert [point.to_dict() for point in points] == [
        {"date": "2024-05-02", "value": 1.07},
        {"date": "2024-05-06", "value": 1.08},
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, Trailing(7)),
        ("abc", Trailing(7)),
        ("0", Trailing(7)),
        ("-5", Trailing(7)),
        ("30", Trailing(30)),
        ("90.9", Trailing(90)),
        ("1825", Trailing(1825)),
        ("1826", AllAvailable()),
        ("inf", Trailing(7)),
    ],
)
def test_history_range_from_days(raw, expected):
    assert history_range_from_days(raw) == expected
