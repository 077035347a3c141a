import pytest

from conftest import daily_document
from quoteview.extractor.base import Interval, PricePoint
from quoteview.extractor.errors import ErrorKind, MalformedResponse
from quoteview.extractor.transform import transform


def test_daily_scenario():
    doc = {"Time Series (Daily)": {
        "2024-01-03": {"4. close": "101.5"},
        "2024-01-02": {"4. close": "100.0"},
    }}
    assert transform(doc, "daily") == [
        PricePoint(date="2024-01-02", price=100.0),
        PricePoint(date="2024-01-03", price=101.5),
    ]


def test_empty_series_is_success():
    assert transform({"Weekly Time Series": {}}, Interval.WEEKLY) == []


def test_missing_series_key():
    with pytest.raises(MalformedResponse) as ei:
        transform({"Time Series (Daily)": {}}, Interval.MONTHLY)
    assert ei.value.kind is ErrorKind.MALFORMED
    assert "missing series" in str(ei.value)


@pytest.mark.parametrize("doc", [None, [], "text", {"Time Series (Daily)": ["2024-01-01"]}])
def test_wrong_shape_is_malformed(doc):
    with pytest.raises(MalformedResponse):
        transform(doc, "daily")


def test_round_trip_reverses_descending_input():
    doc = daily_document(10)
    points = transform(doc, "daily")
    assert len(points) == 10
    assert [p.date for p in points] == [f"2024-01-{d:02d}" for d in range(1, 11)]
    assert points[0].price == 100.5
    assert points[-1].price == 109.5


def test_caps_at_30_most_recent():
    big = {"Time Series (Daily)": {
        f"2024-{m:02d}-{d:02d}": {"4. close": str(m * 100 + d)}
        for m in (3, 2, 1) for d in range(28, 0, -1)
    }}
    points = transform(big, "daily")
    assert len(points) == 30
    # newest 30: all 28 days of March plus Feb 28 and Feb 27
    assert points[0] == PricePoint("2024-02-27", 227.0)
    assert points[-1] == PricePoint("2024-03-28", 328.0)
    dates = [p.date for p in points]
    assert dates == sorted(dates)


def test_intraday_timestamps():
    doc = {"Time Series (5min)": {
        "2024-01-02 16:00:00": {"4. close": "150.75"},
        "2024-01-02 15:55:00": {"4. close": "150.10"},
    }}
    points = transform(doc, Interval.INTRADAY)
    assert [p.date for p in points] == ["2024-01-02 15:55:00", "2024-01-02 16:00:00"]


def test_ascending_input_still_sorted():
    doc = {"Time Series (Daily)": {
        "2024-01-01": {"4. close": "1"},
        "2024-01-02": {"4. close": "2"},
        "2024-01-03": {"4. close": "3"},
    }}
    assert [p.price for p in transform(doc, "daily")] == [1.0, 2.0, 3.0]


def test_numeric_close_accepted():
    doc = {"Time Series (Daily)": {"2024-01-01": {"4. close": 12}}}
    assert transform(doc, "daily") == [PricePoint("2024-01-01", 12.0)]


@pytest.mark.parametrize("bad", ["abc", "", "nan", "inf", "-1.0", None, True, {"x": 1}])
def test_bad_close_fails_whole_batch(bad):
    doc = {"Time Series (Daily)": {
        "2024-01-02": {"4. close": "10.0"},
        "2024-01-01": {"4. close": bad},
    }}
    with pytest.raises(MalformedResponse):
        transform(doc, "daily")


def test_missing_close_field():
    doc = {"Time Series (Daily)": {"2024-01-01": {"1. open": "10.0"}}}
    with pytest.raises(MalformedResponse):
        transform(doc, "daily")


def test_entries_beyond_cap_are_not_parsed():
    doc = daily_document(30, start_day=2)
    doc["Time Series (Daily)"]["2024-01-01"] = {"4. close": "oops"}  # 31st entry, oldest
    points = transform(doc, "daily")
    assert len(points) == 30
    assert points[0].date == "2024-01-02"
