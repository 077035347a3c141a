import pytest

from quoteview.extractor.base import Interval
from quoteview.extractor.series_keys import resolve


@pytest.mark.parametrize("interval,key", [
    (Interval.INTRADAY, "Time Series (5min)"),
    (Interval.DAILY, "Time Series (Daily)"),
    (Interval.WEEKLY, "Weekly Time Series"),
    (Interval.MONTHLY, "Monthly Time Series"),
    ("weekly", "Weekly Time Series"),
    ("MONTHLY", "Monthly Time Series"),
])
def test_resolve_known_intervals(interval, key):
    assert resolve(interval) == key


@pytest.mark.parametrize("value", ["hourly", "", None, 42, "quarterly"])
def test_resolve_unknown_falls_back_to_daily(value):
    assert resolve(value) == "Time Series (Daily)"
