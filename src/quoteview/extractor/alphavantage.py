from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, Dict

import requests

from quoteview.extractor.base import Interval
from quoteview.extractor.errors import MalformedResponse
from quoteview.extractor.provider import QuoteProvider
from quoteview.extractor.series_keys import resolve

LOGGER = logging.getLogger(__name__)

API_URL = "https://www.alphavantage.co/query"

FUNCTIONS: Dict[Interval, Dict[str, str]] = {
    Interval.INTRADAY: {"function": "TIME_SERIES_INTRADAY", "interval": "5min"},
    Interval.DAILY: {"function": "TIME_SERIES_DAILY"},
    Interval.WEEKLY: {"function": "TIME_SERIES_WEEKLY"},
    Interval.MONTHLY: {"function": "TIME_SERIES_MONTHLY"},
}


class AlphaVantage(QuoteProvider):
    """Va directo a Alpha Vantage, sin pasar por el backend."""
    name = "alphavantage"

    def __init__(self, api_key: str | None = None, session: requests.Session | None = None,
                 timeout: float | None = None):
        super().__init__(session=session, timeout=timeout)
        self.api_key = api_key or "demo"

    def params(self, symbol: str, interval: Interval) -> Dict[str, str]:
        return {**FUNCTIONS[interval], "symbol": symbol, "apikey": self.api_key}

    def _request(self, symbol: str, interval: Interval) -> requests.Response:
        return self._get(API_URL, params=self.params(symbol, interval))

    def _check_document(self, data: Any) -> None:
        # Alpha Vantage avisa de límites y símbolos inválidos con HTTP 200
        if not isinstance(data, Mapping) or any(resolve(i) in data for i in Interval):
            return
        if "Note" in data:          msg = f"Rate limit Alpha Vantage: {data['Note']}"
        elif "Information" in data: msg = f"Alpha Vantage info: {data['Information']}"
        elif "Error Message" in data: msg = f"Alpha Vantage error: {data['Error Message']}"
        else:
            return
        LOGGER.warning("%s", msg)
        raise MalformedResponse(msg)
