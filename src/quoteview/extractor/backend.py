from __future__ import annotations
from urllib.parse import quote

import requests

from quoteview.config import DEFAULT_BASE_URL
from quoteview.extractor.base import Interval
from quoteview.extractor.provider import QuoteProvider


class BackendClient(QuoteProvider):
    """Consulta el backend proxy: GET {base_url}/{SYMBOL}/{interval}."""
    name = "backend"

    def __init__(self, base_url: str | None = None, session: requests.Session | None = None,
                 timeout: float | None = None):
        super().__init__(session=session, timeout=timeout)
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")

    def endpoint(self, symbol: str, interval: Interval) -> str:
        return f"{self.base_url}/{quote(symbol, safe='')}/{interval.value}"

    def _request(self, symbol: str, interval: Interval) -> requests.Response:
        return self._get(self.endpoint(symbol, interval))
