from __future__ import annotations
import logging
from typing import Any, Dict, List

import requests

from quoteview.extractor.base import Interval, PricePoint, normalize_symbol
from quoteview.extractor.errors import HttpError, NetworkError
from quoteview.extractor.transform import transform

LOGGER = logging.getLogger(__name__)


class QuoteProvider:
    """
    Base de los clientes de cotizaciones.

    fetch() valida la entrada antes de tocar la red, hace UNA petición GET,
    traduce el status HTTP y el JSON, y delega en transform(). Las subclases
    sólo deciden la URL/params (_request) y pueden revisar el documento
    antes de transformarlo (_check_document).
    """
    name: str = "base"

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None):
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, symbol: str, interval: Interval | str = Interval.DAILY) -> List[PricePoint]:
        sym = normalize_symbol(symbol)
        ivl = Interval.parse(interval)

        r = self._request(sym, ivl)
        if not r.ok:
            LOGGER.info("%s respondió HTTP %s para %s/%s", self.name, r.status_code, sym, ivl.value)
            raise HttpError(r.status_code)

        try:
            data = r.json()
        except (ValueError, RecursionError) as exc:
            raise NetworkError(f"Respuesta no es JSON válido: {exc}") from exc

        self._check_document(data)
        points = transform(data, ivl)
        LOGGER.info("%s: %d puntos para %s/%s", self.name, len(points), sym, ivl.value)
        return points

    # ---------- Hooks para subclases ----------
    def _request(self, symbol: str, interval: Interval) -> requests.Response:
        raise NotImplementedError

    def _check_document(self, data: Any) -> None:
        return None

    def _get(self, url: str, params: Dict[str, Any] | None = None) -> requests.Response:
        LOGGER.debug("GET %s params=%s", url, {k: v for k, v in (params or {}).items() if k != "apikey"})
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.error("Fallo de red en %s: %s", url, exc)
            raise NetworkError(f"Fallo de red: {exc}") from exc
