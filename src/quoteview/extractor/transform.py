from __future__ import annotations
import math
from collections.abc import Mapping
from itertools import islice
from typing import Any, List

from quoteview.extractor.base import MAX_POINTS, PricePoint
from quoteview.extractor.errors import MalformedResponse
from quoteview.extractor.series_keys import resolve

CLOSE_FIELD = "4. close"


def _parse_close(ds: str, vals: Any) -> float:
    if not isinstance(vals, Mapping) or CLOSE_FIELD not in vals:
        raise MalformedResponse(f"Falta '{CLOSE_FIELD}' en {ds}")
    raw = vals[CLOSE_FIELD]
    if isinstance(raw, bool):
        raise MalformedResponse(f"Cierre no numérico en {ds}: {raw!r}")
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise MalformedResponse(f"Cierre no numérico en {ds}: {raw!r}") from None
    if not math.isfinite(price) or price < 0:
        raise MalformedResponse(f"Cierre fuera de rango en {ds}: {raw!r}")
    return price


def transform(document: Any, interval) -> List[PricePoint]:
    """
    Documento crudo → lista de PricePoint lista para graficar.

    - Lee la serie bajo resolve(interval); si no está → MalformedResponse.
    - Se queda con las primeras MAX_POINTS entradas en el orden del API
      (las más recientes) y las devuelve de la más antigua a la más nueva.
    - Un solo cierre inválido invalida todo el lote.
    """
    key = resolve(interval)
    series = document.get(key) if isinstance(document, Mapping) else None
    if not isinstance(series, Mapping):
        raise MalformedResponse("missing series for interval")

    points = [
        PricePoint(date=str(ds), price=_parse_close(ds, vals))
        for ds, vals in islice(series.items(), MAX_POINTS)
    ]
    points.reverse()
    # el API entrega de nuevo a viejo; si no, ordenar la ventana igualmente
    if any(a.date > b.date for a, b in zip(points, points[1:])):
        points.sort(key=lambda p: p.date)
    return points
