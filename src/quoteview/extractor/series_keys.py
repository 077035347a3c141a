from __future__ import annotations
from typing import Dict

INTRADAY_KEY = "Time Series (5min)"
DAILY_KEY = "Time Series (Daily)"
WEEKLY_KEY = "Weekly Time Series"
MONTHLY_KEY = "Monthly Time Series"

SERIES_KEYS: Dict[str, str] = {
    "intraday": INTRADAY_KEY,
    "daily": DAILY_KEY,
    "weekly": WEEKLY_KEY,
    "monthly": MONTHLY_KEY,
}


def resolve(interval) -> str:
    """
    Nombre del campo del documento que contiene la serie del intervalo.
    Cualquier valor desconocido cae en la serie diaria (default permisivo:
    la UI sólo ofrece los cuatro intervalos).
    """
    value = getattr(interval, "value", interval)
    if not isinstance(value, str):
        return DAILY_KEY
    return SERIES_KEYS.get(value.strip().lower(), DAILY_KEY)
