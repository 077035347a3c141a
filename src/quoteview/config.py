from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "http://localhost:8080/api/stocks"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None   # None = lo que decida el transporte
    alphavantage_api_key: str = "demo"


def load_settings() -> Settings:
    """
    Lee la configuración del entorno (ya cargado con load_dotenv() por el CLI).
    QUOTEVIEW_BASE_URL, QUOTEVIEW_TIMEOUT, ALPHAVANTAGE_API_KEY.
    """
    raw_timeout = os.getenv("QUOTEVIEW_TIMEOUT", "").strip()
    timeout: Optional[float] = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"QUOTEVIEW_TIMEOUT debe ser numérico, recibido: {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError("QUOTEVIEW_TIMEOUT debe ser > 0")

    return Settings(
        base_url=os.getenv("QUOTEVIEW_BASE_URL") or DEFAULT_BASE_URL,
        timeout=timeout,
        alphavantage_api_key=os.getenv("ALPHAVANTAGE_API_KEY") or "demo",
    )
