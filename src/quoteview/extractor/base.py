from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List

from quoteview.extractor.errors import ValidationError

MAX_POINTS = 30


class Interval(str, Enum):
    INTRADAY = "intraday"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: "Interval | str") -> "Interval":
        """Convierte 'daily', 'DAILY' o Interval.DAILY en Interval; ValidationError si no existe."""
        if isinstance(value, Interval):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(i.value for i in cls)
            raise ValidationError(f"Intervalo no soportado: {value!r} (usa {choices}).") from None


@dataclass(frozen=True)
class PricePoint:
    date: str
    price: float


def to_records(points: Iterable[PricePoint]) -> List[Dict[str, Any]]:
    return [asdict(p) for p in points]


def normalize_symbol(symbol: str | None) -> str:
    if symbol is None or not symbol.strip():
        raise ValidationError("Ingresa un símbolo.")
    return symbol.strip().upper()
