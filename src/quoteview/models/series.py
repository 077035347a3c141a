from __future__ import annotations
from dataclasses import dataclass, field
from statistics import mean, pstdev
from typing import Dict, List, Optional, Tuple, Union

from quoteview.extractor.base import PricePoint, to_records
from quoteview.extractor.errors import ErrorKind, QueryError


# -----------------------------
# Resultado de una consulta
# -----------------------------
@dataclass(frozen=True)
class Success:
    """
    Serie ya normalizada (de la más antigua a la más reciente).
    Expone los accesores que la capa de presentación necesita para pintar.
    """
    points: Tuple[PricePoint, ...] = field(default_factory=tuple)
    ok = True

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))

    # ---------- Accesores ----------
    def closes(self) -> List[float]:
        return [p.price for p in self.points]

    def dates(self) -> List[str]:
        return [p.date for p in self.points]

    def span_dates(self) -> Tuple[Optional[str], Optional[str]]:
        if not self.points:
            return None, None
        return self.points[0].date, self.points[-1].date

    def summary(self) -> Dict[str, Optional[float]]:
        start, end = self.span_dates()
        cls = self.closes()
        return {
            "span": f"{start} → {end}" if start and end else None,
            "n_obs": len(cls),
            "close_first": cls[0] if cls else None,
            "close_last": cls[-1] if cls else None,
            "close_mean": mean(cls) if cls else None,
            "close_std": (pstdev(cls) if len(cls) > 1 else 0.0) if cls else None,
            "change_pct": ((cls[-1] / cls[0] - 1.0) if cls and cls[0] else None),
        }

    def to_records(self) -> List[Dict]:
        return to_records(self.points)

    def to_dataframe(self):
        import pandas as pd
        return pd.DataFrame(self.to_records(), columns=["date", "price"])


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    ok = False

    @classmethod
    def from_error(cls, exc: QueryError) -> "Failure":
        return cls(kind=exc.kind, message=str(exc))


QueryResult = Union[Success, Failure]
