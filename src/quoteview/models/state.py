from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from quoteview.extractor.base import Interval, PricePoint, normalize_symbol
from quoteview.models.series import Failure, QueryResult, Success

LOGGER = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StateSnapshot:
    """Vista inmutable de RequestState que reciben los observadores."""
    symbol: Optional[str]
    interval: Optional[Interval]
    phase: Phase
    result: Optional[QueryResult]
    request_id: int

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def points(self) -> Tuple[PricePoint, ...]:
        return self.result.points if isinstance(self.result, Success) else ()

    @property
    def error_message(self) -> Optional[str]:
        return self.result.message if isinstance(self.result, Failure) else None


Listener = Callable[[StateSnapshot], None]


class RequestState:
    """
    Ciclo de vida de la consulta: IDLE → LOADING → SUCCESS | ERROR.

    - start() acepta cualquier fase y reemplaza lo anterior (sin cola).
    - Cada start() obtiene un request_id creciente; complete() con un id
      viejo se descarta, así una respuesta lenta no pisa a una más nueva.
    - Las escrituras van bajo lock; los observadores se notifican fuera de él.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []
        self._symbol: Optional[str] = None
        self._interval: Optional[Interval] = None
        self._phase = Phase.IDLE
        self._result: Optional[QueryResult] = None
        self._request_id = 0

    # ---------- Lectura ----------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def request_id(self) -> int:
        return self._request_id

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> StateSnapshot:
        return StateSnapshot(self._symbol, self._interval, self._phase, self._result, self._request_id)

    # ---------- Observadores ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def _notify(self, snap: StateSnapshot):
        with self._lock:
            listeners = list(self._listeners)
        for fn in listeners:
            fn(snap)

    # ---------- Transiciones ----------
    def start(self, symbol: str, interval: Interval | str = Interval.DAILY) -> int:
        """Pasa a LOADING y devuelve el id de la consulta. Símbolo vacío → ValidationError sin cambiar de fase."""
        sym = normalize_symbol(symbol)
        ivl = Interval.parse(interval)
        with self._lock:
            self._request_id += 1
            self._symbol = sym
            self._interval = ivl
            self._phase = Phase.LOADING
            self._result = None
            snap = self._snapshot()
        LOGGER.debug("consulta #%d: %s/%s → loading", snap.request_id, sym, ivl.value)
        self._notify(snap)
        return snap.request_id

    def complete(self, request_id: int, result: QueryResult) -> bool:
        """Aplica el resultado si corresponde a la consulta vigente; si no, lo descarta."""
        with self._lock:
            current_id = self._request_id
            if request_id != current_id or self._phase is not Phase.LOADING:
                stale = True
            else:
                stale = False
                self._result = result
                self._phase = Phase.SUCCESS if isinstance(result, Success) else Phase.ERROR
                snap = self._snapshot()
        if stale:
            LOGGER.warning("Resultado descartado de la consulta #%d (vigente: #%d)", request_id, current_id)
            return False
        LOGGER.debug("consulta #%d → %s", request_id, snap.phase.value)
        self._notify(snap)
        return True
