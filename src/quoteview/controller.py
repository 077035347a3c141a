from __future__ import annotations
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from quoteview.extractor.base import Interval, normalize_symbol
from quoteview.extractor.errors import ErrorKind, QueryError
from quoteview.extractor.provider import QuoteProvider
from quoteview.models.series import Failure, QueryResult, Success
from quoteview.models.state import RequestState

LOGGER = logging.getLogger(__name__)


class QueryController:
    """
    Orquesta una consulta: RequestState.start() → provider.fetch() → RequestState.complete().

    run() es síncrono; submit() hace la llamada de red en un hilo del pool y
    devuelve un Future. En ambos casos un símbolo vacío lanza ValidationError
    de inmediato, antes de pasar a LOADING.
    """

    def __init__(self, provider: QuoteProvider, state: Optional[RequestState] = None, max_workers: int = 4):
        self.provider = provider
        self.state = state or RequestState()
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    def run(self, symbol: str, interval: Interval | str = Interval.DAILY) -> QueryResult:
        request_id = self.state.start(symbol, interval)
        return self._execute(request_id, normalize_symbol(symbol), Interval.parse(interval))

    def submit(self, symbol: str, interval: Interval | str = Interval.DAILY) -> "Future[QueryResult]":
        request_id = self.state.start(symbol, interval)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="quoteview")
        return self._executor.submit(self._execute, request_id, normalize_symbol(symbol), Interval.parse(interval))

    def _execute(self, request_id: int, symbol: str, interval: Interval) -> QueryResult:
        try:
            result: QueryResult = Success(self.provider.fetch(symbol, interval))
        except QueryError as exc:
            LOGGER.info("consulta #%d falló (%s): %s", request_id, exc.kind.value, exc)
            result = Failure.from_error(exc)
        except Exception as exc:
            # cualquier otro fallo también cierra la consulta en ERROR antes de propagarse
            LOGGER.exception("consulta #%d falló inesperadamente", request_id)
            self.state.complete(request_id, Failure(ErrorKind.NETWORK, str(exc) or type(exc).__name__))
            raise
        self.state.complete(request_id, result)
        return result

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
