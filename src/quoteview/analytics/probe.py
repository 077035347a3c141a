from __future__ import annotations
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from itertools import cycle, islice, product
from statistics import mean
from typing import Callable, Dict, List, Optional, Sequence

from quoteview.extractor.errors import QueryError
from quoteview.extractor.provider import QuoteProvider

LOGGER = logging.getLogger(__name__)


def plan_requests(symbols: Sequence[str], intervals: Sequence[str], n: int) -> List[tuple]:
    """Reparte n peticiones en round-robin sobre símbolo × intervalo."""
    combos = list(product(symbols, intervals))
    if not combos:
        raise ValueError("Hacen falta símbolos e intervalos para el probe.")
    return list(islice(cycle(combos), n))


def _timed_fetch(provider: QuoteProvider, idx: int, symbol: str, interval: str) -> Dict:
    t0 = time.perf_counter()
    try:
        points = provider.fetch(symbol, interval)
        ok, detail = True, f"{len(points)} puntos"
    except QueryError as exc:
        ok, detail = False, f"{exc.kind.value}: {exc}"
    ms = (time.perf_counter() - t0) * 1000.0
    LOGGER.debug("probe #%d %s/%s %.1f ms %s", idx, symbol, interval, ms, detail)
    return {"n": idx, "symbol": symbol, "interval": interval, "ok": ok, "ms": ms, "detail": detail}


def run_probe(provider_factory: Callable[[], QuoteProvider],
              symbols: Sequence[str],
              intervals: Sequence[str],
              n_requests: int = 20,
              threads: int = 20) -> List[Dict]:
    """
    Lanza n_requests consultas simultáneas (pool de `threads`) y devuelve una
    fila por petición, en el orden en que se planificaron.
    Cada hilo construye su propio provider con provider_factory: una
    requests.Session no debe compartirse entre hilos.
    """
    if n_requests <= 0 or threads <= 0:
        raise ValueError("n_requests y threads deben ser > 0")
    plan = plan_requests(symbols, intervals, n_requests)
    local = threading.local()

    def task(idx: int, symbol: str, interval: str) -> Dict:
        provider = getattr(local, "provider", None)
        if provider is None:
            provider = local.provider = provider_factory()
        return _timed_fetch(provider, idx, symbol, interval)

    with ThreadPoolExecutor(max_workers=threads, thread_name_prefix="probe") as pool:
        futures = [pool.submit(task, i + 1, s, iv) for i, (s, iv) in enumerate(plan)]
        return [f.result() for f in futures]


def summarize_probe(rows: List[Dict]) -> Dict[str, Optional[float]]:
    times = [r["ms"] for r in rows]
    ok = sum(1 for r in rows if r["ok"])
    return {
        "count": len(rows),
        "ok": ok,
        "failed": len(rows) - ok,
        "min_ms": min(times) if times else None,
        "mean_ms": mean(times) if times else None,
        "max_ms": max(times) if times else None,
    }
