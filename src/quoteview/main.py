from __future__ import annotations
import argparse, csv, json, logging, sys
from functools import partial
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from dotenv import load_dotenv

# === Clientes (descarga) ===
from quoteview.config import Settings, load_settings
from quoteview.extractor.alphavantage import AlphaVantage
from quoteview.extractor.backend import BackendClient
from quoteview.extractor.base import Interval
from quoteview.extractor.errors import ValidationError
from quoteview.extractor.provider import QuoteProvider

# === Estado y orquestación ===
from quoteview.controller import QueryController
from quoteview.models.series import Success
from quoteview.analytics.probe import run_probe, summarize_probe

PROVIDERS = {
    "backend": BackendClient,
    "alphavantage": AlphaVantage,
}
INTERVALS = [i.value for i in Interval]


def build_provider(name: str, settings: Settings, base_url: Optional[str] = None) -> QuoteProvider:
    if name == "alphavantage":
        return AlphaVantage(api_key=settings.alphavantage_api_key, timeout=settings.timeout)
    return BackendClient(base_url=base_url or settings.base_url, timeout=settings.timeout)


def split_list(s: Optional[str]) -> List[str]:
    return [x.strip() for x in (s or "").split(",") if x.strip()]


def save_csv(path: Path, rows: List[Dict]):
    path.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        print(f"No hay datos para guardar: {path}")
        return
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)
    print(f"Guardado CSV: {path}")


def save_parquet(path: Path, result: Success):
    path.parent.mkdir(parents=True, exist_ok=True)
    if not result.points:
        print(f"No hay datos para guardar: {path}")
        return
    result.to_dataframe().to_parquet(path, index=False)
    print(f"Guardado Parquet: {path}")


def print_table(symbol: str, interval: str, result: Success):
    print(f"{symbol} - {interval}")
    if not result.points:
        print("(serie vacía)")
        return
    for p in result.points:
        print(f"  {p.date:<20} {p.price:>12.4f}")
    s = result.summary()
    print(f"n={s['n_obs']} · span: {s['span']} · media: {s['close_mean']:.4f} · var: {(s['change_pct'] or 0)*100:.2f}%")


def run_query(args: argparse.Namespace) -> int:
    settings = load_settings()
    provider = build_provider(args.provider, settings, base_url=args.base_url)

    with QueryController(provider) as ctl:
        try:
            result = ctl.run(args.symbol, args.interval)
        except ValidationError as exc:
            print(f"❌ {exc}", file=sys.stderr)
            return 1

    if not isinstance(result, Success):
        print(f"❌ {result.message}", file=sys.stderr)
        return 1

    symbol = args.symbol.strip().upper()
    if args.format == "json":
        print(json.dumps({"symbol": symbol, "interval": args.interval, "points": result.to_records()}, indent=2))
    elif args.format in ("csv", "parquet"):
        out = Path(args.outdir) / provider.name / args.interval / f"{symbol}.{args.format}"
        if args.format == "parquet":
            save_parquet(out, result)
        else:
            save_csv(out, result.to_records())
    else:
        print_table(symbol, args.interval, result)
    return 0


def run_probe_cmd(args: argparse.Namespace) -> int:
    settings = load_settings()
    make_provider = partial(build_provider, args.provider, settings, base_url=args.base_url)
    symbols = split_list(args.symbols)
    intervals = split_list(args.intervals)
    unknown = [i for i in intervals if i not in INTERVALS]
    if unknown:
        print(f"❌ Intervalos no soportados: {', '.join(unknown)}", file=sys.stderr)
        return 1

    print(f"📊 Probe: {args.requests} peticiones, {args.threads} hilos, provider={args.provider}")
    try:
        rows = run_probe(make_provider, symbols, intervals, n_requests=args.requests, threads=args.threads)
    except ValueError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    for r in rows:
        mark = "✅" if r["ok"] else "❌"
        print(f"{mark} #{r['n']:>3} {r['symbol']:<6} {r['interval']:<8} {r['ms']:>8.1f} ms  {r['detail']}")

    s = summarize_probe(rows)
    print(f"Total: {s['count']} · ok: {s['ok']} · fallidas: {s['failed']} · "
          f"min/media/max: {s['min_ms']:.1f}/{s['mean_ms']:.1f}/{s['max_ms']:.1f} ms")
    if args.report:
        pd.DataFrame(rows).to_csv(args.report, index=False)
        print(f"Guardado CSV: {args.report}")
    return 0 if s["failed"] == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    p = argparse.ArgumentParser(description="Consulta de cotizaciones (últimos 30 cierres).")
    p.add_argument("-v", "--verbose", action="store_true", help="Logging DEBUG.")
    sub = p.add_subparsers(dest="action", required=True)

    # ---- query
    p_q = sub.add_parser("query", help="Consultar un símbolo e intervalo.")
    p_q.add_argument("--symbol", required=True, help="IBM, MSFT, AAPL...")
    p_q.add_argument("--interval", choices=INTERVALS, default="daily")
    p_q.add_argument("--provider", choices=list(PROVIDERS.keys()), default="backend")
    p_q.add_argument("--base-url", help="Sobrescribe QUOTEVIEW_BASE_URL.")
    p_q.add_argument("--format", choices=["table", "json", "csv", "parquet"], default="table")
    p_q.add_argument("--outdir", default="data")
    p_q.set_defaults(func=run_query)

    # ---- probe (carga concurrente)
    p_p = sub.add_parser("probe", help="Lanzar peticiones concurrentes y medir tiempos.")
    p_p.add_argument("--provider", choices=list(PROVIDERS.keys()), default="backend")
    p_p.add_argument("--base-url", help="Sobrescribe QUOTEVIEW_BASE_URL.")
    p_p.add_argument("--threads", type=int, default=20)
    p_p.add_argument("--requests", type=int, default=20)
    p_p.add_argument("--symbols", default="IBM,MSFT,AAPL")
    p_p.add_argument("--intervals", default="daily,weekly,monthly")
    p_p.add_argument("--report", help="CSV con el detalle de cada petición.")
    p_p.set_defaults(func=run_probe_cmd)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
