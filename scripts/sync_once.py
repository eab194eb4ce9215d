#!/usr/bin/env python3
"""Run one reconcile + sync cycle against the live Open-Meteo APIs.

The tree is built in an in-memory store and printed, so you can check
ids, units and derived values without a host system.

Usage
-----
Either point at an adapter-style JSON config::

    python scripts/sync_once.py --config native.json

or configure a single location through the environment::

    export OPEN_METEO_LATITUDE=52.52
    export OPEN_METEO_LONGITUDE=13.41
    export OPEN_METEO_NAME=Berlin
    python scripts/sync_once.py

Options::

    --config FILE        Adapter-style native config (JSON)
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --prefix TEXT        Only print ids starting with TEXT
    -v, --verbose        Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyopenmeteo import (  # noqa: E402
    InMemoryObjectStore,
    MeteoConfigError,
    OpenMeteoClient,
    SyncCycleController,
    WeatherConfig,
)


def _load_config(path: str | None) -> WeatherConfig:
    if path is None:
        return WeatherConfig.from_env()
    native = json.loads(Path(path).read_text(encoding="utf-8"))
    return WeatherConfig.from_dict(native)


def _render_text(store: InMemoryObjectStore, prefix: str) -> str:
    lines: list[str] = []
    for point_id, value in store.snapshot().items():
        if not point_id.startswith(prefix):
            continue
        point = store.get(point_id)
        unit = f" {point.metadata.unit}" if point is not None and point.metadata.unit else ""
        lines.append(f"{point_id:<60} {value!r}{unit}")
    return "\n".join(lines)


def _render_json(store: InMemoryObjectStore, prefix: str) -> str:
    out: dict[str, Any] = {}
    for point_id, value in store.snapshot().items():
        if not point_id.startswith(prefix):
            continue
        point = store.get(point_id)
        out[point_id] = {
            "value": value,
            "unit": point.metadata.unit if point is not None else "",
            "name": point.metadata.name if point is not None else "",
        }
    return json.dumps(out, indent=2, ensure_ascii=False)


async def _run(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args.config)
    except (MeteoConfigError, OSError, json.JSONDecodeError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    store = InMemoryObjectStore()
    async with OpenMeteoClient(timeout=config.request_timeout) as client:
        controller = SyncCycleController(config, fetcher=client, store=store)
        await controller.reconcile()
        await controller.start()

    render = _render_json if args.json else _render_text
    text = render(store, args.prefix)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {len(store)} data points to {args.output}", file=sys.stderr)
    else:
        print(text)
    return 0 if len(store) else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one Open-Meteo sync cycle and print the resulting tree")
    parser.add_argument("--config", help="Adapter-style native config (JSON)")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--output", "-o", help="Write output to file")
    parser.add_argument("--prefix", default="", help="Only print ids starting with this prefix")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
