"""
coalesced_load.py: minimal oncecache example.

Ten concurrent requests for the same missing key share one producer run;
a failing producer is reported once and yields no value.

Usage:
    PYTHONPATH=src python examples/coalesced_load.py
"""

import asyncio
import logging

from oncecache import InMemoryCacheStore, OnceCache


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    cache = OnceCache(InMemoryCacheStore())
    runs = 0

    async def build_report():
        nonlocal runs
        runs += 1
        await asyncio.sleep(0.05)
        return {"report": 7, "rows": 128}

    results = await asyncio.gather(
        *(cache.get_or_load("report:7", build_report, ttl_s=60) for _ in range(10))
    )
    print(f"{len(results)} callers, producer ran {runs} time(s): {results[0]}")

    async def broken():
        raise RuntimeError("upstream unavailable")

    result = await cache.load("report:8", broken, ttl_s=60)
    print(f"report:8 ok={result.ok} source={result.source} error={result.error!r}")


if __name__ == "__main__":
    asyncio.run(main())
