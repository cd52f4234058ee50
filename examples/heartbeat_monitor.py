"""Heartbeat monitor: two peers, one of which goes silent.

Demonstrates:
- Feeding heartbeat arrivals into a FailureDetectorRegistry
- Polling phi from a separate membership loop
- Declaring a peer unreachable once phi crosses the threshold

Run with:
    uv run python examples/heartbeat_monitor.py
"""

import asyncio
import logging
import random

from phi_accrual import FailureDetectorConfig, FailureDetectorRegistry


async def peer(registry: FailureDetectorRegistry, name: str, beats: int) -> None:
    for _ in range(beats):
        await registry.heartbeat(name)
        await asyncio.sleep(random.uniform(0.08, 0.12))
    print(f"[{name}] stopped sending heartbeats")


async def membership(registry: FailureDetectorRegistry, rounds: int) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0.1)
        levels = {p: round(await registry.phi(p), 2) for p in sorted(registry.tracked_peers)}
        print(f"[membership] phi={levels}")
        for down in await registry.unreachable():
            print(f"[membership] {down} is unreachable")
            registry.remove(down)


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    registry = FailureDetectorRegistry(
        FailureDetectorConfig(window_length=20, threshold=8.0, min_samples=5),
        name="example",
    )
    await asyncio.gather(
        peer(registry, "node-1", beats=40),
        peer(registry, "node-2", beats=15),
        membership(registry, rounds=40),
    )


if __name__ == "__main__":
    asyncio.run(main())
