#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from booru.e621 import Client, DataError, PoolQuery


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Search e621 pools by name")
    p.add_argument("name", nargs="?", default="foo*")
    p.add_argument("limit", nargs="?", type=int, default=10)
    p.add_argument("--user-agent", default="booru-e621-example/0.1 (by username on e621)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with Client(args.user_agent) as client:
        async for pool in client.pool_search(PoolQuery(name_matches=args.name), limit=args.limit):
            if isinstance(pool, DataError):
                print(f"- couldn't load pool: {pool}")
                break
            print(f"- #{pool.id} {pool.name} ({pool.category.value}, {pool.post_count} posts)")


if __name__ == "__main__":
    asyncio.run(main())
