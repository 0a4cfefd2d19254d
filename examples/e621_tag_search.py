#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from booru.e621 import Client, DataError, TagOrder, TagQuery


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List the most used e926 tags")
    p.add_argument("count", nargs="?", type=int, default=10)
    p.add_argument("--user-agent", default="booru-e621-example/0.1 (by username on e621)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    query = TagQuery(order=TagOrder.COUNT, page_size=min(args.count, 320))
    async with Client(args.user_agent, site="e926") as client:
        print(f"Top {args.count} tags by post count!")
        async for tag in client.tag_search(query, limit=args.count):
            if isinstance(tag, DataError):
                print(f"- couldn't load tag: {tag}")
                break
            print(f"- {tag.name} ({tag.category.name.lower()}) with {tag.post_count} posts")


if __name__ == "__main__":
    asyncio.run(main())
