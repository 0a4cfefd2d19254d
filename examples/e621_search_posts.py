#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from booru.e621 import Client, DataError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Search e621/e926 posts by tags")
    p.add_argument("tags", nargs="?", default="fox rating:s")
    p.add_argument("limit", nargs="?", type=int, default=20)
    p.add_argument("--site", default="e926", choices=["e621", "e926"])
    p.add_argument("--user-agent", default="booru-e621-example/0.1 (by username on e621)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with Client(args.user_agent, site=args.site) as client:
        print("=" * 60)
        print(f"Tags  : {args.tags}")
        print(f"Limit : {args.limit}")
        print("=" * 60)
        async for post in client.search(args.tags, limit=args.limit):
            if isinstance(post, DataError):
                print(f"- search failed: {post}")
                break
            print(f"- #{post.id:<9} score {post.score.total:>5}  {post.file.url or '(no file)'}")


if __name__ == "__main__":
    asyncio.run(main())
