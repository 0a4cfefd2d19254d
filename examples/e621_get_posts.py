#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from booru.e621 import Client, DataError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch specific e621 posts by id")
    p.add_argument("ids", nargs="*", type=int, default=[8595, 535, 2105, 1470])
    p.add_argument("--user-agent", default="booru-e621-example/0.1 (by username on e621)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with Client(args.user_agent) as client:
        print("Some very specific posts fetched by ID:")
        # One element per requested id, in the order given
        index = 0
        async for post in client.fetch_by_ids(args.ids):
            post_id = args.ids[index]
            index += 1
            if isinstance(post, DataError):
                print(f"- #{post_id}: couldn't load post: {post}")
            else:
                print(f"- #{post.id} with a score of {post.score.total}")


if __name__ == "__main__":
    asyncio.run(main())
