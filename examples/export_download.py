#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from enigma import EnigmaClient, EnigmaError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Queue an export and download the gzip file")
    p.add_argument("datapath", nargs="?", default="us.gov.whitehouse.visitor-list")
    p.add_argument("output", nargs="?", default="export.csv.gz")
    p.add_argument("--select", nargs="*", default=[])
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    async with EnigmaClient.from_env() as client:
        query = client.export(args.datapath)
        if args.select:
            query.select(*args.select)

        ready: asyncio.Queue[str | None] = asyncio.Queue()
        job = await query.execute(ready)
        print(f"Export queued, file will be at {job.export_url}")

        url = await ready.get()
        if url is None:
            print(f"Export did not become ready ({job.state.value})")
            return
        try:
            path = await job.download(args.output, wait=False)
        except EnigmaError as e:
            print(f"Download failed: {e}")
            return
        print(f"Saved {path}")


if __name__ == "__main__":
    asyncio.run(main())
