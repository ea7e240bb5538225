#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json

from enigma import EnigmaClient, SortDirection


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch one page of rows from a table datapath")
    p.add_argument("datapath", nargs="?", default="us.gov.whitehouse.visitor-list")
    p.add_argument("--select", nargs="*", default=["namefull", "appt_made_date"])
    p.add_argument("--sort", default="namefirst")
    p.add_argument("--desc", action="store_true")
    p.add_argument("--where", action="append", default=[])
    p.add_argument("--limit", type=int, default=10)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    direction = SortDirection.DESC if args.desc else SortDirection.ASC

    async with EnigmaClient.from_env() as client:
        query = client.data(args.datapath).select(*args.select).sort(args.sort, direction)
        for clause in args.where:
            query.where(clause)
        page = await query.limit(args.limit).execute()

    print("=" * 65)
    print(f"Datapath   : {page.data_path}")
    print(f"Page       : {page.info.current_page}/{page.info.total_pages}")
    print(f"Results    : {page.info.total_results}")
    print("=" * 65)
    for row in page.result:
        print(json.dumps(row))


if __name__ == "__main__":
    asyncio.run(main())
