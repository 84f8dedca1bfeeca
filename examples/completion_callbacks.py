#!/usr/bin/env python3
"""
Completion Callback Example

Uses process-wide credentials and callback-style delivery: several
operations are submitted at once and each completion receives
(payload, error).

Usage:
    python completion_callbacks.py
"""

import asyncio
import os

from dotenv import load_dotenv

from blockstack_client import BlockstackClient, initialize

load_dotenv()


def on_complete(label):
    def completion(payload, error):
        if error is not None:
            print(f"[{label}] error: {error}")
            if payload is not None:
                print(f"[{label}] body: {payload}")
            return
        print(f"[{label}] ok: {str(payload)[:80]}")
    return completion


async def main():
    initialize(
        app_id=os.getenv("BLOCKSTACK_APP_ID"),
        app_secret=os.getenv("BLOCKSTACK_APP_SECRET"),
    )

    async with BlockstackClient() as client:
        tasks = [
            client.submit("lookup_users", ["muneeb"], completion=on_complete("lookup")),
            client.submit("list_all_users", completion=on_complete("all users")),
            client.submit("dkim_public_key_for_domain", "onename.com", completion=on_complete("dkim")),
        ]
        await asyncio.gather(*tasks)


if __name__ == "__main__":
    asyncio.run(main())
