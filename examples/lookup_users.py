#!/usr/bin/env python3
"""
Registry Lookup Example

Looks up users, searches the registry and lists names owned by an address.
Credentials are read from BLOCKSTACK_APP_ID / BLOCKSTACK_APP_SECRET (a local
.env file is loaded first).

Usage:
    python lookup_users.py muneeb fredwilson --search twitter:itsProf
"""

import argparse
import asyncio

from dotenv import load_dotenv

from blockstack_client import BlockstackClient, BlockstackError, RegistryError

load_dotenv()


async def main(usernames, query, address):
    async with BlockstackClient.from_env() as client:
        if not client.is_configured():
            print("Set BLOCKSTACK_APP_ID and BLOCKSTACK_APP_SECRET first.")
            return

        try:
            users = await client.lookup_users(usernames)
            for username, record in users.items():
                name = record.get("profile", {}).get("name", {}).get("formatted", "?")
                print(f"{username}: {name} ({len(record.get('verifications', []))} verifications)")
        except RegistryError as e:
            print(f"Lookup failed: {e}")
            if e.payload is not None:
                print(f"  Registry said: {e.payload}")

        if query:
            try:
                results = await client.search(query)
                print(f"\nSearch '{query}': {len(results.get('results', []))} results")
            except BlockstackError as e:
                print(f"Search failed: {e}")

        if address:
            try:
                names = await client.names_owned_by_address(address)
                print(f"\nNames owned by {address}: {names}")
            except BlockstackError as e:
                print(f"Address query failed: {e}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Blockstack registry lookup")
    parser.add_argument("usernames", nargs="+", help="Usernames to look up")
    parser.add_argument("--search", dest="query", help="Search query")
    parser.add_argument("--address", help="Address to list owned names for")
    args = parser.parse_args()

    asyncio.run(main(args.usernames, args.query, args.address))
