"""
bfhl_client.py
--------------
Command-line client for the /bfhl endpoint.

Takes the raw JSON a user would paste into the web form, checks it locally,
posts it to the server and prints the response, optionally sliced down to
the selected fields:

    python bfhl_client.py '{"data": ["M","1","334","4","B"]}' --filter numbers --filter highest_alphabet
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, Iterable, List, Optional

import httpx

from classifier import InvalidInputError, validate

SERVER = os.getenv("BFHL_URL", "http://localhost:8000/bfhl")
DEFAULT_INPUT = '{ "data": ["M","1","334","4","B"] }'
FILTERS = ("numbers", "alphabets", "highest_alphabet")


class ClientError(Exception):
    pass


def parse_input(raw: str) -> Dict[str, List[str]]:
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ClientError("Invalid JSON format") from e
    try:
        return {"data": validate(body)}
    except InvalidInputError as e:
        raise ClientError("Invalid input format") from e


def select_fields(response: Dict[str, Any], selected: Iterable[str]) -> Dict[str, Any]:
    """Keep only the selected result fields; nothing selected keeps them all."""
    selected = list(selected)
    if not selected:
        return {k: response[k] for k in FILTERS if k in response}
    return {k: response[k] for k in selected if k in response}


async def submit(cli: httpx.AsyncClient, payload: Dict[str, List[str]],
                 url: str = SERVER) -> Dict[str, Any]:
    r = await cli.post(url, json=payload)
    if r.status_code != 200:
        try:
            message = r.json().get("message", r.text)
        except ValueError:
            message = r.text
        raise ClientError(f"Error {r.status_code}: {message}")
    return r.json()


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Send tokens to the /bfhl endpoint")
    p.add_argument("input", nargs="?", default=DEFAULT_INPUT,
                   help='raw JSON body, e.g. \'{"data": ["A", "1"]}\'')
    p.add_argument("--url", default=SERVER)
    p.add_argument("--filter", dest="filters", action="append", choices=FILTERS,
                   default=[], help="response field to show (repeatable)")
    return p


async def main(argv: Optional[List[str]] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        payload = parse_input(args.input)
        async with httpx.AsyncClient(timeout=httpx.Timeout(10.0), transport=transport) as cli:
            response = await submit(cli, payload, args.url)
    except ClientError as e:
        print(e, file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    for key, value in select_fields(response, args.filters).items():
        shown = ",".join(value) if isinstance(value, list) else value
        print(f"{key}: {shown}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
