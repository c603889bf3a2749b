"""Query the Wolfram|Alpha v2 API for a plaintext answer."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Callable
from urllib.parse import quote
from urllib.request import urlopen

API_URL = "http://api.wolframalpha.com/v2/query"
DEFAULT_QUERY = "simplify sin(a) * cos(b) + cos(a) * sin(b)"


class WolframError(Exception):
    """Raised when a query fails or its response cannot be understood."""


def build_query_url(query: str, app_id: str) -> str:
    """Build the request URL for ``query`` with plaintext JSON output."""
    encoded = quote(query, safe="")
    return f"{API_URL}?input={encoded}&format=plaintext&output=JSON&appid={app_id}"


def parse_response(text: str) -> tuple[str, str]:
    """Return the input interpretation and the result from a JSON response."""
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise WolframError(f"JSON Parsing Error: {exc}") from exc
    try:
        result = data["queryresult"]
        if result.get("success") is not True:
            raise WolframError("No results or query failed.")
        pods = result["pods"]
        interpretation = pods[0]["subpods"][0]["plaintext"]
        answer = pods[1]["subpods"][0]["plaintext"]
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise WolframError(f"JSON Parsing Error: missing field {exc}") from exc
    if not isinstance(interpretation, str) or not isinstance(answer, str):
        raise WolframError("JSON Parsing Error: plaintext is not a string")
    return interpretation, answer


def _fetch(url: str) -> str:
    with urlopen(url) as response:
        return response.read().decode("utf-8")


def query(query: str, app_id: str, opener: Callable[[str], str] | None = None) -> tuple[str, str]:
    """Send ``query`` and return (interpretation, result).

    ``opener`` takes a URL and returns the response body as text.
    """
    fetch = opener or _fetch
    try:
        body = fetch(build_query_url(query, app_id))
    except OSError as exc:
        raise WolframError(f"Request Error: {exc}") from exc
    return parse_response(body)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="dronesim-wolfram", description="Ask Wolfram|Alpha to simplify.")
    parser.add_argument("query", nargs="?", default=DEFAULT_QUERY)
    parser.add_argument("--app-id", default=os.environ.get("WOLFRAM_APP_ID", "placeholder"))
    args = parser.parse_args(argv)
    try:
        interpretation, answer = query(args.query, args.app_id)
    except WolframError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(interpretation)
    print(answer)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())