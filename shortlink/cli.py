#!/usr/bin/env python3
"""
Command-line client for a running shortlink server.

Usage:
    shortlink-cli shorten <url> [--custom-code CODE] [--validity-minutes N]
    shortlink-cli stats <short_code>
    shortlink-cli resolve <short_code>
    shortlink-cli health
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, Optional, Tuple

import requests

from .common.logging_config import setup_logging

DEFAULT_BASE_URL = "http://localhost:8080"


class ShortlinkClient:
    """Thin HTTP client for the shortlink API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def shorten(
        self,
        url: str,
        custom_code: Optional[str] = None,
        validity_minutes: Optional[int] = None,
    ) -> Tuple[int, Dict[str, Any]]:
        """POST /api/shorten."""
        payload: Dict[str, Any] = {"url": url}
        if custom_code:
            payload["custom_code"] = custom_code
        if validity_minutes is not None:
            payload["validity_minutes"] = validity_minutes

        response = self.session.post(
            f"{self.base_url}/api/shorten", json=payload, timeout=self.timeout
        )
        return response.status_code, response.json()

    def stats(self, short_code: str) -> Tuple[int, Dict[str, Any]]:
        """GET /api/stats/{code}."""
        response = self.session.get(
            f"{self.base_url}/api/stats/{short_code}", timeout=self.timeout
        )
        return response.status_code, response.json()

    def resolve(self, short_code: str) -> Tuple[int, Dict[str, Any]]:
        """GET /{code} without following the redirect.

        Note that a successful resolve counts as a click.
        """
        response = self.session.get(
            f"{self.base_url}/{short_code}",
            allow_redirects=False,
            timeout=self.timeout,
        )
        if response.status_code in (301, 302, 303, 307, 308):
            return response.status_code, {
                "short_code": short_code,
                "location": response.headers.get("location"),
            }
        return response.status_code, response.json()

    def health(self) -> Tuple[int, Dict[str, Any]]:
        """GET /health."""
        response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        return response.status_code, response.json()

    def close(self) -> None:
        self.session.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command-line client for the shortlink service",
    )

    parser.add_argument(
        "--base-url",
        default=os.getenv("SHORTLINK_URL", DEFAULT_BASE_URL),
        help="Server base URL (default: from SHORTLINK_URL env or http://localhost:8080)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Request timeout in seconds"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-code", help="Custom short code")
    shorten_parser.add_argument("--validity-minutes", type=int, help="Minutes until the link expires")

    stats_parser = subparsers.add_parser("stats", help="Show the link record and click count")
    stats_parser.add_argument("short_code", help="Short code to look up")

    resolve_parser = subparsers.add_parser("resolve", help="Show where a short code redirects (counts a click)")
    resolve_parser.add_argument("short_code", help="Short code to resolve")

    subparsers.add_parser("health", help="Check service health")

    return parser


def main(argv=None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")
    client = ShortlinkClient(base_url=args.base_url, timeout=args.timeout)

    try:
        if args.command == "shorten":
            status_code, data = client.shorten(args.url, args.custom_code, args.validity_minutes)
        elif args.command == "stats":
            status_code, data = client.stats(args.short_code)
        elif args.command == "resolve":
            status_code, data = client.resolve(args.short_code)
        else:
            status_code, data = client.health()
    except requests.RequestException as e:
        logger.debug(f"Request to {args.base_url} failed", exc_info=True)
        print(json.dumps({"success": False, "error": f"Request failed: {e}"}, indent=2), file=sys.stderr)
        return 1
    except ValueError as e:
        # Response body was not JSON
        print(json.dumps({"success": False, "error": f"Unexpected response: {e}"}, indent=2), file=sys.stderr)
        return 1
    finally:
        client.close()

    logger.debug(f"{args.command} -> HTTP {status_code}")

    if status_code >= 400:
        print(json.dumps({"success": False, "status": status_code, **data}, indent=2), file=sys.stderr)
        return 1

    print(json.dumps({"success": True, **data}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
