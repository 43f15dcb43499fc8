#!/usr/bin/env python3
"""
Instagram Basic Display - command-line entry point.

Usage:
    python -m instagram_basic_display.main <command> [options]

Examples:
    python -m instagram_basic_display.main exchange-code AQBx...
    python -m instagram_basic_display.main long-lived-token --code AQBx...
    python -m instagram_basic_display.main refresh-token IGQV...
    python -m instagram_basic_display.main profile --token IGQV...
    python -m instagram_basic_display.main media --limit 10 --token IGQV...
    python -m instagram_basic_display.main media-node 17895695668004550 --token IGQV...
"""

import argparse
import json
import logging
import sys
from typing import Optional

import httpx

from .client import InstagramBasicDisplay
from .config import DEFAULT_MEDIA_FIELDS, DEFAULT_PROFILE_FIELDS
from .errors import FieldNotFound, InstagramBasicDisplayError, MalformedBody
from .response import FieldRecord, Response


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def serialize_response(response: Response) -> dict:
    """Convert a Response to a JSON-serializable dict."""
    error = response.error
    return {
        "success": response.success,
        "status": response.status,
        "payload": response.body,
        "error": FieldRecord.to_dict(error) if error is not None else None,
        "next_page_link": response.next_page_link,
        "previous_page_link": response.previous_page_link,
    }


def split_fields(value: Optional[str], default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    return tuple(f.strip() for f in value.split(",") if f.strip())


def run(args: argparse.Namespace, client: InstagramBasicDisplay) -> Response:
    """Dispatch a parsed command to the client."""
    if args.command == "exchange-code":
        return client.exchange_code_for_short_lived_token(args.code)

    if args.command == "long-lived-token":
        return client.exchange_for_long_lived_token(
            short_lived_token=args.short_lived_token,
            access_code=args.code,
        )

    if args.command == "refresh-token":
        return client.refresh_long_lived_token(args.token_value)

    extra = {}
    if getattr(args, "limit", None):
        extra["limit"] = args.limit

    if args.command == "profile":
        return client.get_profile(
            user_id=args.user_id,
            fields=split_fields(args.fields, DEFAULT_PROFILE_FIELDS),
            auth_token=args.token,
        )

    if args.command == "media":
        if args.page_link:
            return client.get_media_feed_from_link(args.page_link, auth_token=args.token, **extra)
        return client.get_media_feed(
            user_id=args.user_id,
            fields=split_fields(args.fields, DEFAULT_MEDIA_FIELDS),
            auth_token=args.token,
            **extra,
        )

    if args.command == "media-node":
        return client.get_media_node(
            args.media_id,
            fields=split_fields(args.fields, DEFAULT_MEDIA_FIELDS),
            auth_token=args.token,
        )

    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query the Instagram Basic Display API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials are read from INSTAGRAM_CLIENT_ID, INSTAGRAM_CLIENT_SECRET
and INSTAGRAM_REDIRECT_URI.
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    exchange = sub.add_parser("exchange-code", help="Exchange an authorization code for a short-lived token")
    exchange.add_argument("code", help="Authorization code from the redirect URI")

    long_lived = sub.add_parser("long-lived-token", help="Get a long-lived token")
    source = long_lived.add_mutually_exclusive_group(required=True)
    source.add_argument("--short-lived-token", help="Short-lived token to exchange")
    source.add_argument("--code", help="Authorization code to exchange first")

    refresh = sub.add_parser("refresh-token", help="Refresh a long-lived token")
    refresh.add_argument("token_value", metavar="token", help="Long-lived token")

    for name, help_text in (
        ("profile", "Fetch a user's profile"),
        ("media", "Fetch a page of a user's media"),
        ("media-node", "Fetch a single media node"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--token", default=None, help="Access token (default: none stored)")
        cmd.add_argument("--fields", default=None, help="Comma separated field list")
        if name == "media-node":
            cmd.add_argument("media_id", help="Media ID")
        else:
            cmd.add_argument("--user-id", default=None, help="User ID (default: me)")
        if name == "media":
            cmd.add_argument("--limit", type=int, default=None, help="Items per page")
            cmd.add_argument("--page-link", default=None, help="Pagination link from a previous call")

    return parser


def main(argv: Optional[list[str]] = None, client: Optional[InstagramBasicDisplay] = None):
    """
    CLI entry point.

    Args:
        argv: Arguments to parse instead of sys.argv
        client: Client to use instead of one built from the environment
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        with (client or InstagramBasicDisplay()) as ig:
            response = run(args, ig)

    except (MalformedBody, FieldNotFound) as e:
        logging.error(f"Unexpected response from Instagram: {e}")
        sys.exit(1)

    except InstagramBasicDisplayError as e:
        logging.error(f"Request not sent: {e}")
        sys.exit(1)

    except httpx.HTTPError as e:
        logging.error(f"Request failed: {e}")
        sys.exit(1)

    print(json.dumps(serialize_response(response), indent=2, ensure_ascii=False))

    if not response.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
