# main.py

"""Entry point for baewatch (MCP stdio server or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from baewatch.config.logging_config import setup_logging
from baewatch.models.listing import ItemCondition

logger = logging.getLogger("baewatch.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    from baewatch.cli.runner import MODES

    parser = argparse.ArgumentParser(
        prog="baewatch",
        description="eBay market research tools over MCP.",
        epilog="Run without arguments to start the MCP server on stdio.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Search query. Omit to start the MCP server.",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="sold",
        help="Which search to run (default: sold).",
    )
    parser.add_argument(
        "-c",
        "--condition",
        choices=[c.value for c in ItemCondition],
        default=ItemCondition.ALL.value,
        help="Item condition filter (default: All).",
    )
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=None,
        help="Number of results, 1-50 (default: 10).",
    )
    parser.add_argument(
        "--max-price",
        type=float,
        default=None,
        dest="max_price",
        help="Maximum price for active searches.",
    )
    parser.add_argument(
        "--asking-price",
        type=float,
        default=None,
        dest="asking_price",
        help="Seller's asking price to compare in price mode.",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        default=False,
        help="Show whether eBay credentials are configured.",
    )
    parser.add_argument(
        "--test-connection",
        action="store_true",
        default=False,
        dest="test_connection",
        help="Request a live eBay token to verify credentials.",
    )
    return parser


def _run_server() -> None:
    """Serve the MCP tools on stdio."""
    from baewatch.server.mcp_app import serve

    try:
        asyncio.run(serve())
    except Exception:
        logger.critical("Fatal error starting baewatch", exc_info=True)
        raise
    finally:
        logger.info("baewatch server shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run one headless search and exit."""
    from baewatch.cli.runner import cli_search

    exit_code = asyncio.run(
        cli_search(
            query=args.query,
            mode=args.mode,
            condition=args.condition,
            limit=args.limit,
            max_price=args.max_price,
            asking_price=args.asking_price,
        )
    )
    sys.exit(exit_code)


def _run_status() -> None:
    from baewatch.cli.runner import run_status

    sys.exit(asyncio.run(run_status()))


def _run_connection_test() -> None:
    from baewatch.cli.runner import run_connection_test

    sys.exit(asyncio.run(run_connection_test()))


def main() -> None:
    """Route to the MCP server (no args) or a headless command."""
    log_file = setup_logging()
    logger.info("baewatch starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.status:
        _run_status()
    elif args.test_connection:
        _run_connection_test()
    elif args.query is None:
        _run_server()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
