# src/main.py — v1
"""CLI entry point — serve and rerank commands.

Usage:
    smartrerank serve [--host HOST] [--port PORT]
    smartrerank rerank <items.json> -q QUERY [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from smartrerank.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="smartrerank",
        description=f"smartrerank v{__version__} — Query-driven result reranker",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP service")
    p_serve.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: PORT setting)")
    p_serve.set_defaults(func=_cmd_serve)

    # --- rerank ---
    p_rerank = subparsers.add_parser("rerank", help="Rerank items from a JSON file")
    p_rerank.add_argument(
        "file", type=Path,
        help='JSON array of {"id", "content"} objects',
    )
    p_rerank.add_argument("-q", "--query", required=True, help="Query text")
    p_rerank.add_argument(
        "--mode", choices=["math", "ai"], default="math",
        help="Ranking mode (default: math)",
    )
    p_rerank.add_argument(
        "--top-k", type=int, default=None,
        help="Return only the first K items",
    )
    p_rerank.add_argument(
        "--exclude", nargs="*", default=[], metavar="FACTOR",
        help="Factors to exclude (vectorScore, semanticScore, length, recency, queryTermMatch)",
    )
    p_rerank.set_defaults(func=_cmd_rerank)

    return parser


def _configure_logging(verbose: bool):
    """Load settings and apply logging configuration."""
    from smartrerank.config.settings import load_settings
    from smartrerank.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        service=settings.service_name,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return settings


def _cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP service under uvicorn."""
    import uvicorn

    from smartrerank.api.app import create_app

    settings = _configure_logging(args.verbose)
    host = args.host or settings.host
    port = args.port or settings.port

    logger.info("Starting %s v%s on %s:%d", settings.service_name, __version__, host, port)
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    return 0


def _cmd_rerank(args: argparse.Namespace) -> int:
    """Rerank a JSON file of items in-process and print the result."""
    from smartrerank.api.facade import rerank

    settings = _configure_logging(args.verbose)

    file_path: Path = args.file
    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        return 1

    items = json.loads(file_path.read_text(encoding="utf-8"))
    if not isinstance(items, list) or not items:
        logger.error("Expected a non-empty JSON array of items in %s", file_path)
        return 1

    result = asyncio.run(rerank(
        args.query,
        items,
        mode=args.mode,
        top_k=args.top_k,
        exclude_factors=args.exclude,
        settings=settings,
    ))
    print(result.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
