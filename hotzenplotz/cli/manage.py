# =============================================================================
# hotzenplotz/cli/manage.py: CLI for inspecting the collection cache
# =============================================================================
#
# Standalone CLI for working with a hotzenplotz cache from the shell, using
# the same Settings (HOTZENPLOTZ_* env vars, .env, optional YAML file) as an
# embedded Store.
#
# Supported subcommands:
#
#   get     Print a collection as JSON (cache-first unless --server-first)
#   evict   Remove a collection from the local cache (no network)
#   status  Run reconciliation and print revisions and cached names
#
# Usage examples:
#   python -m hotzenplotz.cli get venues
#   python -m hotzenplotz.cli get system --server-first
#   python -m hotzenplotz.cli evict venues
#   python -m hotzenplotz.cli --config config/hotzenplotz.yaml status
# =============================================================================

"""Standalone CLI for the hotzenplotz collection cache."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from hotzenplotz.config.loader import load_config
from hotzenplotz.config.settings import Settings
from hotzenplotz.main import build_store
from hotzenplotz.models.collection import LoadStrategy
from hotzenplotz.utils.errors import HotzenplotzError


async def _handle_get(args: argparse.Namespace, app_settings: Settings) -> int:
    strategy = LoadStrategy.SERVER_FIRST if args.server_first else LoadStrategy.CACHE_FIRST
    async with build_store(app_settings) as store:
        await store.ready
        items = await store.collection(args.name, strategy)
    print(json.dumps([item.model_dump(mode="json") for item in items], indent=2))
    return 0


def _handle_evict(args: argparse.Namespace, app_settings: Settings) -> int:
    # Built outside a running loop, so reconciliation never starts.
    store = build_store(app_settings)
    was_cached = args.name in store.cached_names()
    store.evict(args.name)
    asyncio.run(store.aclose())
    if was_cached:
        print(f"Evicted '{args.name}'.")
    else:
        print(f"'{args.name}' was not cached. Nothing to evict.")
    return 0


async def _handle_status(app_settings: Settings) -> int:
    async with build_store(app_settings) as store:
        result = await store.ready
        names = store.cached_names()

    print("Cache Status")
    print("=" * 40)
    print(f"  Outcome:            {result.outcome.value}")
    print(f"  Persisted revision: {result.persisted_revision}")
    print(f"  Server revision:    {result.current_revision}")
    if result.evicted:
        print(f"  Evicted:            {', '.join(result.evicted)}")
    if result.error:
        print(f"  Error:              {result.error}")
    print(f"  Cached collections: {', '.join(names) if names else '(none)'}")
    return 0 if result.ok else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m hotzenplotz.cli",
        description="Inspect and manage the hotzenplotz collection cache.",
    )
    parser.add_argument(
        "--config",
        default="config/hotzenplotz.yaml",
        help="YAML settings file (default: config/hotzenplotz.yaml, optional)",
    )
    subparsers = parser.add_subparsers(dest="command")

    get_parser = subparsers.add_parser("get", help="Print a collection as JSON")
    get_parser.add_argument("name", help="Collection name, e.g. 'venues'")
    get_parser.add_argument(
        "--server-first",
        action="store_true",
        help="Always fetch from the backend, even when cached",
    )

    evict_parser = subparsers.add_parser("evict", help="Remove a collection from the cache")
    evict_parser.add_argument("name", help="Collection name")

    subparsers.add_parser("status", help="Reconcile and print cache status")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Exits 0 on success, 1 on any cache error."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        app_settings = load_config(args.config)
        if args.command == "get":
            exit_code = asyncio.run(_handle_get(args, app_settings))
        elif args.command == "evict":
            exit_code = _handle_evict(args, app_settings)
        else:
            exit_code = asyncio.run(_handle_status(app_settings))
    except HotzenplotzError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
