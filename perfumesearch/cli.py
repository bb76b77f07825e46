import argparse
import asyncio
import logging
import sys
from typing import Optional

from perfumesearch.config import load_settings
from perfumesearch.filters import SearchFilters
from perfumesearch.search import PerfumeMatch, ProviderClients
from perfumesearch import sync

DEFAULT_QUERY = "fresh citrus summer fragrance for men"
CLI_TOP_K = 10
NOTES_PREVIEW = 80


def format_results(query: str, gender: Optional[str], results: list[PerfumeMatch]) -> str:
    lines = [f'\nSearching for: "{query}"' + (f" ({gender})" if gender else "") + "\n", "Top results:\n"]
    for idx, result in enumerate(results, start=1):
        lines.append(f"{idx}. {result.name} by {result.brand}")
        lines.append(f"   Score: {result.score:.4f} | Rating: {result.rating_score}")
        lines.append(f"   Family: {result.olfactory_family} | Gender: {result.gender}")
        lines.append(f"   Notes: {(result.notes or '')[:NOTES_PREVIEW]}...")
        lines.append("")
    return "\n".join(lines)


def cmd_search(args: argparse.Namespace, clients: Optional[ProviderClients] = None) -> int:
    # Credentials are checked before any output so a bad setup fails fast.
    settings = None if clients is not None else load_settings()
    filters = SearchFilters(gender=args.gender) if args.gender else None
    results = sync.search_perfumes(args.query, filters, args.top_k, settings=settings, clients=clients)
    print(format_results(args.query, args.gender, results))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="perfumesearch", description="Semantic perfume search over a Pinecone index")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Run a search and print the ranked results")
    search.add_argument("query", nargs="?", default=DEFAULT_QUERY, help="Natural-language description")
    search.add_argument("gender", nargs="?", default=None, help="Optional gender filter (male/female/unisex)")
    search.add_argument("--top-k", type=int, default=CLI_TOP_K, help="Number of results to return")
    search.set_defaults(func="search")

    mcp = sub.add_parser("mcp", help="Run the MCP stdio server")
    mcp.set_defaults(func="mcp")

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # MCP server owns its own logging setup (stderr only).
    if args.func == "mcp":
        from perfumesearch.mcp_server import main as mcp_main

        asyncio.run(mcp_main())
        return

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    sys.exit(cmd_search(args))


if __name__ == "__main__":
    main()
