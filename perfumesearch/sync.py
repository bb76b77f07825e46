"""Synchronous wrappers around the async helpers for quick scripts/tests."""
import asyncio
from typing import Any, Callable, Optional

from . import search as asearch
from . import tool as atool
from .config import Settings
from .filters import SearchFilters


def _run(coro_factory: Callable[..., Any], *args, **kwargs):
    return asyncio.run(coro_factory(*args, **kwargs))


def search_perfumes(
    query: str,
    filters: Optional[SearchFilters] = None,
    top_k: int = asearch.DEFAULT_TOP_K,
    *,
    settings: Optional[Settings] = None,
    clients: Optional[asearch.ProviderClients] = None,
) -> list[asearch.PerfumeMatch]:
    return _run(asearch.search_perfumes, query, filters, top_k, settings=settings, clients=clients)


def execute_tool(
    arguments: dict,
    *,
    settings: Optional[Settings] = None,
    clients: Optional[asearch.ProviderClients] = None,
) -> atool.ResultEnvelope:
    return _run(atool.execute, arguments, settings=settings, clients=clients)
