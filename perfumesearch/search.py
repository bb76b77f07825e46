"""
Embed a perfume query with OpenAI, query the Pinecone index, and map the
matches into PerfumeMatch records.

Both the MCP tool and the CLI go through search_perfumes(); the individual
steps are exposed for tests and scripts.
"""
import asyncio
import logging
import numbers
from dataclasses import dataclass
from typing import Any, Optional

from openai import AsyncOpenAI
from pinecone import Pinecone

from .config import Settings, load_settings
from .errors import EmbeddingError, VectorSearchError
from .filters import SearchFilters, build_filter

logger = logging.getLogger(__name__)

EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_TOP_K = 5

METADATA_FIELDS = (
    "name",
    "brand",
    "gender",
    "rating_score",
    "olfactory_family",
    "notes",
    "image_url",
)


@dataclass(frozen=True)
class PerfumeMatch:
    id: Optional[str]
    score: float
    name: Optional[str] = None
    brand: Optional[str] = None
    gender: Optional[str] = None
    rating_score: Optional[float] = None
    olfactory_family: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def match_score(self) -> int:
        """Score as an integer percentage, rounded half up and clamped to 0-100."""
        pct = int(self.score * 100 + 0.5) if self.score >= 0 else 0
        return min(pct, 100)

    def to_tool_record(self) -> dict:
        return {
            "name": self.name,
            "brand": self.brand,
            "gender": self.gender,
            "rating": self.rating_score,
            "olfactoryFamily": self.olfactory_family,
            "notes": self.notes,
            "imageUrl": self.image_url,
            "matchScore": self.match_score,
        }


@dataclass
class ProviderClients:
    embeddings: Any  # AsyncOpenAI or anything exposing embeddings.create()
    index: Any  # pinecone Index or anything exposing query()


def open_index(settings: Settings) -> Any:
    pc = Pinecone(api_key=settings.pinecone_api_key)
    return pc.Index(settings.index_name)


def _get(obj: Any, key: str, default: Any = None) -> Any:
    """Read a key from a dict-shaped response or an attribute from an SDK model."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


async def embed_query(client: Any, text: str, model: str = EMBEDDING_MODEL) -> list[float]:
    response = await client.embeddings.create(model=model, input=text)
    return list(response.data[0].embedding)


async def query_index(
    index: Any,
    vector: list[float],
    metadata_filter: Optional[dict] = None,
    top_k: int = DEFAULT_TOP_K,
) -> list[Any]:
    """Nearest-neighbor query with metadata; a missing matches list reads as empty."""
    response = await asyncio.to_thread(
        index.query,
        vector=vector,
        top_k=top_k,
        include_metadata=True,
        filter=metadata_filter,
    )
    return list(_get(response, "matches") or [])


def map_match(match: Any) -> PerfumeMatch:
    metadata = _get(match, "metadata") or {}
    values = {key: _get(metadata, key) for key in METADATA_FIELDS}
    match_id = _get(match, "id")
    if match_id is None:
        logger.warning("Match without an id for perfume %r", values["name"])

    rating = values["rating_score"]
    if rating is not None and (isinstance(rating, bool) or not isinstance(rating, numbers.Real)):
        logger.warning("Ignoring non-numeric rating_score %r on match %s", rating, match_id)
        values["rating_score"] = None

    return PerfumeMatch(
        id=None if match_id is None else str(match_id),
        score=float(_get(match, "score") or 0),
        **values,
    )


async def _run_pipeline(
    query: str,
    filters: Optional[SearchFilters],
    top_k: int,
    clients: ProviderClients,
) -> list[PerfumeMatch]:
    try:
        vector = await embed_query(clients.embeddings, query)
    except Exception as exc:
        raise EmbeddingError(f"Embedding request failed: {exc}") from exc

    metadata_filter = build_filter(filters)
    logger.debug("Querying index top_k=%s filter=%s", top_k, metadata_filter)

    try:
        matches = await query_index(clients.index, vector, metadata_filter, top_k)
    except Exception as exc:
        raise VectorSearchError(f"Vector search failed: {exc}") from exc

    logger.debug("Index returned %d match(es)", len(matches))
    return [map_match(m) for m in matches]


async def search_perfumes(
    query: str,
    filters: Optional[SearchFilters] = None,
    top_k: int = DEFAULT_TOP_K,
    *,
    settings: Optional[Settings] = None,
    clients: Optional[ProviderClients] = None,
) -> list[PerfumeMatch]:
    """
    Run the embed -> filter -> query -> map sequence for one query.

    Injected ``clients`` are used as-is and left open. Otherwise fresh
    provider handles are built from ``settings`` for this call and the
    OpenAI client is closed before returning. Provider failures, including
    opening the index, are re-raised as EmbeddingError / VectorSearchError
    with the original exception chained.
    """
    if clients is not None:
        return await _run_pipeline(query, filters, top_k, clients)

    settings = settings or load_settings()
    embeddings = AsyncOpenAI(api_key=settings.openai_api_key)
    try:
        try:
            index = open_index(settings)
        except Exception as exc:
            raise VectorSearchError(f"Could not open index {settings.index_name!r}: {exc}") from exc
        return await _run_pipeline(query, filters, top_k, ProviderClients(embeddings, index))
    finally:
        await embeddings.close()


__all__ = [
    "EMBEDDING_MODEL",
    "DEFAULT_TOP_K",
    "PerfumeMatch",
    "ProviderClients",
    "open_index",
    "embed_query",
    "query_index",
    "map_match",
    "search_perfumes",
]
