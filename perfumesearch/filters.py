"""Translate optional perfume filters into a Pinecone metadata filter."""
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

# Filter field -> (metadata field, operator)
_PREDICATES = {
    "gender": ("gender", "$eq"),
    "brand": ("brand", "$eq"),
    "primary_season": ("primary_season", "$eq"),
    "olfactory_family": ("olfactory_family", "$eq"),
    "min_rating": ("rating_score", "$gte"),
    "price_perception": ("price_perception", "$eq"),
}


@dataclass(frozen=True)
class SearchFilters:
    gender: Optional[str] = None
    brand: Optional[str] = None
    primary_season: Optional[str] = None
    olfactory_family: Optional[str] = None
    min_rating: Optional[float] = None
    price_perception: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SearchFilters":
        data = data or {}
        return cls(**{f.name: data.get(f.name) for f in fields(cls)})

    def present(self) -> dict[str, Any]:
        """Fields carrying a constraint; falsy values count as absent."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


def build_filter(filters: Optional[SearchFilters]) -> Optional[dict]:
    """
    Build a conjunctive filter with one predicate per present field.

    Returns None rather than {} when nothing is constrained so the query runs
    unfiltered.
    """
    if filters is None:
        return None
    result = {}
    for name, value in filters.present().items():
        field, op = _PREDICATES[name]
        result[field] = {op: value}
    return result or None


__all__ = ["SearchFilters", "build_filter"]
