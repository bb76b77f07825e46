"""Error kinds shared by the search pipeline and its entry points."""
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    CONFIG = "config"
    EMBEDDING = "embedding"
    VECTOR_SEARCH = "vector_search"
    NO_RESULTS = "no_results"
    INTERNAL = "internal"


class PerfumeSearchError(Exception):
    kind = ErrorKind.INTERNAL


class ConfigError(PerfumeSearchError):
    kind = ErrorKind.CONFIG


class ToolInputError(PerfumeSearchError, ValueError):
    """Tool arguments failed schema validation; ``errors`` lists each violation."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid arguments: " + "; ".join(self.errors))


class EmbeddingError(PerfumeSearchError):
    kind = ErrorKind.EMBEDDING


class VectorSearchError(PerfumeSearchError):
    kind = ErrorKind.VECTOR_SEARCH


def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, PerfumeSearchError):
        return exc.kind
    return ErrorKind.INTERNAL


__all__ = [
    "ErrorKind",
    "PerfumeSearchError",
    "ConfigError",
    "ToolInputError",
    "EmbeddingError",
    "VectorSearchError",
    "error_kind",
]
