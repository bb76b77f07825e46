"""The search_perfumes tool: input schema, validation, and result envelope."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

from .config import Settings
from .errors import ErrorKind, ToolInputError, error_kind
from .filters import SearchFilters
from .search import DEFAULT_TOP_K, ProviderClients, search_perfumes

logger = logging.getLogger(__name__)

TOOL_NAME = "search_perfumes"

TOOL_DESCRIPTION = (
    "Search for perfumes based on user preferences, mood, occasion, or specific characteristics.\n"
    "Use this tool whenever the user asks for perfume recommendations, wants to find a fragrance,\n"
    "or describes what kind of scent they're looking for. You can filter by gender (male/female/unisex),\n"
    "brand, season (spring/summer/fall/winter), olfactory family (e.g., floral, woody, oriental, fresh),\n"
    "minimum rating, or price perception (budget/moderate/luxury)."
)

INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "minLength": 1,
            "description": "Natural language description of the desired perfume "
            "(e.g., 'fresh citrus summer fragrance', 'romantic evening scent', 'woody masculine cologne')",
        },
        "gender": {
            "type": "string",
            "enum": ["male", "female", "unisex"],
            "description": "Filter by target gender",
        },
        "brand": {"type": "string", "description": "Filter by specific brand name"},
        "primary_season": {
            "type": "string",
            "enum": ["spring", "summer", "fall", "winter"],
            "description": "Filter by recommended season",
        },
        "olfactory_family": {
            "type": "string",
            "description": "Filter by olfactory family (e.g., floral, woody, oriental, fresh, citrus)",
        },
        "min_rating": {
            "type": "number",
            "minimum": 0,
            "maximum": 5,
            "description": "Minimum rating score (0-5)",
        },
        "price_perception": {
            "type": "string",
            "enum": ["budget", "moderate", "luxury"],
            "description": "Filter by price category",
        },
        "topK": {
            "type": "integer",
            "minimum": 1,
            "maximum": 10,
            "default": DEFAULT_TOP_K,
            "description": "Number of results to return (1-10, default 5)",
        },
    },
    "required": ["query"],
    "additionalProperties": False,
}

NO_RESULTS_MESSAGE = (
    "No perfumes found matching your criteria. "
    "Try adjusting your filters or describing your preferences differently."
)
ERROR_MESSAGE = "An error occurred while searching for perfumes. Please try again."

_validator = Draft202012Validator(INPUT_SCHEMA)


@dataclass(frozen=True)
class ResultEnvelope:
    success: bool
    message: str
    perfumes: List[dict] = field(default_factory=list)
    # Kept for logs/metrics only; never serialized back to the caller.
    error_kind: Optional[ErrorKind] = None

    def to_dict(self) -> dict:
        return {"success": self.success, "message": self.message, "perfumes": list(self.perfumes)}


def validate_arguments(arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Check tool arguments against INPUT_SCHEMA and fill in the topK default."""
    arguments = dict(arguments or {})
    errors = sorted(_validator.iter_errors(arguments), key=lambda e: list(e.path))
    if errors:
        raise ToolInputError(
            [f"{'.'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors]
        )
    arguments.setdefault("topK", DEFAULT_TOP_K)
    return arguments


async def execute(
    arguments: Optional[Dict[str, Any]],
    *,
    settings: Optional[Settings] = None,
    clients: Optional[ProviderClients] = None,
) -> ResultEnvelope:
    """
    Validate arguments, run the search, and wrap the outcome.

    Invalid arguments raise ToolInputError before any provider is contacted.
    Provider failures are logged with their kind and reported to the caller
    only as a generic failure envelope.
    """
    args = validate_arguments(arguments)

    try:
        matches = await search_perfumes(
            args["query"],
            SearchFilters.from_mapping(args),
            int(args["topK"]),
            settings=settings,
            clients=clients,
        )
    except Exception as exc:
        kind = error_kind(exc)
        logger.exception("Error searching perfumes (kind=%s)", kind.value)
        return ResultEnvelope(False, ERROR_MESSAGE, [], error_kind=kind)

    if not matches:
        return ResultEnvelope(False, NO_RESULTS_MESSAGE, [], error_kind=ErrorKind.NO_RESULTS)

    return ResultEnvelope(
        True,
        f"Found {len(matches)} perfume(s) matching your preferences.",
        [m.to_tool_record() for m in matches],
    )


__all__ = [
    "TOOL_NAME",
    "TOOL_DESCRIPTION",
    "INPUT_SCHEMA",
    "NO_RESULTS_MESSAGE",
    "ERROR_MESSAGE",
    "ResultEnvelope",
    "validate_arguments",
    "execute",
]
