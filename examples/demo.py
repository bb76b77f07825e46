"""
Example usage of the perfume search helpers:
1) resolve credentials from the environment / .env
2) run a filtered search through the shared pipeline
3) call the tool the way an agent framework would and print its envelope
"""
import asyncio
import json

from perfumesearch import SearchFilters, load_settings, search_perfumes
from perfumesearch.tool import execute


async def main() -> None:
    settings = load_settings()
    print(f"Using index: {settings.index_name}")

    # Direct pipeline call: women's fragrances rated 4.5 or higher
    matches = await search_perfumes(
        "romantic evening scent",
        SearchFilters(gender="female", min_rating=4.5),
        top_k=3,
        settings=settings,
    )
    for m in matches:
        print(f"{m.name} by {m.brand} ({m.match_score}%)")

    # Tool-call path: validated arguments in, envelope out
    envelope = await execute({"query": "woody masculine cologne", "primary_season": "winter", "topK": 5}, settings=settings)
    print(json.dumps(envelope.to_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
