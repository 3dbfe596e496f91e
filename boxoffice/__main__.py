"""Command-line entry point. Allows ``python -m boxoffice``."""

import argparse
import asyncio
import json
import sys

from boxoffice.exceptions import BoxOfficeError
from boxoffice.settings import settings


async def _rank(year: int, month: int) -> dict:
    """Build one ranking with a short-lived TMDB client."""
    from boxoffice.ranking import BoxOfficeRanker, GenreCache
    from boxoffice.tmdb import TMDBClient

    async with TMDBClient() as client:
        ranker = BoxOfficeRanker(
            source=client,
            genre_cache=GenreCache(client.fetch_genres),
            image_base_url=settings.tmdb.image_base_url,
        )
        result = await ranker.get_top(year, month)
    return {"success": True, "data": result.model_dump(mode="json")}


def run_top(year: str, month: str) -> int:
    """Print the ranking for a month as JSON.

    Returns:
        Process exit code.
    """
    from boxoffice.ranking import parse_int_param
    from boxoffice.utils import setup_logger

    setup_logger("boxoffice")

    try:
        payload = asyncio.run(_rank(parse_int_param(year), parse_int_param(month)))
    except BoxOfficeError as e:
        print(json.dumps({"success": False, "error": e.to_dict()}, ensure_ascii=False, indent=2))
        return 1
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def run_server() -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "boxoffice.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


def main() -> None:
    """Parse arguments and dispatch the sub-command."""
    parser = argparse.ArgumentParser(
        prog="boxoffice",
        description="Monthly box-office rankings from TMDB",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Run the REST API")

    top = subparsers.add_parser("top", help="Print the top 10 for a month")
    top.add_argument("year", help="Release year, e.g. 2024")
    top.add_argument("month", help="Release month, 1-12")

    args = parser.parse_args()

    if args.command == "serve":
        run_server()
    elif args.command == "top":
        sys.exit(run_top(args.year, args.month))


if __name__ == "__main__":
    main()
