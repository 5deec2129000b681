from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from config import AppConfig
from ranking import RankingPipeline
from refiner import GeminiClient
from relevance import RelevanceFilter
from search_client import DuckDuckGoProvider, GoogleSearchProvider, SearchClient
from service import InternshipRadarError, InternshipSearchService
from summarizer import LocalSummarizer
from telemetry import Telemetry


def configure_logging() -> None:
    """Initialise structured logging for the service."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@dataclass
class AppContext:
    """Bundle for the main application components."""

    config: AppConfig
    telemetry: Telemetry
    search_client: SearchClient
    gemini_client: GeminiClient
    service: InternshipSearchService


async def run() -> None:
    """Bootstrap coroutine for the internship search service."""
    load_dotenv()
    configure_logging()
    config = AppConfig()

    context = create_context(config)
    parser = build_parser()
    args = parser.parse_args()
    logging.info(
        "Internship radar initialised",
        extra={
            "google_search": config.google_search_enabled,
            "gemini": bool(config.gemini_api_key),
            "max_results": config.max_results,
        },
    )

    try:
        if args.refine_file:
            await run_refine_file(context, args.refine_file)
        elif args.serve_http:
            await run_http_server(context)
        else:
            await run_cli_query(context, args.query)
    finally:
        await context.service.close()


def create_context(config: AppConfig) -> AppContext:
    """Instantiate application components."""
    telemetry = Telemetry()
    provider_options = {
        "user_agent": config.search_user_agent,
        "timeout_seconds": config.request_timeout_seconds,
    }
    search_client = SearchClient(
        [
            GoogleSearchProvider(
                config.google_search_url.unicode_string(),
                api_key=config.google_api_key,
                cx_id=config.google_cx_id,
                **provider_options,
            ),
            DuckDuckGoProvider(config.duckduckgo_api_url.unicode_string(), **provider_options),
        ]
    )
    gemini_client = GeminiClient(
        config.gemini_api_url.unicode_string(),
        api_key=config.gemini_api_key,
        timeout_seconds=config.request_timeout_seconds,
    )
    pipeline = RankingPipeline(
        relevance_filter=RelevanceFilter(require_both=config.relevance_require_both),
        max_results=config.max_results,
        min_results=config.min_results,
    )
    service = InternshipSearchService(
        search_client=search_client,
        pipeline=pipeline,
        telemetry=telemetry,
        summarizer=LocalSummarizer(),
        gemini_client=gemini_client,
        default_query=config.default_query,
        site_filter=config.search_site_filter,
    )
    return AppContext(
        config=config,
        telemetry=telemetry,
        search_client=search_client,
        gemini_client=gemini_client,
        service=service,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Internship Radar CLI")
    parser.add_argument("--query", help="Search query to execute (defaults to DEFAULT_QUERY)")
    parser.add_argument(
        "--serve-http",
        action="store_true",
        help="Run the HTTP API and static front end with uvicorn.",
    )
    parser.add_argument(
        "--refine-file",
        help="Summarise a JSON file holding a /search response or a list of results.",
    )
    return parser


async def run_cli_query(context: AppContext, query: str | None) -> None:
    """Execute a single search query and print JSON payload."""
    try:
        response = await context.service.search(query)
    except InternshipRadarError as exc:
        logging.error("Search failed: %s", exc)
        sys.exit(1)
    print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))


async def run_refine_file(context: AppContext, path: str) -> None:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logging.error("Unable to read results from %s: %s", path, exc)
        sys.exit(1)
    results = payload.get("results") if isinstance(payload, dict) else payload
    try:
        response = await context.service.refine(results)
    except InternshipRadarError as exc:
        logging.error("Refine failed: %s", exc)
        sys.exit(1)
    print(response.summary)


async def run_http_server(context: AppContext) -> None:
    """Start HTTP server using uvicorn."""
    import uvicorn

    from app import create_app

    app = create_app(context.service, static_dir=context.config.static_dir)
    config = uvicorn.Config(
        app=app,
        host=context.config.http_host,
        port=context.config.http_port,
        loop="asyncio",
        log_level="info",
    )
    server = uvicorn.Server(config)
    logging.info(
        "Starting HTTP server on http://%s:%d",
        context.config.http_host,
        context.config.http_port,
    )
    await server.serve()


if __name__ == "__main__":
    asyncio.run(run())
