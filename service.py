from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ranking import RankingPipeline, TaggedResult
from refiner import GeminiClient, build_refine_prompt
from search_client import SearchClient, SearchOutcome
from summarizer import LocalSummarizer
from telemetry import Telemetry

logger = logging.getLogger(__name__)


class InternshipRadarError(RuntimeError):
    """Base class for errors reported back to the caller."""


class SearchUnavailableError(InternshipRadarError):
    """Raised when no search provider produced a usable answer."""


class InvalidResultsError(InternshipRadarError):
    """Raised when a refine request carries no results to summarise."""


class MissingCredentialError(InternshipRadarError):
    """Raised when the summarisation provider has no API key."""


@dataclass
class SearchResponse:
    """Ranked results plus the provider that supplied them."""

    query: str
    provider: str
    results: List[TaggedResult]

    def to_dict(self) -> Dict[str, Any]:
        return {"results": [result.to_dict() for result in self.results]}


@dataclass
class RefineResponse:
    summary: str
    source: str


class InternshipSearchService:
    """Coordinator orchestrating search, ranking and summarisation."""

    def __init__(
        self,
        *,
        search_client: SearchClient,
        pipeline: RankingPipeline,
        telemetry: Telemetry,
        summarizer: Optional[LocalSummarizer] = None,
        gemini_client: Optional[GeminiClient] = None,
        default_query: str = "vagas estágio desenvolvimento software região sul Brasil",
        site_filter: str = "",
    ) -> None:
        self._search_client = search_client
        self._pipeline = pipeline
        self._telemetry = telemetry
        self._summarizer = summarizer or LocalSummarizer()
        self._gemini = gemini_client
        self._default_query = default_query
        self._site_filter = site_filter

    def build_query(self, query: Optional[str]) -> str:
        base = (query or "").strip() or self._default_query
        if self._site_filter:
            return f"{base} {self._site_filter}"
        return base

    async def search(self, query: Optional[str] = None) -> SearchResponse:
        """Run the provider chain for ``query`` and rank what comes back."""
        full_query = self.build_query(query)
        with self._telemetry.measure_search():
            attempts = await self._search_client.search(full_query)
        for attempt in attempts:
            self._telemetry.record_provider_call(attempt.provider, _outcome_label(attempt))

        decisive = attempts[-1]
        if not decisive.ok:
            logger.error(
                "All search providers failed",
                extra={"query": full_query, "error": decisive.error},
            )
            raise SearchUnavailableError("Failed to fetch job postings")

        ranked = self._pipeline.rank(decisive.results)
        logger.info(
            "Ranked %d of %d results from %s",
            len(ranked),
            len(decisive.results),
            decisive.provider,
        )
        return SearchResponse(query=full_query, provider=decisive.provider, results=ranked)

    async def refine(self, results: Any) -> RefineResponse:
        """Summarise previously ranked results with Gemini, or locally on failure."""
        if not isinstance(results, list) or not results:
            raise InvalidResultsError("No results to refine")
        tagged = [_coerce_result(item) for item in results]
        if self._gemini is None or not self._gemini.configured:
            raise MissingCredentialError("Gemini API key not configured")

        outcome = await self._gemini.generate(build_refine_prompt(tagged))
        if outcome.ok and outcome.text:
            self._telemetry.record_refine("gemini")
            return RefineResponse(summary=outcome.text, source="gemini")

        logger.warning("Falling back to local summary: %s", outcome.error)
        self._telemetry.record_refine("local")
        return RefineResponse(summary=self._summarizer.summarize(tagged), source="local")

    async def close(self) -> None:
        await self._search_client.close()
        if self._gemini:
            await self._gemini.close()


def _coerce_result(item: Any) -> TaggedResult:
    if isinstance(item, TaggedResult):
        return item
    if not isinstance(item, dict):
        raise InvalidResultsError("Each result must be a JSON object")
    try:
        return TaggedResult.from_dict(item)
    except ValueError as exc:
        raise InvalidResultsError(str(exc)) from exc


def _outcome_label(outcome: SearchOutcome) -> str:
    if not outcome.available:
        return "unavailable"
    if outcome.error:
        return "error"
    return "ok" if outcome.results else "empty"
