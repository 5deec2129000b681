from __future__ import annotations

from typing import List, Optional

import pytest

from ranking import RankingPipeline
from refiner import GenerationOutcome
from search_client import RawResult, SearchOutcome
from service import (
    InternshipSearchService,
    InvalidResultsError,
    MissingCredentialError,
    SearchUnavailableError,
)
from summarizer import LocalSummarizer
from telemetry import Telemetry


class StubSearchClient:
    def __init__(self, attempts: List[SearchOutcome]) -> None:
        self._attempts = attempts
        self.queries: List[str] = []
        self.closed = False

    async def search(self, query: str) -> List[SearchOutcome]:
        self.queries.append(query)
        return self._attempts

    async def close(self) -> None:
        self.closed = True


class StubGemini:
    def __init__(self, outcome: GenerationOutcome, configured: bool = True) -> None:
        self._outcome = outcome
        self.configured = configured
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> GenerationOutcome:
        self.prompts.append(prompt)
        return self._outcome

    async def close(self) -> None:
        return None


POSTING = RawResult(
    title="Estágio Backend Java",
    description="vaga para estágio em desenvolvimento java, spring",
    url="https://gupy.io/jobs/123",
)


def _service(
    attempts: List[SearchOutcome],
    gemini: Optional[StubGemini] = None,
    site_filter: str = "",
) -> InternshipSearchService:
    return InternshipSearchService(
        search_client=StubSearchClient(attempts),  # type: ignore[arg-type]
        pipeline=RankingPipeline(),
        telemetry=Telemetry(),
        summarizer=LocalSummarizer(),
        gemini_client=gemini,  # type: ignore[arg-type]
        default_query="vagas estágio",
        site_filter=site_filter,
    )


@pytest.mark.asyncio
async def test_search_ranks_results_from_decisive_provider() -> None:
    service = _service(
        [
            SearchOutcome(provider="google_cse", available=False),
            SearchOutcome(provider="duckduckgo", results=[POSTING]),
        ]
    )

    response = await service.search("estágio java")

    assert response.provider == "duckduckgo"
    assert len(response.results) == 1
    assert response.results[0].score == 4
    assert response.to_dict()["results"][0]["tags"]["techs"][0] == "java"


@pytest.mark.asyncio
async def test_search_uses_default_query_and_site_filter() -> None:
    service = _service(
        [SearchOutcome(provider="duckduckgo", results=[])],
        site_filter="site:gupy.io",
    )

    response = await service.search(None)

    assert response.query == "vagas estágio site:gupy.io"
    assert response.results == []


@pytest.mark.asyncio
async def test_search_raises_when_last_provider_fails() -> None:
    service = _service(
        [
            SearchOutcome(provider="google_cse", results=[]),
            SearchOutcome(provider="duckduckgo", error="connection refused"),
        ]
    )

    with pytest.raises(SearchUnavailableError):
        await service.search("estágio")


@pytest.mark.asyncio
@pytest.mark.parametrize("results", [None, [], {"title": "x"}, "text"])
async def test_refine_rejects_missing_results(results: object) -> None:
    service = _service([], gemini=StubGemini(GenerationOutcome(text="ok")))

    with pytest.raises(InvalidResultsError):
        await service.refine(results)


@pytest.mark.asyncio
async def test_refine_rejects_non_object_items() -> None:
    service = _service([], gemini=StubGemini(GenerationOutcome(text="ok")))

    with pytest.raises(InvalidResultsError):
        await service.refine(["not an object"])


@pytest.mark.asyncio
async def test_refine_requires_gemini_key() -> None:
    service = _service([], gemini=StubGemini(GenerationOutcome(), configured=False))

    with pytest.raises(MissingCredentialError):
        await service.refine([{"title": "Estágio", "url": "https://gupy.io/1"}])

    with pytest.raises(MissingCredentialError):
        await _service([]).refine([{"title": "Estágio", "url": "https://gupy.io/1"}])


@pytest.mark.asyncio
async def test_refine_returns_gemini_text() -> None:
    gemini = StubGemini(GenerationOutcome(text="Resumo do Gemini"))
    service = _service([], gemini=gemini)

    response = await service.refine([{"title": "Estágio Java", "url": "https://gupy.io/1"}])

    assert response.summary == "Resumo do Gemini"
    assert response.source == "gemini"
    assert '"link": "https://gupy.io/1"' in gemini.prompts[0]


@pytest.mark.asyncio
async def test_refine_falls_back_to_local_summary() -> None:
    service = _service([], gemini=StubGemini(GenerationOutcome(error="timeout")))
    results = [
        {
            "title": "Estágio Java",
            "url": "https://gupy.io/1",
            "tags": {"techs": ["java"], "cities": ["pelotas"]},
            "score": 5,
        }
    ]

    response = await service.refine(results)

    assert response.source == "local"
    assert response.summary.startswith("Most cited technologies: java (1).")
    assert "Featured cities: Pelotas (1)." in response.summary
    assert "1. Estágio Java — https://gupy.io/1" in response.summary


@pytest.mark.asyncio
async def test_close_closes_search_client() -> None:
    client = StubSearchClient([])
    service = InternshipSearchService(
        search_client=client,  # type: ignore[arg-type]
        pipeline=RankingPipeline(),
        telemetry=Telemetry(),
    )

    await service.close()

    assert client.closed
