from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx
import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResult:
    """Normalized representation of a search hit."""

    title: str
    description: str
    url: str


@dataclass
class SearchOutcome:
    """Result of asking one provider; failures are carried, not raised."""

    provider: str
    results: List[RawResult] = field(default_factory=list)
    error: Optional[str] = None
    available: bool = True

    @property
    def ok(self) -> bool:
        return self.available and self.error is None


class SearchProvider(Protocol):
    name: str

    async def search(self, query: str) -> SearchOutcome: ...

    async def close(self) -> None: ...


def strip_html(markup: str) -> str:
    if not markup:
        return ""
    return BeautifulSoup(markup, "html.parser").get_text(" ", strip=True)


class _HttpProvider:
    """Shared httpx plumbing for JSON search APIs."""

    name = "http"

    def __init__(
        self,
        endpoint_url: str,
        *,
        user_agent: str = "InternshipRadar/0.1",
        timeout_seconds: int = 15,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._user_agent = user_agent
        self._timeout = timeout_seconds
        self._client: httpx.AsyncClient | None = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if not self._client:
            headers = {"User-Agent": self._user_agent}
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=headers,
                follow_redirects=True,
            )
        return self._client

    async def _get_json(self, params: Dict[str, str]) -> Any:
        client = self._ensure_client()
        response = await client.get(self._endpoint_url, params=params)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None


class GoogleSearchProvider(_HttpProvider):
    """Google Custom Search JSON API; unavailable without key and engine id."""

    name = "google_cse"

    def __init__(
        self,
        endpoint_url: str,
        api_key: str | None,
        cx_id: str | None,
        **kwargs: Any,
    ) -> None:
        super().__init__(endpoint_url, **kwargs)
        self._api_key = api_key
        self._cx_id = cx_id

    @property
    def available(self) -> bool:
        return bool(self._api_key and self._cx_id)

    async def search(self, query: str) -> SearchOutcome:
        if not self.available:
            return SearchOutcome(provider=self.name, available=False)
        params = {"q": query, "key": self._api_key or "", "cx": self._cx_id or ""}
        try:
            payload = await self._get_json(params)
            results = self._parse_results(payload)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning(
                "Google search failed: %s", exc, exc_info=True, extra={"query": query}
            )
            return SearchOutcome(provider=self.name, error=str(exc) or type(exc).__name__)
        return SearchOutcome(provider=self.name, results=results)

    @staticmethod
    def _parse_results(payload: Dict[str, Any]) -> List[RawResult]:
        results: List[RawResult] = []
        for item in payload.get("items") or []:
            results.append(
                RawResult(
                    title=item.get("title") or "",
                    description=item.get("snippet") or "",
                    url=item.get("link") or "",
                )
            )
        return results


class DuckDuckGoProvider(_HttpProvider):
    """Keyless DuckDuckGo Instant Answer API (RelatedTopics)."""

    name = "duckduckgo"

    async def search(self, query: str) -> SearchOutcome:
        params = {"q": query, "format": "json", "no_redirect": "1"}
        try:
            payload = await self._get_json(params)
            results = self._parse_results(payload)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning(
                "DuckDuckGo search failed: %s", exc, exc_info=True, extra={"query": query}
            )
            return SearchOutcome(provider=self.name, error=str(exc) or type(exc).__name__)
        if not results:
            logger.info("DuckDuckGo returned no related topics", extra={"query": query})
        return SearchOutcome(provider=self.name, results=results)

    @staticmethod
    def _parse_results(payload: Dict[str, Any]) -> List[RawResult]:
        topics: List[Dict[str, Any]] = []
        for topic in payload.get("RelatedTopics") or []:
            # Category entries group their hits under "Topics".
            if topic.get("Topics"):
                topics.extend(topic["Topics"])
            else:
                topics.append(topic)

        results: List[RawResult] = []
        for topic in topics:
            text = topic.get("Text") or ""
            results.append(
                RawResult(
                    title=text,
                    description=strip_html(topic.get("Result") or "") or text,
                    url=topic.get("FirstURL") or "",
                )
            )
        return results


class SearchClient:
    """Tries each provider in order until one returns results."""

    def __init__(self, providers: Sequence[SearchProvider]) -> None:
        if not providers:
            raise ValueError("SearchClient needs at least one provider")
        self._providers = list(providers)

    @property
    def providers(self) -> List[SearchProvider]:
        return list(self._providers)

    async def search(self, query: str) -> List[SearchOutcome]:
        """Return the outcome of every provider attempted, the decisive one last."""
        attempts: List[SearchOutcome] = []
        for provider in self._providers:
            outcome = await provider.search(query)
            attempts.append(outcome)
            if outcome.ok and outcome.results:
                break
            logger.debug(
                "Provider %s gave no usable results, trying next",
                provider.name,
                extra={"error": outcome.error, "available": outcome.available},
            )
        return attempts

    async def close(self) -> None:
        for provider in self._providers:
            await provider.close()
