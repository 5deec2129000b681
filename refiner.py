from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import httpx

from ranking import TaggedResult

logger = logging.getLogger(__name__)

PROMPT_HEADER = """\
You are a career assistant. Based on the job postings below (software development
internships in southern Brazil), write an objective, useful and structured summary:

1. Most cited technologies, with counts.
2. Featured cities/locations, with counts.
3. Classification of the postings by area (Backend, Frontend, Fullstack, Mobile, QA).
4. Top 5 opportunities: give Title and Link (include the company when known).
5. Bullets of common requirements (languages, frameworks, version control, devops, soft skills).
6. Alert if any posting asks for advanced knowledge for an internship (Docker/Kubernetes/Cloud).
7. Two actionable application tips (portfolio, GitHub, resume, cover letters).

Postings (JSON):
"""


def build_refine_prompt(results: Sequence[TaggedResult]) -> str:
    postings = [
        {
            "title": result.title,
            "description": result.description,
            "link": result.url,
            "techs": list(result.tags.techs),
            "cities": list(result.tags.cities),
        }
        for result in results
    ]
    return PROMPT_HEADER + json.dumps(postings, indent=2, ensure_ascii=False) + "\n"


@dataclass
class GenerationOutcome:
    """Text produced by the model, or the reason there is none."""

    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


class GeminiClient:
    """Minimal client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        api_key: str | None,
        *,
        timeout_seconds: int = 15,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._client: httpx.AsyncClient | None = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def generate(self, prompt: str) -> GenerationOutcome:
        if not self._api_key:
            return GenerationOutcome(error="Gemini API key not configured")
        if not self._client:
            self._client = httpx.AsyncClient(timeout=self._timeout)

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = await self._client.post(
                self._endpoint_url,
                params={"key": self._api_key},
                json=body,
            )
            response.raise_for_status()
            text = self._extract_text(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Gemini request failed: %s", exc, exc_info=True)
            return GenerationOutcome(error=str(exc) or type(exc).__name__)

        if not text:
            return GenerationOutcome(error="Gemini returned no text")
        return GenerationOutcome(text=text)

    @staticmethod
    def _extract_text(payload: Dict[str, Any]) -> Optional[str]:
        try:
            return payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
