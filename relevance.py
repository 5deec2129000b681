from __future__ import annotations

import re
from typing import Iterable, Pattern, Protocol, Tuple

DEFAULT_BOOSTED_DOMAINS: Tuple[str, ...] = (
    "linkedin.com/jobs",
    "indeed.com",
    "indeed.com.br",
    "gupy.io",
    "vagas.com.br",
    "trampos.co",
    "greenhouse.io",
    "lever.co",
    "workable.com",
    "jobvite.com",
    "empregos.com.br",
)

# Search engines whose pages are informative but never a listing.
DEFAULT_INFORMATIONAL_DOMAINS: Tuple[str, ...] = ("duckduckgo.com",)

BOOSTED_SCORE = 3
NEUTRAL_SCORE = 1
INFORMATIONAL_SCORE = 0

INTERNSHIP_PATTERN = re.compile(r"(estágio|estagio|internship)", re.IGNORECASE)
DEVELOPMENT_PATTERN = re.compile(
    r"(desenvolvedor|desenvolvimento|developer|programador|software|backend"
    r"|front\s*end|frontend|full\s*stack|qa|mobile)",
    re.IGNORECASE,
)


class HasText(Protocol):
    title: str
    description: str


class RelevanceFilter:
    """Decides whether a search hit looks like a software internship posting.

    By default a hit passes when it mentions an internship *or* a development
    role. With ``require_both`` both signals must be present.
    """

    def __init__(
        self,
        *,
        require_both: bool = False,
        internship_pattern: Pattern[str] = INTERNSHIP_PATTERN,
        development_pattern: Pattern[str] = DEVELOPMENT_PATTERN,
    ) -> None:
        self._require_both = require_both
        self._internship = internship_pattern
        self._development = development_pattern

    def is_relevant(self, item: HasText) -> bool:
        text = f"{item.title} {item.description}".lower()
        has_intern = bool(self._internship.search(text))
        has_dev = bool(self._development.search(text))
        if self._require_both:
            return has_intern and has_dev
        return has_intern or has_dev


class DomainScorer:
    """Scores a URL by how likely its site is to host a job listing."""

    def __init__(
        self,
        boosted: Iterable[str] = DEFAULT_BOOSTED_DOMAINS,
        informational: Iterable[str] = DEFAULT_INFORMATIONAL_DOMAINS,
    ) -> None:
        self._boosted = tuple(domain.lower() for domain in boosted)
        self._informational = tuple(domain.lower() for domain in informational)

    def score(self, url: str) -> int:
        lowered = (url or "").lower()
        if any(domain in lowered for domain in self._boosted):
            return BOOSTED_SCORE
        if any(domain in lowered for domain in self._informational):
            return INFORMATIONAL_SCORE
        return NEUTRAL_SCORE
