from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dedupe import dedupe
from relevance import DomainScorer, RelevanceFilter
from search_client import RawResult
from tagging import TagExtractor, Tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaggedResult:
    """Search hit enriched with extracted tags and a ranking score."""

    title: str
    description: str
    url: str
    tags: Tags = field(default_factory=Tags)
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "tags": {"techs": list(self.tags.techs), "cities": list(self.tags.cities)},
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaggedResult":
        """Rebuild a result posted back by a client; missing fields default.

        Raises ValueError when ``tags`` is not an object of string lists.
        """
        tags = data.get("tags") or {}
        if not isinstance(tags, dict):
            raise ValueError("tags must be an object")
        score = data.get("score")
        return cls(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            url=str(data.get("url") or ""),
            tags=Tags(
                techs=_keywords(tags.get("techs"), "techs"),
                cities=_keywords(tags.get("cities"), "cities"),
            ),
            score=score if isinstance(score, int) and not isinstance(score, bool) else 0,
        )


def _keywords(value: Any, field_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"tags.{field_name} must be a list of strings")
    return tuple(value)


class RankingPipeline:
    """Filter, tag, score, dedupe and cap raw search hits."""

    def __init__(
        self,
        *,
        tag_extractor: Optional[TagExtractor] = None,
        relevance_filter: Optional[RelevanceFilter] = None,
        domain_scorer: Optional[DomainScorer] = None,
        max_results: int = 12,
        min_results: int = 5,
    ) -> None:
        self._tag_extractor = tag_extractor or TagExtractor()
        self._relevance_filter = relevance_filter or RelevanceFilter()
        self._domain_scorer = domain_scorer or DomainScorer()
        self._max_results = max_results
        self._min_results = min_results

    def tag(self, item: RawResult) -> TaggedResult:
        tags = self._tag_extractor.extract(f"{item.title} {item.description}")
        score = self._domain_scorer.score(item.url)
        score += 1 if tags.techs else 0
        score += 1 if tags.cities else 0
        return TaggedResult(
            title=item.title,
            description=item.description,
            url=item.url,
            tags=tags,
            score=score,
        )

    def rank(self, raw: Iterable[RawResult]) -> List[TaggedResult]:
        candidates = [item for item in raw if item.url and item.title]
        relevant = [item for item in candidates if self._relevance_filter.is_relevant(item)]
        ranked = _by_score(dedupe(self.tag(item) for item in relevant))
        logger.debug(
            "Relevance filter kept %d of %d candidates", len(ranked), len(candidates)
        )

        if len(ranked) < self._min_results:
            informative = [self.tag(item) for item in candidates]
            widened = _by_score(dedupe(ranked + informative))[: self._max_results]
            logger.info(
                "Widened results from %d to %d with unfiltered hits",
                len(ranked),
                len(widened),
            )
            ranked = widened

        return ranked[: self._max_results]


def _by_score(items: Iterable[TaggedResult]) -> List[TaggedResult]:
    # sorted() is stable, so equal scores keep input order.
    return sorted(items, key=lambda item: item.score, reverse=True)
