from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

DEFAULT_TECHS: Tuple[str, ...] = (
    "java", "javascript", "typescript", "node", "react", "next.js", "vue", "angular", "svelte",
    "python", "django", "flask", "fastapi",
    "c#", ".net", "asp.net", "entity framework",
    "ruby", "rails", "php", "laravel", "symfony",
    "go", "kotlin", "swift",
    "sql", "postgres", "mysql", "sqlite", "mongodb",
    "git", "docker", "kubernetes", "ci/cd",
    "aws", "azure", "gcp",
)

DEFAULT_CITIES: Tuple[str, ...] = (
    "porto alegre", "caxias do sul", "são leopoldo", "novo hamburgo", "pelotas", "santa maria",
    "florianópolis", "joinville", "blumenau", "chapecó", "itajai",
    "curitiba", "londrina", "maringá", "ponta grossa",
)


@dataclass(frozen=True)
class Tags:
    """Technology and city keywords found in a result."""

    techs: Tuple[str, ...] = ()
    cities: Tuple[str, ...] = ()


class TagExtractor:
    """Substring matcher over fixed technology and city keyword lists."""

    def __init__(
        self,
        techs: Iterable[str] = DEFAULT_TECHS,
        cities: Iterable[str] = DEFAULT_CITIES,
    ) -> None:
        self._techs = _unique(keyword.lower() for keyword in techs)
        self._cities = _unique(keyword.lower() for keyword in cities)

    @property
    def techs(self) -> Tuple[str, ...]:
        return self._techs

    @property
    def cities(self) -> Tuple[str, ...]:
        return self._cities

    def extract(self, text: str) -> Tags:
        lowered = (text or "").lower()
        return Tags(
            techs=tuple(keyword for keyword in self._techs if keyword in lowered),
            cities=tuple(keyword for keyword in self._cities if keyword in lowered),
        )


def _unique(keywords: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    ordered: List[str] = []
    for keyword in keywords:
        if keyword and keyword not in seen:
            seen.add(keyword)
            ordered.append(keyword)
    return tuple(ordered)
