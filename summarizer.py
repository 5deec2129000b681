from __future__ import annotations

from collections import Counter
from typing import List, Sequence

from ranking import TaggedResult

NOT_IDENTIFIED = "not identified"
TOP_TECHS = 6
TOP_CITIES = 5
TOP_OPPORTUNITIES = 5

REQUIREMENTS_LINE = (
    "Common internship requirements: basic knowledge of the cited stack, version control (Git), "
    "programming logic, databases, communication and teamwork."
)
TIPS_LINE = "Tips: keep your projects on GitHub and tailor your resume to the required technologies."


def capitalize_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


class LocalSummarizer:
    """Builds a deterministic digest of ranked results without calling an LLM."""

    def summarize(self, results: Sequence[TaggedResult]) -> str:
        tech_count: Counter[str] = Counter()
        city_count: Counter[str] = Counter()
        for result in results:
            tech_count.update(result.tags.techs)
            city_count.update(result.tags.cities)

        # most_common keeps first-seen order among equal counts.
        top_techs = [f"{name} ({count})" for name, count in tech_count.most_common(TOP_TECHS)]
        top_cities = [
            f"{capitalize_words(name)} ({count})"
            for name, count in city_count.most_common(TOP_CITIES)
        ]

        lines: List[str] = [
            f"Most cited technologies: {', '.join(top_techs) if top_techs else NOT_IDENTIFIED}.",
            f"Featured cities: {', '.join(top_cities) if top_cities else NOT_IDENTIFIED}.",
            "Top 5 opportunities:",
        ]
        for index, result in enumerate(results[:TOP_OPPORTUNITIES], start=1):
            lines.append(f"{index}. {result.title} — {result.url}")
        lines.append(REQUIREMENTS_LINE)
        lines.append(TIPS_LINE)
        return "\n".join(lines)
