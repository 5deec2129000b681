from __future__ import annotations

from typing import Iterable, List, Protocol, Set, TypeVar


class Identifiable(Protocol):
    title: str
    url: str


T = TypeVar("T", bound=Identifiable)


def dedupe(items: Iterable[T]) -> List[T]:
    """Drop items already represented by an earlier item.

    The lowercased url decides when present: a new url keeps the item even if
    its title repeats, a seen url drops it. Items without a url fall back to
    their lowercased title. Items with neither are dropped. Every non-empty
    key of a kept item is recorded.
    """
    seen_urls: Set[str] = set()
    seen_titles: Set[str] = set()
    kept: List[T] = []
    for item in items:
        url = (item.url or "").lower()
        title = (item.title or "").lower()
        if url:
            is_new = url not in seen_urls
        else:
            is_new = bool(title) and title not in seen_titles
        if not is_new:
            continue
        if url:
            seen_urls.add(url)
        if title:
            seen_titles.add(title)
        kept.append(item)
    return kept
