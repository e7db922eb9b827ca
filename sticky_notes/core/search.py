from __future__ import annotations


def normalize_query(query: str | None) -> str:
    return (query or "").casefold()


def matches_query(content: str, query: str | None) -> bool:
    q = normalize_query(query)
    if not q:
        return True
    return q in (content or "").casefold()
