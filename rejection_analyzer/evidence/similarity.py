from __future__ import annotations

import re

NAME_STOPWORDS = frozenset({"mr", "mrs", "ms", "dr", "miss", "mr.", "mrs.", "ms.", "dr."})

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def normalize_tokens(value: str) -> list[str]:
    cleaned = _NON_ALNUM_RE.sub(" ", (value or "").lower())
    return [token for token in cleaned.split() if len(token) > 1 and token not in NAME_STOPWORDS]


def similarity_score(left: str, right: str) -> float:
    left_tokens = set(normalize_tokens(left))
    right_tokens = set(normalize_tokens(right))
    if not left_tokens or not right_tokens:
        return 0.0
    return len(left_tokens & right_tokens) / len(left_tokens | right_tokens)
