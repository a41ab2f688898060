"""Token estimation shared by blocks, metadata and lint rules."""

from __future__ import annotations

import math

_TOKENS_PER_WORD = 1.3


def estimate_tokens(text: str) -> int:
    """Approximate the token count of ``text`` from its whitespace-delimited words."""
    if not text:
        return 0
    return math.ceil(len(text.split()) * _TOKENS_PER_WORD)


__all__ = ["estimate_tokens"]
