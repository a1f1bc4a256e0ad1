"""Note tokenization shared by search and keyword insights."""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"\W+")


def tokenize(text: str) -> list[str]:
    """Lowercase ``text`` and split it on runs of non-word characters."""
    return [token for token in _NON_WORD.split(text.lower()) if token]
