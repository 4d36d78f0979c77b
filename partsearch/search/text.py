from __future__ import annotations

import unicodedata
from functools import lru_cache


@lru_cache(maxsize=65536)
def fold(text: str) -> tuple[str, tuple[int, ...]]:
    """Case- and accent-fold ``text``.

    Returns the folded string plus, for every folded character, the index of the
    source character it came from, so ranges found in the folded string can be
    mapped back onto ``text``.
    """
    chars: list[str] = []
    offsets: list[int] = []
    for index, char in enumerate(text):
        for piece in unicodedata.normalize("NFKD", char.casefold()):
            if unicodedata.combining(piece):
                continue
            chars.append(piece)
            offsets.append(index)
    return "".join(chars), tuple(offsets)


def fold_key(text: str) -> str:
    return fold(text or "")[0].strip()
