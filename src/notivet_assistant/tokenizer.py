# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

import re
from typing import FrozenSet, List, Optional

_NON_WORD = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def query_words(text: Optional[str]) -> List[str]:
    """
    Lowercases text, replaces anything but [a-z0-9] and whitespace with a space,
    and splits on whitespace. Keeps order and duplicates.
    """
    if not text:
        return []
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [w for w in _WHITESPACE.split(cleaned) if w]


def tokenize(text: Optional[str]) -> FrozenSet[str]:
    """Deduplicated query token set. Empty for blank or pure punctuation input."""
    return frozenset(query_words(text))


def normalize_text(text: Optional[str]) -> str:
    """Same cleanup as the tokenizer, rejoined with single spaces."""
    return " ".join(query_words(text))
