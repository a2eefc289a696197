# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import List, NamedTuple, Optional, Protocol, Sequence

from notivet_assistant.schemas import DrugRecord, Species


class TokenClause(NamedTuple):
    """A query token and the species it denotes, if any."""

    token: str
    species: Optional[Species] = None


class DrugStore(Protocol):
    """
    Protocol for the read-only drug record store.
    """

    def find_matching(self, clauses: Sequence[TokenClause], require_all: bool, limit: int) -> List[DrugRecord]:
        """
        Returns up to `limit` records, most recent first, where each clause matches
        (require_all=True) or any clause matches (require_all=False).

        A clause matches when its token is a substring of any searchable field,
        or when its species code appears in the species payload.
        """
        ...

    def recent(self, limit: int) -> List[DrugRecord]:
        """
        Returns up to `limit` records, most recent first, without filtering.
        """
        ...


class RetrievalStrategy(Protocol):
    """
    One retrieval pass. Strategies are tried in order until one returns records.
    """

    name: str

    def __call__(self, store: DrugStore, clauses: Sequence[TokenClause]) -> List[DrugRecord]: ...


class TextGenerator(Protocol):
    """
    Protocol for the text-generation service.
    """

    def complete(self, system_prompt: str, user_content: str) -> str:
        """
        Returns the generated answer for a system instruction and user message.
        """
        ...
