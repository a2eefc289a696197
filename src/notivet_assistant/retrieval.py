# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from notivet_assistant.constants import FALLBACK_SAMPLE_SIZE, RESULT_LIMIT, SEARCHABLE_FIELDS
from notivet_assistant.interfaces import DrugStore, RetrievalStrategy, TokenClause
from notivet_assistant.schemas import DrugRecord


class StrictPass:
    """Every token must match some field (AND across tokens, OR across fields)."""

    name = "strict"

    def __init__(self, limit: int = RESULT_LIMIT):
        self.limit = limit

    def __call__(self, store: DrugStore, clauses: Sequence[TokenClause]) -> List[DrugRecord]:
        return store.find_matching(clauses, require_all=True, limit=self.limit)


class RelaxedPass:
    """Any token matching any field is enough."""

    name = "relaxed"

    def __init__(self, limit: int = RESULT_LIMIT):
        self.limit = limit

    def __call__(self, store: DrugStore, clauses: Sequence[TokenClause]) -> List[DrugRecord]:
        return store.find_matching(clauses, require_all=False, limit=self.limit)


def haystack(record: DrugRecord) -> str:
    """Lowercased concatenation of every searchable field plus the raw species/delivery payloads."""
    values = [getattr(record, field) for field in SEARCHABLE_FIELDS]
    values.extend([record.species, record.delivery_methods])
    return " \n ".join(v for v in values if v).lower()


class FallbackScanPass:
    """
    Scans a bounded sample of recent records in-process and keeps those whose
    haystack contains every token.
    """

    name = "fallback"

    def __init__(self, sample_size: int = FALLBACK_SAMPLE_SIZE, limit: int = RESULT_LIMIT):
        self.sample_size = sample_size
        self.limit = limit

    def __call__(self, store: DrugStore, clauses: Sequence[TokenClause]) -> List[DrugRecord]:
        tokens = [c.token for c in clauses]
        sample = store.recent(limit=self.sample_size)
        matches = []
        for record in sample:
            hay = haystack(record)
            if all(t in hay for t in tokens):
                matches.append(record)
                if len(matches) >= self.limit:
                    break
        return matches


def default_strategies(limit: int = RESULT_LIMIT, sample_size: int = FALLBACK_SAMPLE_SIZE) -> List[RetrievalStrategy]:
    return [StrictPass(limit), RelaxedPass(limit), FallbackScanPass(sample_size, limit)]


class CandidateRetriever:
    """
    Precision-first retrieval: tries each strategy in order and stops at the
    first one that returns any records.
    """

    def __init__(self, store: DrugStore, strategies: Optional[Sequence[RetrievalStrategy]] = None):
        self.store = store
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    def retrieve(self, clauses: Sequence[TokenClause]) -> Tuple[Optional[str], List[DrugRecord]]:
        """
        Returns (name of the pass that produced records, records).
        The name is None when every pass came back empty.
        """
        for strategy in self.strategies:
            records = strategy(self.store, clauses)
            if records:
                logger.info(f"Retrieval pass '{strategy.name}' returned {len(records)} candidates")
                return strategy.name, records
            logger.debug(f"Retrieval pass '{strategy.name}' returned nothing")

        logger.info("All retrieval passes returned nothing")
        return None, []
