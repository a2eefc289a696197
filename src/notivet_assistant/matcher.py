# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import List, Optional, Sequence

from loguru import logger

from notivet_assistant.exceptions import InvalidQueryError
from notivet_assistant.interfaces import DrugStore, RetrievalStrategy, TokenClause
from notivet_assistant.ranking import RelevanceRanker, project
from notivet_assistant.retrieval import CandidateRetriever, default_strategies
from notivet_assistant.schemas import MatcherConfig, MatchResult
from notivet_assistant.species import SpeciesResolver, filter_by_species
from notivet_assistant.tokenizer import tokenize


class DrugMatcher:
    """
    The Query-Driven Drug Matcher. Maps a free-text question to a few ranked drug records.

    Mechanism:
    1. Tokenizes the query into a lowercase word set.
    2. Resolves animal words to canonical species codes.
    3. Retrieves candidates with progressively relaxed passes (strict, relaxed, fallback scan).
    4. Drops candidates outside the requested species, if any were named.
    5. Scores, selects and projects the survivors for grounding.

    Holds no per-request state; concurrent calls only share the read-only store.
    """

    def __init__(
        self,
        store: DrugStore,
        config: Optional[MatcherConfig] = None,
        strategies: Optional[Sequence[RetrievalStrategy]] = None,
    ):
        self.config = config or MatcherConfig()
        self.store = store
        self.species_resolver = SpeciesResolver(self.config.species_synonyms)
        if strategies is None:
            strategies = default_strategies(self.config.result_limit, self.config.fallback_sample_size)
        self.retriever = CandidateRetriever(store, strategies)
        self.ranker = RelevanceRanker(
            stop_words=self.config.stop_words,
            thresholds=self.config.thresholds,
            species_resolver=self.species_resolver,
        )

    def clauses(self, tokens: Sequence[str]) -> List[TokenClause]:
        return [TokenClause(t, self.species_resolver.resolve(t)) for t in sorted(tokens)]

    def match(self, query: str) -> MatchResult:
        """
        Runs the full pipeline for one query.

        Raises:
            InvalidQueryError: the query has no word tokens. The store is not touched.
            RetrievalError: the store failed on any pass.
        """
        tokens = tokenize(query)
        if not tokens:
            raise InvalidQueryError()

        requested = self.species_resolver.requested_species(tokens)
        logger.info(f"Matching query with {len(tokens)} tokens, species={sorted(s.value for s in requested)}")

        pass_name, candidates = self.retriever.retrieve(self.clauses(tokens))
        filtered = filter_by_species(candidates, requested)
        ranked = self.ranker.rank(filtered, query)

        return MatchResult(
            query=query,
            tokens=sorted(tokens),
            requested_species=sorted(requested, key=lambda s: s.value),
            retrieval_pass=pass_name,
            candidate_count=len(candidates),
            ranked=ranked,
            matched_drugs=[project(c.record, self.config.truncation_budgets) for c in ranked],
        )
