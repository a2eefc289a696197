# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import AbstractSet, Iterable, List, Mapping, Optional

from loguru import logger

from notivet_assistant.constants import DEFAULT_STOP_WORDS, ELLIPSIS, TRUNCATION_BUDGETS
from notivet_assistant.schemas import DrugDigest, DrugRecord, RankingThresholds, ScoredCandidate
from notivet_assistant.species import SpeciesResolver
from notivet_assistant.tokenizer import normalize_text, query_words, tokenize


def truncate(text: Optional[str], max_chars: int) -> str:
    if not text:
        return ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def project(record: DrugRecord, budgets: Mapping[str, int] = TRUNCATION_BUDGETS) -> DrugDigest:
    """
    Builds the truncated projection of a record used as grounding context.
    """
    truncated = {field: truncate(getattr(record, field), limit) for field, limit in budgets.items()}
    return DrugDigest(
        id=record.id,
        name=record.name,
        generic_name=record.generic_name or None,
        manufacturer=record.manufacturer,
        active_ingredient=record.active_ingredient,
        trade_name=record.trade_name or None,
        product_code=record.product_code or None,
        species=sorted(record.species_set, key=lambda s: s.value),
        delivery_methods=record.delivery_method_list,
        **truncated,
    )


class RelevanceRanker:
    """
    Scores candidates against the query by name / trade name and keeps a small,
    ordered result set.

    Scoring (additive):
    - exact: normalized name or trade name equals the brand phrase
    - substring: normalized name or trade name contains the brand phrase
    - all tokens: every brand token is in the name, or every one is in the trade name
    - token hits: per brand token, per field it appears in

    Brand tokens are the query tokens minus stop words and minus words that named
    a species (those are already enforced by the species filter). The brand phrase
    is the normalized query with the same words removed.
    """

    def __init__(
        self,
        stop_words: AbstractSet[str] = DEFAULT_STOP_WORDS,
        thresholds: Optional[RankingThresholds] = None,
        species_resolver: Optional[SpeciesResolver] = None,
    ):
        self.stop_words = frozenset(stop_words)
        self.thresholds = thresholds or RankingThresholds()
        self.species_resolver = species_resolver or SpeciesResolver()

    def _is_noise(self, word: str) -> bool:
        return word in self.stop_words or self.species_resolver.resolve(word) is not None

    def brand_tokens(self, tokens: Iterable[str]) -> frozenset[str]:
        return frozenset(t for t in tokens if not self._is_noise(t))

    def brand_phrase(self, query: str) -> str:
        words = [w for w in query_words(query) if not self._is_noise(w)]
        if not words:
            return normalize_text(query)
        return " ".join(words)

    def score(self, record: DrugRecord, brand_tokens: AbstractSet[str], phrase: str) -> ScoredCandidate:
        t = self.thresholds
        name_norm = normalize_text(record.name)
        trade_norm = normalize_text(record.trade_name)

        exact_name = name_norm == phrase
        exact_trade = trade_norm == phrase
        all_in_name = all(tok in name_norm for tok in brand_tokens)
        all_in_trade = all(tok in trade_norm for tok in brand_tokens)

        score = 0
        if exact_name or exact_trade:
            score += t.exact_match
        if phrase in name_norm or phrase in trade_norm:
            score += t.substring_match
        if all_in_name or all_in_trade:
            score += t.all_tokens
        hits = sum(int(tok in name_norm) + int(tok in trade_norm) for tok in brand_tokens)
        score += hits * t.token_hit

        return ScoredCandidate(
            record=record,
            score=score,
            exact_name_match=exact_name,
            exact_trade_match=exact_trade,
            all_tokens_in_name=all_in_name,
            all_tokens_in_trade=all_in_trade,
        )

    def score_all(self, records: List[DrugRecord], query: str) -> List[ScoredCandidate]:
        brand = self.brand_tokens(tokenize(query))
        phrase = self.brand_phrase(query)
        return [self.score(r, brand, phrase) for r in records]

    def select(self, scored: List[ScoredCandidate]) -> List[ScoredCandidate]:
        """
        Strict matches win outright (top few by score). Otherwise keep candidates
        close to the best score, or just the first few when nothing scores well.
        Sorting is stable, so ties keep retrieval (recency) order.
        """
        t = self.thresholds
        strict = [c for c in scored if c.is_strict]
        if strict:
            strict.sort(key=lambda c: c.score, reverse=True)
            return strict[: t.strict_cap]

        ordered = sorted(scored, key=lambda c: c.score, reverse=True)
        top = ordered[0].score if ordered else 0
        if top >= t.high_cutoff:
            floor = max(t.high_floor, top * t.high_ratio)
            return [c for c in ordered if c.score >= floor]
        if top >= t.mid_cutoff:
            floor = top * t.mid_ratio
            return [c for c in ordered if c.score >= floor]
        return ordered[: t.fuzzy_cap]

    def rank(self, records: List[DrugRecord], query: str) -> List[ScoredCandidate]:
        if not records:
            return []
        selected = self.select(self.score_all(records, query))
        logger.info(f"Ranked {len(records)} candidates down to {len(selected)}")
        return selected
