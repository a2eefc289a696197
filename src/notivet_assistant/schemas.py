# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Literal, Mapping, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from notivet_assistant import constants
from notivet_assistant.utils.serializer import parse_enum_list


class Species(str, Enum):
    CANINE = "CANINE"
    FELINE = "FELINE"
    EQUINE = "EQUINE"
    BOVINE = "BOVINE"
    OVINE = "OVINE"
    CAPRINE = "CAPRINE"
    PORCINE = "PORCINE"
    AVIAN = "AVIAN"
    EXOTIC = "EXOTIC"


class DeliveryMethod(str, Enum):
    ORAL = "ORAL"
    INJECTABLE = "INJECTABLE"
    TOPICAL = "TOPICAL"
    INHALATION = "INHALATION"
    IMPLANT = "IMPLANT"
    TRANSDERMAL = "TRANSDERMAL"


class DrugRecord(BaseModel):
    """
    A row of the drug table as read by the matcher.

    `species` and `delivery_methods` hold the raw serialized JSON arrays;
    use `species_set` / `delivery_method_list` for parsed values.
    """

    id: str
    name: str
    generic_name: Optional[str] = None
    active_ingredient: Optional[str] = None
    manufacturer: Optional[str] = None
    description: Optional[str] = None
    dosage: Optional[str] = None
    contraindications: Optional[str] = None
    warnings: Optional[str] = None
    farad_info: Optional[str] = None
    withdrawal_time: Optional[str] = None
    product_code: Optional[str] = None
    establishment_code: Optional[str] = None
    subsidiaries: Optional[str] = None
    trade_name: Optional[str] = None
    distributors: Optional[str] = None
    species: Optional[str] = None
    delivery_methods: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Tuple[Any, ...]) -> "DrugRecord":
        """
        Creates a DrugRecord from a DuckDB row tuple.
        Assumes row order matches constants.DRUG_COLUMNS.
        """
        data = dict(zip(constants.DRUG_COLUMNS, row))
        data["id"] = str(data["id"])
        return cls(**data)

    @property
    def species_set(self) -> Set[Species]:
        return set(parse_enum_list(self.species, Species))

    @property
    def delivery_method_list(self) -> List[DeliveryMethod]:
        return parse_enum_list(self.delivery_methods, DeliveryMethod)


class RankingThresholds(BaseModel):
    """Heuristic scoring weights and cutoffs used by the relevance ranker."""

    model_config = ConfigDict(frozen=True)

    exact_match: int = constants.EXACT_MATCH_SCORE
    substring_match: int = constants.SUBSTRING_MATCH_SCORE
    all_tokens: int = constants.ALL_TOKENS_SCORE
    token_hit: int = constants.TOKEN_HIT_SCORE
    strict_cap: int = constants.STRICT_MATCH_CAP
    high_cutoff: int = constants.HIGH_SCORE_CUTOFF
    high_floor: int = constants.HIGH_SCORE_FLOOR
    high_ratio: float = constants.HIGH_SCORE_RATIO
    mid_cutoff: int = constants.MID_SCORE_CUTOFF
    mid_ratio: float = constants.MID_SCORE_RATIO
    fuzzy_cap: int = constants.FUZZY_FALLBACK_CAP


class MatcherConfig(BaseModel):
    """Immutable configuration injected into the matcher."""

    model_config = ConfigDict(frozen=True)

    species_synonyms: Mapping[str, str] = Field(
        default_factory=lambda: MappingProxyType(dict(constants.DEFAULT_SPECIES_SYNONYMS))
    )
    stop_words: frozenset[str] = constants.DEFAULT_STOP_WORDS
    thresholds: RankingThresholds = Field(default_factory=RankingThresholds)
    result_limit: int = constants.RESULT_LIMIT
    fallback_sample_size: int = constants.FALLBACK_SAMPLE_SIZE
    truncation_budgets: Mapping[str, int] = Field(
        default_factory=lambda: MappingProxyType(dict(constants.TRUNCATION_BUDGETS))
    )

    @field_validator("species_synonyms", "truncation_budgets", mode="after")
    @classmethod
    def read_only_mapping(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))


class ScoredCandidate(BaseModel):
    record: DrugRecord
    score: int = 0
    exact_name_match: bool = False
    exact_trade_match: bool = False
    all_tokens_in_name: bool = False
    all_tokens_in_trade: bool = False

    @property
    def is_strict(self) -> bool:
        return self.all_tokens_in_name or self.all_tokens_in_trade


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DrugDigest(CamelModel):
    """Truncated projection of a drug record handed to the generation service."""

    id: str
    name: str
    generic_name: Optional[str] = None
    manufacturer: Optional[str] = None
    active_ingredient: Optional[str] = None
    trade_name: Optional[str] = None
    product_code: Optional[str] = None
    species: List[Species] = Field(default_factory=list)
    delivery_methods: List[DeliveryMethod] = Field(default_factory=list)
    description: str = ""
    dosage: str = ""
    contraindications: str = ""
    warnings: str = ""
    farad_info: str = ""
    withdrawal_time: str = ""

    @property
    def source_label(self) -> str:
        return self.trade_name or self.name


class MatchResult(CamelModel):
    query: str
    tokens: List[str] = Field(default_factory=list)
    requested_species: List[Species] = Field(default_factory=list)
    retrieval_pass: Optional[str] = None
    candidate_count: int = 0
    ranked: List[ScoredCandidate] = Field(default_factory=list, exclude=True)
    matched_drugs: List[DrugDigest] = Field(default_factory=list)

    @property
    def sources(self) -> List[str]:
        return [d.source_label for d in self.matched_drugs if d.source_label]


GenerationStatus = Literal["ok", "unavailable", "failed"]


class AssistantAnswer(CamelModel):
    query: str
    answer: Optional[str] = None
    sources: List[str] = Field(default_factory=list)
    matched_drugs: List[DrugDigest] = Field(default_factory=list)
    generation_status: GenerationStatus = "ok"
    detail: Optional[str] = None
