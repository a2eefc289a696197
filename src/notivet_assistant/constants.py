# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from types import MappingProxyType
from typing import Mapping, Tuple

# Colloquial / singular / plural animal words -> canonical species code.
# Extend with new synonyms here; resolution logic lives in species.py.
DEFAULT_SPECIES_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "canine": "CANINE",
        "canines": "CANINE",
        "dog": "CANINE",
        "dogs": "CANINE",
        "feline": "FELINE",
        "felines": "FELINE",
        "cat": "FELINE",
        "cats": "FELINE",
        "bovine": "BOVINE",
        "bovines": "BOVINE",
        "cattle": "BOVINE",
        "equine": "EQUINE",
        "equines": "EQUINE",
        "horse": "EQUINE",
        "horses": "EQUINE",
        "ovine": "OVINE",
        "ovines": "OVINE",
        "sheep": "OVINE",
        "caprine": "CAPRINE",
        "caprines": "CAPRINE",
        "goat": "CAPRINE",
        "goats": "CAPRINE",
        "porcine": "PORCINE",
        "porcines": "PORCINE",
        "swine": "PORCINE",
        "avian": "AVIAN",
        "avians": "AVIAN",
        "poultry": "AVIAN",
        "bird": "AVIAN",
        "birds": "AVIAN",
        "chicken": "AVIAN",
        "chickens": "AVIAN",
        "turkey": "AVIAN",
        "turkeys": "AVIAN",
        "duck": "AVIAN",
        "ducks": "AVIAN",
        "exotic": "EXOTIC",
        "exotics": "EXOTIC",
    }
)

# Conversational phrasing and domain-generic nouns ignored when scoring names.
DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "what", "does", "do", "about", "for", "to", "the", "a", "an", "and", "or", "of", "in", "on",
        "with", "how", "is", "are", "be", "that", "this", "please", "need", "show", "me", "find",
        "info", "information", "tell", "explain", "give", "i", "we", "you",
        "drug", "drugs", "medication", "medications", "medicine", "vaccine", "vaccines", "use",
        "used", "using", "treat", "treats", "treatment", "treating", "against", "list", "search",
        "recommend", "help",
    }
)  # fmt: skip

# Text columns of the drug table consulted by matching, in haystack order.
SEARCHABLE_FIELDS: Tuple[str, ...] = (
    "name",
    "generic_name",
    "active_ingredient",
    "manufacturer",
    "description",
    "dosage",
    "contraindications",
    "warnings",
    "farad_info",
    "withdrawal_time",
    "product_code",
    "establishment_code",
    "subsidiaries",
    "trade_name",
    "distributors",
)

DRUG_TABLE = "drug"

DRUG_COLUMNS: Tuple[str, ...] = (
    "id",
    *SEARCHABLE_FIELDS,
    "species",
    "delivery_methods",
    "created_at",
)

# Retrieval caps
RESULT_LIMIT = 10
FALLBACK_SAMPLE_SIZE = 300

# Ranking thresholds. Tuned by hand; treat as tunable, not invariants.
EXACT_MATCH_SCORE = 100
SUBSTRING_MATCH_SCORE = 80
ALL_TOKENS_SCORE = 60
TOKEN_HIT_SCORE = 5
STRICT_MATCH_CAP = 3
HIGH_SCORE_CUTOFF = 80
HIGH_SCORE_FLOOR = 60
HIGH_SCORE_RATIO = 0.9
MID_SCORE_CUTOFF = 60
MID_SCORE_RATIO = 0.85
FUZZY_FALLBACK_CAP = 3

# Character budgets for the grounding projection
TRUNCATION_BUDGETS: Mapping[str, int] = MappingProxyType(
    {
        "description": 400,
        "dosage": 300,
        "contraindications": 300,
        "warnings": 300,
        "farad_info": 200,
        "withdrawal_time": 120,
    }
)

ELLIPSIS = "…"
