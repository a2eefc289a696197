# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason-codex

"""
notivet-assistant
"""

__version__ = "0.1.0"

from .assistant import DrugAssistant
from .loader import StoreLoader
from .matcher import DrugMatcher
from .pipeline import (
    assistant_ask,
    assistant_search,
    initialize,
)
from .species import SpeciesResolver
from .store import DuckDBDrugStore
from .tokenizer import tokenize

__all__ = [
    "StoreLoader",
    "DuckDBDrugStore",
    "DrugMatcher",
    "DrugAssistant",
    "SpeciesResolver",
    "tokenize",
    "initialize",
    "assistant_search",
    "assistant_ask",
]
