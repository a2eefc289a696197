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
from typing import AbstractSet, Iterable, List, Mapping, Optional, Set

from loguru import logger

from notivet_assistant.constants import DEFAULT_SPECIES_SYNONYMS
from notivet_assistant.schemas import DrugRecord, Species


class SpeciesResolver:
    """
    Maps natural-language animal words ("dog", "horses", "poultry") to canonical species codes.

    The synonym table is copied into a read-only mapping at construction time.
    Adding synonyms only changes the table, never the resolution rules.
    """

    def __init__(self, synonyms: Optional[Mapping[str, str]] = None):
        source = DEFAULT_SPECIES_SYNONYMS if synonyms is None else synonyms
        table = {}
        for word, code in source.items():
            # Raises ValueError on codes outside the Species enum
            table[word.lower()] = Species(code)
        self._table: Mapping[str, Species] = MappingProxyType(table)

    @property
    def table(self) -> Mapping[str, Species]:
        return self._table

    def resolve(self, token: str) -> Optional[Species]:
        """
        Direct lookup, then a single retry with one trailing "s" stripped.
        """
        species = self._table.get(token)
        if species is not None:
            return species
        if token.endswith("s"):
            return self._table.get(token[:-1])
        return None

    def requested_species(self, tokens: Iterable[str]) -> Set[Species]:
        requested = set()
        for token in tokens:
            species = self.resolve(token)
            if species is not None:
                requested.add(species)
        return requested


def filter_by_species(records: List[DrugRecord], requested: AbstractSet[Species]) -> List[DrugRecord]:
    """
    Keeps only records whose parsed species intersect the requested set.

    With an empty requested set the input is returned unchanged. Once any species
    was requested the constraint is hard: if nothing survives, the result is empty.
    Records with missing or malformed species payloads never survive an active filter.
    """
    if not requested:
        return records

    kept = [r for r in records if r.species_set & requested]
    logger.info(
        f"Species filter {sorted(s.value for s in requested)} kept {len(kept)} of {len(records)} candidates"
    )
    return kept
