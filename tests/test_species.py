# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

import pytest

from notivet_assistant.constants import DEFAULT_SPECIES_SYNONYMS
from notivet_assistant.schemas import Species
from notivet_assistant.species import SpeciesResolver, filter_by_species


def test_resolve_direct_lookup() -> None:
    resolver = SpeciesResolver()
    assert resolver.resolve("dog") == Species.CANINE
    assert resolver.resolve("cattle") == Species.BOVINE
    assert resolver.resolve("poultry") == Species.AVIAN
    assert resolver.resolve("rimadyl") is None


def test_plural_forms_resolve_like_singular() -> None:
    resolver = SpeciesResolver()
    for word in DEFAULT_SPECIES_SYNONYMS:
        plural = word + "s"
        if plural in DEFAULT_SPECIES_SYNONYMS:
            assert resolver.resolve(plural) == resolver.resolve(word), plural


def test_trailing_s_is_stripped_once() -> None:
    resolver = SpeciesResolver()
    # Not in the table, but "poultry" is
    assert resolver.resolve("poultrys") == Species.AVIAN
    assert resolver.resolve("dogss") == Species.CANINE
    assert resolver.resolve("dogsss") is None
    assert resolver.resolve("s") is None


def test_requested_species() -> None:
    resolver = SpeciesResolver()
    assert resolver.requested_species({"rimadyl", "for", "dogs", "cats"}) == {Species.CANINE, Species.FELINE}
    assert resolver.requested_species({"rimadyl"}) == set()


def test_custom_synonyms_are_injected() -> None:
    resolver = SpeciesResolver({"Pup": "CANINE", "hamster": "EXOTIC"})
    assert resolver.resolve("pup") == Species.CANINE
    assert resolver.resolve("pups") == Species.CANINE
    assert resolver.resolve("dog") is None


def test_custom_synonyms_do_not_leak_between_resolvers() -> None:
    SpeciesResolver({"pup": "CANINE"})
    assert SpeciesResolver().resolve("pup") is None


def test_invalid_species_code_rejected() -> None:
    with pytest.raises(ValueError):
        SpeciesResolver({"unicorn": "MYTHICAL"})


def test_table_is_read_only() -> None:
    resolver = SpeciesResolver()
    with pytest.raises(TypeError):
        resolver.table["pup"] = Species.CANINE  # type: ignore[index]


def test_filter_by_species_keeps_intersection(make_record) -> None:  # type: ignore
    dog = make_record("Rimadyl", species='["CANINE"]')
    both = make_record("Metacam", species='["CANINE", "FELINE"]')
    cow = make_record("Excede", species='["BOVINE"]')

    kept = filter_by_species([dog, both, cow], {Species.FELINE})
    assert kept == [both]


def test_filter_by_species_is_hard_exclusion(make_record) -> None:  # type: ignore
    dog = make_record("Rimadyl", species='["CANINE"]')
    cow = make_record("Excede", species='["BOVINE"]')
    assert filter_by_species([dog, cow], {Species.FELINE}) == []


def test_filter_by_species_inactive_without_request(make_record) -> None:  # type: ignore
    records = [make_record("A", species='["CANINE"]'), make_record("B")]
    assert filter_by_species(records, set()) == records


def test_filter_excludes_malformed_species(make_record) -> None:  # type: ignore
    broken = make_record("Legacy", species="not-json")
    missing = make_record("Unknown")
    wrong_shape = make_record("Odd", species='{"CANINE": true}')
    assert filter_by_species([broken, missing, wrong_shape], {Species.CANINE}) == []
