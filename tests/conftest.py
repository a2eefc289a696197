# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from pathlib import Path
from typing import Any, Callable, Dict, Generator, List

import duckdb
import pytest

from notivet_assistant.loader import StoreLoader
from notivet_assistant.pipeline import AssistantContext
from notivet_assistant.schemas import DrugRecord
from notivet_assistant.store import DuckDBDrugStore, create_schema

# --- Sample Data ---

RIMADYL: Dict[str, Any] = {
    "id": "drug-rimadyl",
    "name": "Rimadyl",
    "generic_name": "Carprofen",
    "active_ingredient": "Carprofen",
    "manufacturer": "Zoetis",
    "description": "Chewable tablets for relief of pain and inflammation associated with osteoarthritis in dogs.",
    "dosage": "2 mg/lb once daily",
    "contraindications": "Known hypersensitivity to carprofen.",
    "warnings": "Keep out of reach of children.",
    "trade_name": "Rimadyl",
    "species": '["CANINE"]',
    "delivery_methods": '["ORAL"]',
    "created_at": "2024-03-01 10:00:00",
}

METACAM: Dict[str, Any] = {
    "id": "drug-metacam",
    "name": "Metacam",
    "generic_name": "Meloxicam",
    "active_ingredient": "Meloxicam",
    "manufacturer": "Boehringer Ingelheim",
    "description": "NSAID oral suspension to control pain in dogs and cats.",
    "trade_name": "Metacam Oral Suspension",
    "species": '["CANINE", "FELINE"]',
    "delivery_methods": '["ORAL"]',
    "created_at": "2024-02-01 10:00:00",
}

EXCEDE: Dict[str, Any] = {
    "id": "drug-excede",
    "name": "Excede",
    "generic_name": "Ceftiofur",
    "active_ingredient": "Ceftiofur crystalline free acid",
    "manufacturer": "Zoetis",
    "description": "Single-dose antibiotic for bovine respiratory disease in cattle.",
    "withdrawal_time": "13 days",
    "trade_name": "Excede",
    "species": '["BOVINE", "PORCINE"]',
    "delivery_methods": '["INJECTABLE"]',
    "created_at": "2024-01-01 10:00:00",
}

REVOLUTION: Dict[str, Any] = {
    "id": "drug-revolution",
    "name": "Revolution Plus",
    "generic_name": "Selamectin and sarolaner",
    "active_ingredient": "Selamectin",
    "manufacturer": "Zoetis",
    "description": "Monthly flea and tick protection for kittens and adult felines.",
    "trade_name": "Revolution Plus",
    "species": '["FELINE"]',
    "delivery_methods": '["TOPICAL"]',
    "created_at": "2023-12-01 10:00:00",
}

LEGACY: Dict[str, Any] = {
    "id": "drug-legacy",
    "name": "Legacy Ointment",
    "manufacturer": "Old Labs",
    "description": "Wound ointment.",
    "species": "not-json",
    "delivery_methods": None,
    "created_at": "2023-11-01 10:00:00",
}

ALL_DRUGS: List[Dict[str, Any]] = [RIMADYL, METACAM, EXCEDE, REVOLUTION, LEGACY]


def _write_store(path: Path, drugs: List[Dict[str, Any]]) -> Path:
    con = duckdb.connect(str(path))
    create_schema(con)
    for drug in drugs:
        columns = list(drug.keys())
        placeholders = ", ".join("?" for _ in columns)
        con.execute(
            f"INSERT INTO drug ({', '.join(columns)}) VALUES ({placeholders})",
            [drug[c] for c in columns],
        )
    con.close()
    return path


# --- Fixtures ---


@pytest.fixture
def synthetic_store_path(tmp_path: Path) -> Path:
    """
    Creates a temporary DuckDB drug store with five records:
    Rimadyl (dogs), Metacam (dogs, cats), Excede (cattle, pigs),
    Revolution Plus (cats) and one record with a malformed species payload.
    """
    return _write_store(tmp_path / "notivet.duckdb", ALL_DRUGS)


@pytest.fixture
def canine_only_store_path(tmp_path: Path) -> Path:
    """Store where the only carprofen product is labelled for dogs and nothing is bovine."""
    return _write_store(tmp_path / "canine.duckdb", [RIMADYL, METACAM])


@pytest.fixture
def drug_store(synthetic_store_path: Path) -> DuckDBDrugStore:
    return StoreLoader(synthetic_store_path).load_store()


@pytest.fixture
def make_record() -> Callable[..., DrugRecord]:
    counter = {"n": 0}

    def _make(name: str, **fields: Any) -> DrugRecord:
        counter["n"] += 1
        fields.setdefault("id", f"rec-{counter['n']}")
        return DrugRecord(name=name, **fields)

    return _make


@pytest.fixture
def reset_context() -> Generator[None, None, None]:
    AssistantContext.shutdown()
    yield
    AssistantContext.shutdown()
