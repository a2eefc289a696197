# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import List

from notivet_assistant.schemas import DrugDigest

SYSTEM_PROMPT = """You are NotiVet, a veterinary drug assistant for licensed HCPs.
Use the provided drug database excerpts to answer the user's question.
- Be concise and clinically helpful.
- Prefer authoritative info from the provided sources.
- If unavailable in sources, clearly say you are uncertain.
- Include species-appropriateness and safety when relevant.
- Do not fabricate data or dosing that isn't in the sources."""

NO_MATCH_TEXT = (
    "(No directly matching entries found; answer based on general guidance and recommend checking database.)"
)


def format_source(index: int, drug: DrugDigest) -> str:
    header = f"Source {index} - {drug.name}"
    if drug.generic_name:
        header += f" (Generic: {drug.generic_name})"
    if drug.trade_name:
        header += f" | Trade: {drug.trade_name}"
    if drug.product_code:
        header += f" | Code: {drug.product_code}"

    lines = [
        header,
        f"Manufacturer: {drug.manufacturer or ''}",
        f"Active Ingredient: {drug.active_ingredient or ''}",
        f"Species: {', '.join(s.value for s in drug.species)}",
        f"Delivery: {', '.join(m.value for m in drug.delivery_methods)}",
    ]
    if drug.dosage:
        lines.append(f"Dosage: {drug.dosage}")
    if drug.withdrawal_time:
        lines.append(f"Withdrawal: {drug.withdrawal_time}")
    if drug.contraindications:
        lines.append(f"Contraindications: {drug.contraindications}")
    if drug.warnings:
        lines.append(f"Warnings: {drug.warnings}")
    if drug.description:
        lines.append(f"Notes: {drug.description}")
    return "\n".join(lines) + "\n"


def build_sources_text(drugs: List[DrugDigest]) -> str:
    return "\n---\n".join(format_source(i, d) for i, d in enumerate(drugs, start=1))


def build_user_content(query: str, drugs: List[DrugDigest]) -> str:
    sources = build_sources_text(drugs) or NO_MATCH_TEXT
    return f"User question:\n{query}\n\nDrug database excerpts:\n{sources}"
