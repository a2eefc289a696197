# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import Any, List, Sequence, Tuple

import duckdb
from loguru import logger

from notivet_assistant.constants import DRUG_COLUMNS, DRUG_TABLE, SEARCHABLE_FIELDS
from notivet_assistant.exceptions import RetrievalError
from notivet_assistant.interfaces import TokenClause
from notivet_assistant.schemas import DrugRecord

_SELECT = f"SELECT {', '.join(DRUG_COLUMNS)} FROM {DRUG_TABLE}"
_ORDER = "ORDER BY created_at DESC NULLS LAST, id"


def create_schema(con: duckdb.DuckDBPyConnection) -> None:
    """Creates the drug table if it does not exist."""
    text_columns = ",\n".join(f"    {field} VARCHAR" for field in SEARCHABLE_FIELDS)
    con.execute(f"""
        CREATE TABLE IF NOT EXISTS {DRUG_TABLE} (
            id VARCHAR PRIMARY KEY,
        {text_columns},
            species VARCHAR,
            delivery_methods VARCHAR,
            created_at TIMESTAMP DEFAULT current_timestamp
        )
    """)


def _clause_sql(clause: TokenClause) -> Tuple[str, List[Any]]:
    """
    One token -> OR across every searchable field (plus species when the token names one).
    Tokens are [a-z0-9] only, so they carry no LIKE wildcards.
    """
    predicates = [f"{field} ILIKE ?" for field in SEARCHABLE_FIELDS]
    params: List[Any] = [f"%{clause.token}%"] * len(SEARCHABLE_FIELDS)
    if clause.species is not None:
        predicates.append("species LIKE ?")
        params.append(f"%{clause.species.value}%")
    return "(" + " OR ".join(predicates) + ")", params


class DuckDBDrugStore:
    """
    Read-only drug record store backed by a DuckDB `drug` table.
    """

    def __init__(self, duckdb_conn: duckdb.DuckDBPyConnection):
        self.duckdb_conn = duckdb_conn

        # Verify table exists
        try:
            self.duckdb_conn.execute(f"{_SELECT} LIMIT 0")
        except Exception as e:
            logger.error(f"Table '{DRUG_TABLE}' not found or invalid: {e}")
            raise ValueError(f"Table '{DRUG_TABLE}' is missing or has an unexpected schema.") from e

    def find_matching(self, clauses: Sequence[TokenClause], require_all: bool, limit: int) -> List[DrugRecord]:
        if not clauses:
            return []

        parts = []
        params: List[Any] = []
        for clause in clauses:
            sql, clause_params = _clause_sql(clause)
            parts.append(sql)
            params.extend(clause_params)

        joiner = " AND " if require_all else " OR "
        query = f"{_SELECT} WHERE {joiner.join(parts)} {_ORDER} LIMIT ?"
        params.append(limit)
        return self._fetch(query, params)

    def recent(self, limit: int) -> List[DrugRecord]:
        return self._fetch(f"{_SELECT} {_ORDER} LIMIT ?", [limit])

    def close(self) -> None:
        self.duckdb_conn.close()

    def _fetch(self, query: str, params: List[Any]) -> List[DrugRecord]:
        try:
            rows = self.duckdb_conn.execute(query, params).fetchall()
        except duckdb.Error as e:
            logger.error(f"Drug store query failed: {e}")
            raise RetrievalError(f"Drug store query failed: {e}") from e
        return [DrugRecord.from_row(row) for row in rows]
