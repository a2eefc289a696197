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
from typing import Union

import duckdb
from loguru import logger

from notivet_assistant.store import DuckDBDrugStore, create_schema


class StoreLoader:
    """
    Responsible for opening and verifying the drug store database file.
    """

    def __init__(self, store_path: Union[str, Path]):
        self.store_path = Path(store_path)

    def load_store(self) -> DuckDBDrugStore:
        """
        Opens the store read-only and verifies the drug table.
        """
        if not self.store_path.exists():
            raise FileNotFoundError(f"Drug store not found at: {self.store_path}")
        if self.store_path.is_dir():
            raise ValueError(f"Drug store path is a directory: {self.store_path}")

        logger.info(f"Connecting to DuckDB at {self.store_path}")
        try:
            con = duckdb.connect(str(self.store_path), read_only=True)
            # Verify it's a valid DB by running a simple query
            con.execute("SELECT 1")
        except Exception as e:
            logger.error(f"Failed to connect to DuckDB: {e}")
            raise ValueError(f"Failed to initialize DuckDB connection: {e}") from e

        return DuckDBDrugStore(con)

    def init_store(self) -> Path:
        """
        Creates the database file (and parent directories) with an empty drug table.
        Existing data is left untouched.
        """
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Initializing drug store at {self.store_path}")

        con = duckdb.connect(str(self.store_path))
        try:
            create_schema(con)
        except Exception as e:
            logger.error(f"Failed to create drug store schema: {e}")
            raise RuntimeError(f"Store initialization failed: {e}") from e
        finally:
            con.close()

        return self.store_path
