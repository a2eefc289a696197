# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from notivet_assistant import __version__
from notivet_assistant.exceptions import InvalidQueryError
from notivet_assistant.loader import StoreLoader
from notivet_assistant.pipeline import assistant_ask, assistant_search, initialize
from notivet_assistant.utils.logger import logger

app = typer.Typer(
    name="notivet-assistant",
    help="CLI for notivet-assistant: veterinary drug lookup for HCPs.",
    add_completion=False,
)

StoreOption = Annotated[
    Optional[Path],
    typer.Option("--store", "-s", help="Path to the DuckDB drug store (defaults to NOTIVET_STORE_PATH)"),
]


@app.command("init-store")
def init_store(
    path: Annotated[Path, typer.Argument(help="Path of the DuckDB file to create")],
) -> None:
    """
    Create an empty drug store.
    """
    try:
        created = StoreLoader(path).init_store()
        typer.echo(f"Drug store ready at {created}")
    except Exception:
        logger.exception("Store initialization failed")
        sys.exit(1)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Free-text drug question")],
    store: StoreOption = None,
) -> None:
    """
    Rank drug records for a query and print them as JSON.
    """
    try:
        initialize(str(store) if store else None)
        result = assistant_search(query)
        typer.echo(result.model_dump_json(indent=2, by_alias=True))
    except InvalidQueryError as e:
        typer.echo(str(e), err=True)
        sys.exit(2)
    except Exception:
        logger.exception("Search Failed")
        sys.exit(1)


@app.command()
def ask(
    query: Annotated[str, typer.Argument(help="Free-text drug question")],
    store: StoreOption = None,
) -> None:
    """
    Answer a question grounded on the drug store.
    """
    try:
        initialize(str(store) if store else None)
        answer = assistant_ask(query)
    except InvalidQueryError as e:
        typer.echo(str(e), err=True)
        sys.exit(2)
    except Exception:
        logger.exception("Ask Failed")
        sys.exit(1)

    if answer.generation_status == "ok":
        typer.echo(answer.answer or "")
    else:
        typer.echo(f"[answer unavailable: {answer.detail}]", err=True)
    if answer.sources:
        typer.echo(f"Sources: {', '.join(answer.sources)}")
    if answer.generation_status != "ok":
        sys.exit(3)


@app.command()
def version() -> None:
    """Print the version of notivet-assistant."""
    typer.echo(f"notivet-assistant v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()  # pragma: no cover
