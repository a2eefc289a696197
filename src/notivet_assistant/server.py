# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, List, Optional, cast

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from notivet_assistant.assistant import DrugAssistant
from notivet_assistant.exceptions import InvalidQueryError, RetrievalError
from notivet_assistant.pipeline import AssistantContext
from notivet_assistant.schemas import CamelModel, DrugDigest, MatchResult
from notivet_assistant.utils.logger import logger


# Pydantic Models for Requests
class QueryRequest(BaseModel):
    query: str = ""

    @field_validator("query", mode="before")
    @classmethod
    def coerce_query(cls, value: Any) -> str:
        # null, false and 0 all mean "no query"
        if not value:
            return ""
        return str(value)


class ChatResponse(CamelModel):
    answer: Optional[str] = None
    sources: List[str] = []
    matched_drugs: List[DrugDigest] = []
    error: Optional[str] = None


_GENERATION_STATUS_CODES = {"ok": 200, "unavailable": 503, "failed": 502}


# Lifespan Management
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager to open the drug store on startup.
    """
    logger.info("Initializing NotiVet Assistant Server")

    try:
        AssistantContext.initialize()
        app.state.assistant = AssistantContext.get_instance().assistant
        logger.info("Drug Assistant Loaded Successfully.")
    except Exception as e:
        logger.exception("Failed to initialize Drug Assistant.")
        # We raise to ensure the server doesn't start in a broken state
        raise RuntimeError(f"Server initialization failed: {e}") from e

    yield

    logger.info("Shutting down NotiVet Assistant Server.")
    AssistantContext.shutdown()


app = FastAPI(title="NotiVet Drug Assistant API", lifespan=lifespan)


@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RetrievalError)
async def retrieval_error_handler(request: Request, exc: RetrievalError) -> JSONResponse:
    logger.error(f"Chat error: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def _assistant() -> DrugAssistant:
    return cast(DrugAssistant, app.state.assistant)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint. Returns status ready once the store is open.
    """
    return {"status": "ready"}


@app.post("/search", response_model=MatchResult)
async def search(request: QueryRequest) -> MatchResult:
    """
    Rank drug records for a free-text query, without generating an answer.
    """
    return _assistant().search(request.query.strip())


@app.post("/chat", response_model=ChatResponse)
async def chat(request: QueryRequest) -> JSONResponse:
    """
    Answer a question grounded on the best matching drug records.

    503 when the generation service is unavailable and 502 when it fails;
    both still carry the matched drugs.
    """
    result = _assistant().ask(request.query.strip())
    body = ChatResponse(
        answer=result.answer if result.generation_status == "ok" else None,
        sources=result.sources,
        matched_drugs=result.matched_drugs,
        error=result.detail,
    )
    return JSONResponse(
        status_code=_GENERATION_STATUS_CODES[result.generation_status],
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
