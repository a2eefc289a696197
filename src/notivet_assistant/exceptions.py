# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex


class AssistantError(Exception):
    """Base class for drug assistant errors."""


class InvalidQueryError(AssistantError, ValueError):
    """
    The query is empty or contains only punctuation/whitespace.
    Raised before any store access.
    """

    def __init__(self, message: str = "Query is required"):
        super().__init__(message)


class RetrievalError(AssistantError, RuntimeError):
    """The drug store failed while fetching candidates."""


class GenerationError(AssistantError, RuntimeError):
    """Base class for text-generation failures."""


class GenerationUnavailableError(GenerationError):
    """The generation service is unconfigured, unauthorized or unreachable."""


class GenerationFailedError(GenerationError):
    """The generation service answered with an unexpected error status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
