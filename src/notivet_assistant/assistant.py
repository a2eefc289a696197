# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

from typing import Optional

from loguru import logger

from notivet_assistant.exceptions import GenerationFailedError, GenerationUnavailableError
from notivet_assistant.interfaces import TextGenerator
from notivet_assistant.matcher import DrugMatcher
from notivet_assistant.prompts import SYSTEM_PROMPT, build_user_content
from notivet_assistant.schemas import AssistantAnswer, MatchResult


class DrugAssistant:
    """
    Answers HCP questions from the drug database.

    Matching always runs first; a missing or failing generation service only
    costs the natural-language answer, never the ranked drugs.
    """

    def __init__(self, matcher: DrugMatcher, generator: Optional[TextGenerator] = None):
        self.matcher = matcher
        self.generator = generator

    def search(self, query: str) -> MatchResult:
        return self.matcher.match(query)

    def ask(self, query: str) -> AssistantAnswer:
        result = self.matcher.match(query)
        answer = AssistantAnswer(
            query=query,
            sources=result.sources,
            matched_drugs=result.matched_drugs,
        )

        if self.generator is None:
            logger.warning("No generation service configured; returning matches only")
            answer.generation_status = "unavailable"
            answer.detail = "Chatbot is not configured on this deployment. Please set OPENAI_API_KEY on the server."
            return answer

        user_content = build_user_content(query, result.matched_drugs)
        try:
            answer.answer = self.generator.complete(SYSTEM_PROMPT, user_content)
        except GenerationUnavailableError as e:
            logger.warning(f"Generation unavailable: {e}")
            answer.generation_status = "unavailable"
            answer.detail = str(e)
        except GenerationFailedError as e:
            logger.warning(f"Generation failed: {e}")
            answer.generation_status = "failed"
            answer.detail = str(e)

        return answer
