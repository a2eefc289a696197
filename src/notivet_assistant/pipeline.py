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

from notivet_assistant.assistant import DrugAssistant
from notivet_assistant.config import Settings, get_settings
from notivet_assistant.generation import OpenAIChatGenerator
from notivet_assistant.loader import StoreLoader
from notivet_assistant.matcher import DrugMatcher
from notivet_assistant.schemas import AssistantAnswer, MatcherConfig, MatchResult
from notivet_assistant.utils.logger import logger


class AssistantContext:
    """
    Global context/singleton for accessing assistant services.
    """

    _instance: Optional["AssistantContext"] = None

    def __init__(self, store_path: Optional[str] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.store_path = store_path or self.settings.store_path
        logger.info(f"Initializing Assistant Context with store: {self.store_path}")

        self.loader = StoreLoader(self.store_path)
        self.store = self.loader.load_store()

        self.matcher = DrugMatcher(store=self.store, config=MatcherConfig())

        self.generator: Optional[OpenAIChatGenerator] = None
        if self.settings.has_generation:
            self.generator = OpenAIChatGenerator.from_settings(self.settings)
        else:
            logger.warning("OPENAI_API_KEY not set; chat answers are disabled, search still works")

        self.assistant = DrugAssistant(matcher=self.matcher, generator=self.generator)

    def close(self) -> None:
        """Releases the store connection and the generation client."""
        if self.generator is not None:
            self.generator.close()
        self.store.close()

    @classmethod
    def initialize(cls, store_path: Optional[str] = None, settings: Optional[Settings] = None) -> None:
        cls.shutdown()
        cls._instance = cls(store_path, settings)

    @classmethod
    def shutdown(cls) -> None:
        if cls._instance is not None:
            logger.info("Closing Assistant Context")
            cls._instance.close()
            cls._instance = None

    @classmethod
    def get_instance(cls) -> "AssistantContext":
        if cls._instance is None:
            raise RuntimeError("AssistantContext not initialized. Call initialize() first.")
        return cls._instance


# --- Public API Functions ---


def initialize(store_path: Optional[str] = None, settings: Optional[Settings] = None) -> None:
    """Initializes the assistant against a drug store."""
    AssistantContext.initialize(store_path, settings)


def assistant_search(query: str) -> MatchResult:
    """
    Ranks drug records for a free-text query.
    """
    ctx = AssistantContext.get_instance()
    return ctx.assistant.search(query)


def assistant_ask(query: str) -> AssistantAnswer:
    """
    Ranks drug records and asks the generation service for an answer grounded on them.
    """
    ctx = AssistantContext.get_instance()
    return ctx.assistant.ask(query)
