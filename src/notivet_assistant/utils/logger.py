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
from typing import Any

from loguru import logger as _logger

from notivet_assistant.config import get_settings

__all__ = ["logger", "configure_logging"]

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """Replaces all loguru handlers with a single stderr sink."""
    _logger.remove()
    _logger.add(sys.stderr, level=(level or get_settings().log_level).upper(), format=_FORMAT)


configure_logging()

logger: Any = _logger
