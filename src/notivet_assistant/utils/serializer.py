# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codex

import json
from enum import Enum
from typing import Iterable, List, Optional, Type, TypeVar

from loguru import logger

E = TypeVar("E", bound=Enum)


def parse_enum_list(raw: Optional[str], enum_cls: Type[E]) -> List[E]:
    """
    Parses a serialized JSON array of enum values (e.g. '["CANINE", "FELINE"]').

    Missing, empty, non-list or unparseable payloads yield an empty list.
    Unknown values are dropped. Never raises, so one bad record cannot
    fail a whole query.
    """
    if not raw or not raw.strip():
        return []

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.debug(f"Unparseable {enum_cls.__name__} payload {raw!r}: {e}")
        return []

    if not isinstance(data, list):
        logger.debug(f"{enum_cls.__name__} payload is not a list: {raw!r}")
        return []

    values: List[E] = []
    for item in data:
        try:
            member = enum_cls(item)
        except (ValueError, TypeError):
            continue
        if member not in values:
            values.append(member)
    return values


def dump_enum_list(values: Iterable[Enum]) -> str:
    """Serializes enum members back into the stored JSON array form."""
    return json.dumps([v.value for v in values])
