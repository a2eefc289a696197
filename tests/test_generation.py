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

import httpx
import pytest

from notivet_assistant.config import Settings
from notivet_assistant.exceptions import GenerationFailedError, GenerationUnavailableError
from notivet_assistant.generation import OpenAIChatGenerator


def _generator(handler, api_key: str = "sk-test") -> OpenAIChatGenerator:  # type: ignore
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OpenAIChatGenerator(api_key=api_key, client=client)


def test_complete_success() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "Give 2 mg/lb."}}]})

    answer = _generator(handler).complete("system text", "user text")

    assert answer == "Give 2 mg/lb."
    assert seen["url"] == "https://api.openai.com/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-4o"
    assert seen["body"]["temperature"] == 0.2
    assert seen["body"]["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "user text"},
    ]


def test_complete_empty_choices() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    assert _generator(handler).complete("s", "u") == ""


def test_missing_key_is_unavailable_without_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(GenerationUnavailableError, match="not configured"):
        _generator(handler, api_key="  ").complete("s", "u")


@pytest.mark.parametrize("status", [401, 403])
def test_unauthorized_is_unavailable(status: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"error": "bad key"})

    with pytest.raises(GenerationUnavailableError, match="unauthorized"):
        _generator(handler).complete("s", "u")


def test_server_error_is_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream exploded")

    with pytest.raises(GenerationFailedError) as exc_info:
        _generator(handler).complete("s", "u")
    assert exc_info.value.status_code == 500


def test_non_json_body_is_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    with pytest.raises(GenerationFailedError, match="non-JSON"):
        _generator(handler).complete("s", "u")


def test_connection_error_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GenerationUnavailableError, match="unreachable"):
        _generator(handler).complete("s", "u")


def test_timeout_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(GenerationUnavailableError, match="Timed out"):
        _generator(handler).complete("s", "u")


def test_from_settings() -> None:
    settings = Settings(
        openai_api_key="sk-abc",
        openai_base_url="https://llm.internal/v1/",
        openai_model="gpt-4o-mini",
        temperature=0.0,
        _env_file=None,
    )
    gen = OpenAIChatGenerator.from_settings(settings)
    try:
        assert gen.api_key == "sk-abc"
        assert gen.base_url == "https://llm.internal/v1"
        assert gen.model == "gpt-4o-mini"
        assert gen.temperature == 0.0
    finally:
        gen.close()


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "an", "object"],
        {"choices": "x"},
        {"choices": ["x"]},
        {"choices": [{"message": "plain text"}]},
    ],
)
def test_unexpected_payload_shape_is_failure(payload: object) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    with pytest.raises(GenerationFailedError, match="unexpected response") as exc_info:
        _generator(handler).complete("s", "u")
    assert exc_info.value.status_code == 200
