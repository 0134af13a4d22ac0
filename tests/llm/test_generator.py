"""Tests for the description generator."""

from __future__ import annotations

import json

import pytest

from diffscribe.errors import ParseError, RemoteError
from diffscribe.llm.generator import DescriptionGenerator
from diffscribe.prompting.constants import SYSTEM_PROMPT


def _completion(content: str) -> str:
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


def test_generate_posts_chat_completion(transport_factory) -> None:
    transport = transport_factory((200, _completion("## Summary\nAdds a greeting.")))
    generator = DescriptionGenerator("tok", transport=transport)

    result = generator.generate("## Summary\n<!-- what -->", "", "+print('hi')")

    assert result == "## Summary\nAdds a greeting."
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url == "https://models.inference.ai.azure.com/chat/completions"
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["Content-Type"] == "application/json"
    assert "X-GitHub-Api-Version" not in request.headers

    payload = transport.json_payload()
    assert payload["model"] == "gpt-4o-mini"
    assert payload["max_tokens"] == 2000
    assert payload["temperature"] == 0.3
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert payload["messages"][0]["content"] == SYSTEM_PROMPT
    user = payload["messages"][1]["content"]
    assert "## Summary\n<!-- what -->" in user
    assert "+print('hi')" in user


def test_generate_uses_configured_model_and_base_url(transport_factory) -> None:
    transport = transport_factory((200, _completion("ok")))
    generator = DescriptionGenerator(
        "tok",
        model="gpt-4o",
        base_url="https://models.example.com/",
        request_timeout=9.0,
        transport=transport,
    )

    generator.generate("t", "b", "d")

    assert transport.requests[0].url == "https://models.example.com/chat/completions"
    assert transport.requests[0].timeout == 9.0
    assert transport.json_payload()["model"] == "gpt-4o"


def test_generate_passes_content_through_untouched(transport_factory) -> None:
    content = "\n  ## Summary\n- [x] done\n<!-- keep -->\n\n"
    transport = transport_factory((200, _completion(content)))

    assert DescriptionGenerator("tok", transport=transport).generate("t", "", "d") == content


def test_generate_raises_remote_error_on_bad_status(transport_factory) -> None:
    transport = transport_factory((429, '{"error": "rate limited"}'))

    with pytest.raises(RemoteError) as excinfo:
        DescriptionGenerator("tok", transport=transport).generate("t", "", "d")

    assert excinfo.value.status_code == 429
    assert "rate limited" in str(excinfo.value)


def test_generate_raises_parse_error_on_zero_choices(transport_factory) -> None:
    transport = transport_factory((200, '{"choices": []}'))

    with pytest.raises(ParseError):
        DescriptionGenerator("tok", transport=transport).generate("t", "", "d")


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "[]",
        "{}",
        '{"choices": "nope"}',
        '{"choices": [{"message": {}}]}',
        '{"choices": [{"text": "legacy"}]}',
    ],
)
def test_generate_raises_parse_error_on_malformed_body(transport_factory, body: str) -> None:
    transport = transport_factory((200, body))

    with pytest.raises(ParseError):
        DescriptionGenerator("tok", transport=transport).generate("t", "", "d")
