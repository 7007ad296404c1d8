"""Tests for the chat-completion client."""

from __future__ import annotations

import json

import pytest
import requests

from tdeecoach.config.settings import Settings
from tdeecoach.errors import ProviderError
from tdeecoach.llm import ChatClient, build_chat_client, parse_json_reply


def _response(status_code: int, body) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode()
    return response


class FakeSession:
    """Records posts and returns a prepared response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestChatClient:
    """Tests for ChatClient.complete and complete_json."""

    def test_complete(self) -> None:
        session = FakeSession(_response(200, _completion("  Hello!  ")))
        client = ChatClient("sk-test", base_url="https://llm.local/v1/", session=session)

        assert client.complete("sys", "hi", max_tokens=50) == "Hello!"

        url, kwargs = session.posts[0]
        assert url == "https://llm.local/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        payload = json.loads(kwargs["data"])
        assert payload["max_tokens"] == 50
        assert payload["messages"][0] == {"role": "system", "content": "sys"}

    def test_http_error(self) -> None:
        session = FakeSession(_response(503, {"error": "overloaded"}))
        client = ChatClient("sk-test", session=session)

        with pytest.raises(ProviderError) as exc_info:
            client.complete("sys", "hi")
        assert exc_info.value.status_code == 503

    def test_transport_error(self) -> None:
        session = FakeSession(error=requests.ConnectionError("refused"))
        with pytest.raises(ProviderError):
            ChatClient("sk-test", session=session).complete("sys", "hi")

    def test_empty_completion(self) -> None:
        session = FakeSession(_response(200, _completion("   ")))
        with pytest.raises(ProviderError):
            ChatClient("sk-test", session=session).complete("sys", "hi")

    @pytest.mark.parametrize(
        "body",
        [
            ["not", "an", "object"],
            {"choices": ["text"]},
            {"choices": {"0": {"message": {"content": "hi"}}}},
            {"choices": [{"message": "hi"}]},
            {"choices": [{"message": {"content": 42}}]},
        ],
    )
    def test_malformed_completion(self, body) -> None:
        session = FakeSession(_response(200, body))
        with pytest.raises(ProviderError):
            ChatClient("sk-test", session=session).complete("sys", "hi")

    def test_complete_json(self) -> None:
        content = '```json\n{"adherence_score": 7}\n```'
        session = FakeSession(_response(200, _completion(content)))
        client = ChatClient("sk-test", session=session)
        assert client.complete_json("sys", "hi") == {"adherence_score": 7}


class TestParseJsonReply:
    """Tests for parse_json_reply."""

    def test_plain_object(self) -> None:
        assert parse_json_reply('{"a": 1}') == {"a": 1}

    def test_invalid_json(self) -> None:
        with pytest.raises(ProviderError):
            parse_json_reply("not json")

    def test_non_object(self) -> None:
        with pytest.raises(ProviderError):
            parse_json_reply("[1, 2]")


class TestBuildChatClient:
    """Tests for build_chat_client."""

    def test_disabled(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        settings = Settings()
        settings.ai.enabled = False
        assert build_chat_client(settings) is None

    def test_missing_key(self, monkeypatch) -> None:
        monkeypatch.delenv("TDEECOACH_TEST_KEY", raising=False)
        settings = Settings()
        settings.ai.api_key_env = "TDEECOACH_TEST_KEY"
        assert build_chat_client(settings) is None

    def test_configured(self, monkeypatch) -> None:
        monkeypatch.setenv("TDEECOACH_TEST_KEY", "sk-test")
        settings = Settings()
        settings.ai.api_key_env = "TDEECOACH_TEST_KEY"
        settings.ai.model = "local-model"

        client = build_chat_client(settings)
        assert client is not None
        assert client.api_key == "sk-test"
        assert client.model == "local-model"
