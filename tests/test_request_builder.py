# tests/test_request_builder.py - 请求构建测试
import pytest
from pydantic import ValidationError
from jobai.endpoint import ApiShape
from jobai.request_builder import build, build_headers


def test_chat_body_uses_messages():
    spec, body, _ = build(ApiShape.CHAT_COMPLETIONS, "https://x/v1/chat/completions",
                          "gpt-4", "你好", "sk-test")
    assert body == {
        "model": "gpt-4",
        "temperature": 0.5,
        "messages": [{"role": "user", "content": "你好"}],
    }
    assert spec.temperature == 0.5


def test_responses_body_uses_input():
    _, body, _ = build(ApiShape.RESPONSES, "https://x/v1/responses", "o3", "你好", "sk-test")
    assert body["input"] == "你好"
    assert "messages" not in body
    assert body["model"] == "o3"
    assert body["temperature"] == 0.5


def test_headers_carry_both_auth_styles():
    headers = build_headers("sk-test")
    assert headers["Authorization"] == "Bearer sk-test"
    assert headers["api-key"] == "sk-test"
    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json"


def test_request_spec_is_immutable():
    spec, _, _ = build(ApiShape.RESPONSES, "https://x/v1/responses", "o3", "hi", "k")
    with pytest.raises(ValidationError):
        spec.prompt_text = "changed"
