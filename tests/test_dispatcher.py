# tests/test_dispatcher.py - 发送与结果分类测试
from unittest.mock import Mock, patch
import requests
from jobai.dispatcher import StructuredError, Success, TransportFailure, send


@patch('requests.post')
def test_send_success(mock_post):
    mock_post.return_value = Mock(status_code=200, text='{"output_text":"hi"}')

    outcome = send("https://x/v1/responses", {"input": "hi"}, {"api-key": "k"})

    assert outcome == Success('{"output_text":"hi"}', 200)
    _, kwargs = mock_post.call_args
    assert kwargs["json"] == {"input": "hi"}
    assert kwargs["headers"] == {"api-key": "k"}
    assert kwargs["timeout"] == (60, None)


@patch('requests.post')
def test_send_structured_error(mock_post):
    mock_post.return_value = Mock(status_code=400, text='{"error":"bad"}')

    outcome = send("https://x/v1/chat/completions", {}, {})

    assert isinstance(outcome, StructuredError)
    assert outcome.status_code == 400
    assert outcome.body == '{"error":"bad"}'
    mock_post.assert_called_once()


@patch('requests.post')
def test_send_transport_failure(mock_post):
    err = requests.ConnectionError("connection refused")
    mock_post.side_effect = err

    outcome = send("https://x/v1/chat/completions", {}, {}, timeout=5)

    assert isinstance(outcome, TransportFailure)
    assert outcome.cause is err
    mock_post.assert_called_once()


@patch('requests.post')
def test_send_custom_timeouts(mock_post):
    mock_post.return_value = Mock(status_code=200, text="{}")
    send("https://x", {}, {}, timeout=10, read_timeout=120)
    _, kwargs = mock_post.call_args
    assert kwargs["timeout"] == (10, 120)
