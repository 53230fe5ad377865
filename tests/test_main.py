# tests/test_main.py - 命令行测试
import json
from unittest.mock import Mock, patch
from jobai.main import main
from jobai.store import SettingsStore


def test_settings_set_and_show(db_path, capsys):
    assert main(["--db", db_path, "settings", "set", "MODEL", "o3"]) == 0
    out = capsys.readouterr().out
    assert "MODEL: o3" in out
    assert SettingsStore(db_path).get("MODEL") == "o3"


def test_ai_show_creates_default(db_path, capsys):
    assert main(["--db", db_path, "ai", "show"]) == 0
    record = json.loads(capsys.readouterr().out)
    assert record["id"] == 1


def test_ai_delete_missing(db_path):
    assert main(["--db", db_path, "ai", "delete", "42"]) == 1


@patch('requests.post')
def test_ask_uses_stored_settings(mock_post, db_path, capsys):
    store = SettingsStore(db_path)
    store.set("BASE_URL", "https://api.example.com")
    store.set("API_KEY", "sk-db")
    store.set("MODEL", "gpt-4")
    mock_post.return_value = Mock(status_code=200, text='{"choices":[{"message":{"content":"pong"}}]}')

    assert main(["--db", db_path, "ask", "ping"]) == 0
    assert "pong" in capsys.readouterr().out
    assert mock_post.call_args[0][0] == "https://api.example.com/v1/chat/completions"


@patch('requests.post')
def test_ask_failure_exits_nonzero(mock_post, db_path):
    store = SettingsStore(db_path)
    store.set("BASE_URL", "https://api.example.com")
    store.set("API_KEY", "sk-db")
    mock_post.return_value = Mock(status_code=500, text="oops")

    assert main(["--db", db_path, "ask", "ping"]) == 1


def test_invalid_log_level_exits_nonzero(db_path, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "NOT_A_LEVEL")
    assert main(["--db", db_path, "settings", "show"]) == 1


def test_unopenable_db_exits_nonzero(tmp_path):
    db_path = str(tmp_path / "missing" / "jobai.db")
    assert main(["--db", db_path, "settings", "show"]) == 1
