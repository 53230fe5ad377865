# tests/test_config.py
from jobai.config import Config, EnvConfigProvider


def test_blank_values_become_none():
    cfg = Config(base_url="  ", api_key="", model=" gpt-4 ")
    assert cfg.base_url is None
    assert cfg.api_key is None
    assert cfg.model == "gpt-4"


def test_defaults(monkeypatch):
    monkeypatch.delenv("REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("TEMPERATURE", raising=False)
    cfg = Config(_env_file=None)
    assert cfg.request_timeout == 60
    assert cfg.read_timeout is None
    assert cfg.temperature == 0.5


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://api.example.com/v1")
    monkeypatch.setenv("API_KEY", "sk-env")
    monkeypatch.setenv("MODEL", "o3")
    provider = EnvConfigProvider(Config.from_env())
    assert provider.get("BASE_URL") == "https://api.example.com/v1"
    assert provider.get("API_KEY") == "sk-env"
    assert provider.get("MODEL") == "o3"
    assert provider.get("UNKNOWN") is None
