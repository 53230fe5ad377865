"""Configuration management using Pydantic BaseSettings."""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 配置键（与设置表中的 key 一致）
BASE_URL = "BASE_URL"
API_KEY = "API_KEY"
MODEL = "MODEL"
AI_KEYS = (BASE_URL, API_KEY, MODEL)


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # AI settings
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None

    # HTTP settings
    request_timeout: float = 60.0
    read_timeout: Optional[float] = None
    temperature: float = 0.5

    # System settings
    db_path: str = "jobai.db"
    timezone: str = "Asia/Shanghai"
    log_level: str = "INFO"

    @field_validator("base_url", "api_key", "model", mode="before")
    @classmethod
    def strip_blank(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls()

    def ai_settings(self) -> Dict[str, Optional[str]]:
        return {BASE_URL: self.base_url, API_KEY: self.api_key, MODEL: self.model}


class EnvConfigProvider:
    """直接从环境变量 / .env 读取 AI 配置"""

    def __init__(self, cfg: Config):
        self.cfg = cfg

    def get(self, key: str) -> Optional[str]:
        return self.cfg.ai_settings().get(key)
